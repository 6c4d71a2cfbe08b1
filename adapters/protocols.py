"""
Protocol symbol table.

Member names are referenced by generated code (`Protocol.AaveV2`), values are
the protocol ids used in metadata paths and CLI filters.
"""

from enum import Enum


class Protocol(str, Enum):
    AaveV2 = "aave-v2"
    CompoundV2 = "compound-v2"
