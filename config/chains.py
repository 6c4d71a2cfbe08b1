"""
Chain symbol table.

Member names are referenced by generated code (`Chain.Ethereum`), values are
the EVM chain ids. ChainName gives the lowercase name used in metadata file
names and provider environment variables.
"""

from enum import IntEnum
from typing import Dict


class Chain(IntEnum):
    Ethereum = 1
    Optimism = 10
    Bsc = 56
    Polygon = 137
    Fantom = 250
    Base = 8453
    Arbitrum = 42161
    Avalanche = 43114
    Linea = 59144


ChainName: Dict[Chain, str] = {
    Chain.Ethereum: "ethereum",
    Chain.Optimism: "op",
    Chain.Bsc: "bsc",
    Chain.Polygon: "matic",
    Chain.Fantom: "ftm",
    Chain.Base: "base",
    Chain.Arbitrum: "arb",
    Chain.Avalanche: "avax",
    Chain.Linea: "linea",
}
