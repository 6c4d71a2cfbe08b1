"""
Checksum validation for addresses found in metadata payloads.

Metadata files are committed to the repo and compared verbatim by downstream
code, so every address must be in EIP-55 checksum form
(Web3.to_checksum_address) before it is written.
"""

import re
from typing import Any, List

from web3 import Web3

ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")


def is_address_like(value: str) -> bool:
    return ADDRESS_RE.fullmatch(value) is not None


def get_metadata_invalid_addresses(metadata: Any) -> List[str]:
    """
    Walk a JSON-like payload and return every address-shaped string that is
    not checksummed. Dict keys are checked as well as values.

    Each offending value is reported once, in the order it was first seen.
    An empty list means the payload is valid.
    """
    invalid: List[str] = []
    seen = set()

    def check(value: str) -> None:
        if value in seen:
            return
        if is_address_like(value) and not Web3.is_checksum_address(value):
            seen.add(value)
            invalid.append(value)

    def walk(node: Any) -> None:
        if isinstance(node, str):
            check(node)
        elif isinstance(node, dict):
            for key, value in node.items():
                if isinstance(key, str):
                    check(key)
                walk(value)
        elif isinstance(node, (list, tuple)):
            for item in node:
                walk(item)

    walk(metadata)
    return invalid
