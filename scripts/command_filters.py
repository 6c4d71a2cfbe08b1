"""
Comma-separated CLI filters for protocols and chains.

    multi_protocol_filter("aave-v2,compound-v2") -> [Protocol.AaveV2, Protocol.CompoundV2]
    multi_chain_filter("ethereum,137")           -> [Chain.Ethereum, Chain.Polygon]

None (no flag given) means "no filter".
"""

from typing import List, Optional

from adapters.protocols import Protocol
from config.chains import Chain, ChainName


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def multi_protocol_filter(value: Optional[str]) -> Optional[List[Protocol]]:
    if value is None:
        return None
    protocols = []
    for part in _split(value):
        try:
            protocols.append(Protocol(part))
        except ValueError:
            valid = ", ".join(protocol.value for protocol in Protocol)
            raise ValueError(f"Unknown protocol '{part}' (expected one of: {valid})") from None
    return protocols


def parse_chain(value: str) -> Chain:
    """Accept a chain id (137), a member name (Polygon) or a chain name (matic)."""
    if value.isdigit():
        try:
            return Chain(int(value))
        except ValueError:
            raise ValueError(f"Unknown chain id: {value}") from None
    lowered = value.lower()
    for chain in Chain:
        if lowered in (chain.name.lower(), ChainName[chain]):
            return chain
    raise ValueError(f"Unknown chain: {value}")


def multi_chain_filter(value: Optional[str]) -> Optional[List[Chain]]:
    if value is None:
        return None
    return [parse_chain(part) for part in _split(value)]
