"""
Metadata key derivation.

A metadata file is identified by (protocol_id, product_id, chain_id, file_key).
From those four values we derive:

    * the file path, relative to the metadata root:
        adapters/<protocol-id>/products/<product-id>/metadata/<chain-name>.<file-key>.json
    * the identifier the registry binds the file to:
        <ProtocolKey><ProductId><ChainKey><FileKey>, e.g.
        AaveV2StableDebtTokenEthereumStableDebtTokenV2

Both derivations are pure; the registry edits rely on them being stable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from adapters.protocols import Protocol
from config.chains import Chain, ChainName

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")


def pascal_case(value: str) -> str:
    """'stable-debt-token-v2' -> 'StableDebtTokenV2'"""
    words = _WORD_RE.findall(value)
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def _protocol(protocol_id: Union[Protocol, str]) -> Protocol:
    return Protocol(protocol_id)


def _chain(chain_id: Union[Chain, int]) -> Chain:
    return Chain(int(chain_id))


def metadata_file_path(
    protocol_id: Union[Protocol, str],
    product_id: str,
    chain_id: Union[Chain, int],
    file_key: str,
) -> str:
    protocol = _protocol(protocol_id)
    chain = _chain(chain_id)
    return (
        f"adapters/{protocol.value}/products/{product_id}/metadata/"
        f"{ChainName[chain]}.{file_key}.json"
    )


def metadata_identifier(
    protocol_id: Union[Protocol, str],
    product_id: str,
    chain_id: Union[Chain, int],
    file_key: str,
) -> str:
    protocol = _protocol(protocol_id)
    chain = _chain(chain_id)
    identifier = f"{protocol.name}{pascal_case(product_id)}{chain.name}{pascal_case(file_key)}"
    if not identifier.isidentifier():
        raise ValueError(f"Cannot derive an identifier from {product_id!r} / {file_key!r}")
    return identifier


@dataclass(frozen=True)
class MetadataKey:
    protocol_id: Protocol
    product_id: str
    chain_id: Chain
    file_key: str

    @property
    def file_path(self) -> str:
        return metadata_file_path(self.protocol_id, self.product_id, self.chain_id, self.file_key)

    @property
    def identifier(self) -> str:
        return metadata_identifier(self.protocol_id, self.product_id, self.chain_id, self.file_key)


def metadata_key(
    *,
    protocol_id: Union[Protocol, str],
    product_id: str,
    chain_id: Union[Chain, int],
    file_key: str,
) -> MetadataKey:
    """Build a MetadataKey, accepting raw protocol ids and chain ids."""
    return MetadataKey(
        protocol_id=_protocol(protocol_id),
        product_id=product_id,
        chain_id=_chain(chain_id),
        file_key=file_key,
    )
