# adapters/base.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

from adapters.protocols import Protocol
from config.chains import Chain
from metadata.keys import MetadataKey


@dataclass(frozen=True)
class AdapterSettings:
    enable_position_detection_by_protocol_token_transfer: bool = True
    include_in_unwrap: bool = True
    version: int = 2


@dataclass(frozen=True)
class MetadataDetails:
    """What a metadata-producing capability returns when asked to write to file."""

    metadata: Any
    file_details: MetadataKey


class ProtocolAdapter(ABC):
    """
    Base interface for protocol adapters.
    One instance serves one (protocol, product, chain); chain access goes
    through the AsyncWeb3 provider handed in by the AdaptersController.

    Adapters that cannot produce metadata on a chain raise NotImplementedError.
    """
    protocol_id: Protocol
    product_id: str = ""
    adapter_settings: AdapterSettings = AdapterSettings()

    def __init__(self, provider, chain_id: Chain):
        self.provider = provider
        self.chain_id = chain_id

    @abstractmethod
    def get_protocol_details(self) -> Dict[str, Any]:
        ...

    async def get_protocol_tokens(self, write_to_file: bool = False) -> List[Dict[str, Any]]:
        """Return the protocol tokens for this product (MetadataDetails when write_to_file)."""
        raise NotImplementedError(f"{type(self).__name__} does not list protocol tokens")

    def make_protocol_details(self, *, name: str, description: str, site_url: str, icon_url: str, position_type: str) -> Dict[str, Any]:
        """
        Helper for adapter authors: standardized protocol details schema.
        """
        return {
            "protocol_id": self.protocol_id.value,
            "product_id": self.product_id,
            "chain_id": int(self.chain_id),
            "name": name,
            "description": description,
            "site_url": site_url,
            "icon_url": icon_url,
            "position_type": position_type,
        }


def is_metadata_builder(adapter: Any) -> bool:
    """True when the adapter exposes an explicit build_metadata() capability."""
    return callable(getattr(adapter, "build_metadata", None))
