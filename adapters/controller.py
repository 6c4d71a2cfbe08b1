"""
AdaptersController: instantiates the registered adapters per chain and protocol.
"""

from typing import Dict, Optional

from adapters.base import ProtocolAdapter
from adapters.protocols import Protocol
from adapters.supported_protocols import SupportedProtocols, supported_protocols as default_supported_protocols
from config.chains import Chain
from metadata.errors import ProviderMissingError


class AdaptersController:
    def __init__(self, providers: Dict[Chain, object], supported_protocols: Optional[SupportedProtocols] = None):
        """
        :param providers: AsyncWeb3 provider per chain (see config.rpc_config.build_chain_providers).
        :param supported_protocols: registration table, defaults to adapters.supported_protocols.
        """
        self.providers = providers
        self.supported_protocols = (
            default_supported_protocols if supported_protocols is None else supported_protocols
        )
        self._cache: Dict[tuple, Dict[str, ProtocolAdapter]] = {}

    def fetch_chain_protocol_adapters(self, chain_id: Chain, protocol_id: Protocol) -> Dict[str, ProtocolAdapter]:
        """Return {product_id: adapter} in registration order (empty if none registered)."""
        cache_key = (chain_id, protocol_id)
        if cache_key in self._cache:
            return self._cache[cache_key]

        adapter_classes = self.supported_protocols.get(protocol_id, {}).get(chain_id, [])
        if adapter_classes and chain_id not in self.providers:
            raise ProviderMissingError(chain_id)

        adapters: Dict[str, ProtocolAdapter] = {}
        for adapter_cls in adapter_classes:
            adapter = adapter_cls(provider=self.providers[chain_id], chain_id=chain_id)
            if adapter.product_id in adapters:
                raise ValueError(
                    f"Duplicate product '{adapter.product_id}' for {protocol_id.value} on chain {chain_id}"
                )
            adapters[adapter.product_id] = adapter

        self._cache[cache_key] = adapters
        return adapters
