"""
Compound V2 supply market adapter

Metadata is built explicitly (build_metadata) from the Comptroller:
1. getAllMarkets() lists every cToken
2. underlying() resolves the supplied asset; cETH has no underlying() and
   maps to the native token
"""

from typing import Any, Dict

from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from adapters.base import AdapterSettings, MetadataDetails, ProtocolAdapter
from adapters.compound_v2.contracts import COMPTROLLER, COMPTROLLER_ABI, CTOKEN_ABI
from adapters.erc20 import ZERO_ADDRESS, get_token_metadata
from adapters.protocols import Protocol
from metadata.keys import metadata_key
from metadata.registry import get_metadata

FILE_KEY = "supply-market"


class CompoundV2SupplyMarketAdapter(ProtocolAdapter):
    protocol_id = Protocol.CompoundV2
    product_id = "supply-market"
    adapter_settings = AdapterSettings(version=1)

    def get_protocol_details(self):
        return self.make_protocol_details(
            name="Compound v2 Supply Market",
            description="Compound v2 defi adapter for supplied cTokens",
            site_url="https://compound.finance/",
            icon_url="https://compound.finance/favicon.ico",
            position_type="supply",
        )

    def _metadata_key(self):
        return metadata_key(
            protocol_id=self.protocol_id,
            product_id=self.product_id,
            chain_id=self.chain_id,
            file_key=FILE_KEY,
        )

    async def build_metadata(self, write_to_file: bool = False):
        comptroller_address = COMPTROLLER.get(self.chain_id)
        if comptroller_address is None:
            raise NotImplementedError(f"Compound v2 is not deployed on chain {self.chain_id}")

        comptroller = self.provider.eth.contract(
            address=Web3.to_checksum_address(comptroller_address),
            abi=COMPTROLLER_ABI,
        )
        markets = await comptroller.functions.getAllMarkets().call()

        metadata: Dict[str, Any] = {}
        for market in markets:
            market = Web3.to_checksum_address(market)
            c_token = self.provider.eth.contract(address=market, abi=CTOKEN_ABI)
            try:
                underlying = await c_token.functions.underlying().call()
            except (BadFunctionCallOutput, ContractLogicError):
                underlying = ZERO_ADDRESS

            metadata[market] = {
                "protocol_token": await get_token_metadata(self.provider, market),
                "underlying_token": await get_token_metadata(self.provider, underlying),
            }

        if write_to_file:
            return MetadataDetails(metadata=metadata, file_details=self._metadata_key())
        return metadata

    async def get_protocol_tokens(self, write_to_file: bool = False):
        if write_to_file:
            return await self.build_metadata(write_to_file=True)
        return get_metadata(self._metadata_key())
