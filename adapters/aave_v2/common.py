"""
Aave V2 pool adapter base.

Metadata extraction:
1. Read the reserve list from the ProtocolDataProvider
2. For each reserve, resolve its (aToken, stableDebtToken, variableDebtToken)
3. Keep the token this product tracks (get_reserve_token_address)
4. Read ERC20 metadata for the protocol token and its underlying asset

The resulting metadata maps protocol token address -> token details:

    {
        '0x028171bCA77440897B824Ca71D1c56caC55b68A3': {
            'protocol_token': {'address': ..., 'name': ..., 'symbol': ..., 'decimals': ...},
            'underlying_token': {'address': ..., 'name': ..., 'symbol': ..., 'decimals': ...},
        },
    }
"""

from abc import abstractmethod
from typing import Any, Dict, Tuple

from web3 import Web3

from adapters.aave_v2.contracts import PROTOCOL_DATA_PROVIDER, PROTOCOL_DATA_PROVIDER_ABI
from adapters.base import ProtocolAdapter
from adapters.erc20 import ZERO_ADDRESS, get_token_metadata
from adapters.protocols import Protocol


class AaveBasePoolAdapter(ProtocolAdapter):
    protocol_id = Protocol.AaveV2

    async def get_protocol_tokens(self) -> Dict[str, Any]:
        data_provider_address = PROTOCOL_DATA_PROVIDER.get(self.chain_id)
        if data_provider_address is None:
            raise NotImplementedError(f"Aave v2 is not deployed on chain {self.chain_id}")

        data_provider = self.provider.eth.contract(
            address=Web3.to_checksum_address(data_provider_address),
            abi=PROTOCOL_DATA_PROVIDER_ABI,
        )
        reserves = await data_provider.functions.getAllReservesTokens().call()

        metadata: Dict[str, Any] = {}
        for _symbol, underlying in reserves:
            underlying = Web3.to_checksum_address(underlying)
            token_addresses = await data_provider.functions.getReserveTokensAddresses(underlying).call()
            protocol_token_address = Web3.to_checksum_address(self.get_reserve_token_address(token_addresses))

            # reserves without this token type (e.g. stable borrowing disabled)
            if protocol_token_address == ZERO_ADDRESS:
                continue

            metadata[protocol_token_address] = {
                "protocol_token": await get_token_metadata(self.provider, protocol_token_address),
                "underlying_token": await get_token_metadata(self.provider, underlying),
            }

        return metadata

    @abstractmethod
    def get_reserve_token_address(self, reserve_token_addresses: Tuple[str, str, str]) -> str:
        """Pick this product's token from (aToken, stableDebtToken, variableDebtToken)."""
        ...
