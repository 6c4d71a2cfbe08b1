"""
Adapter registration table: protocol -> chain -> adapter classes.

Order matters. The metadata build walks protocols, then chains, then adapters
in the order they are listed here.
"""

from typing import Dict, List, Type

from adapters.aave_v2.a_token import AaveV2ATokenPoolAdapter
from adapters.aave_v2.stable_debt_token import AaveV2StableDebtTokenPoolAdapter
from adapters.aave_v2.variable_debt_token import AaveV2VariableDebtTokenPoolAdapter
from adapters.base import ProtocolAdapter
from adapters.compound_v2.supply_market import CompoundV2SupplyMarketAdapter
from adapters.protocols import Protocol
from config.chains import Chain

SupportedProtocols = Dict[Protocol, Dict[Chain, List[Type[ProtocolAdapter]]]]

AAVE_V2_ADAPTERS = [
    AaveV2ATokenPoolAdapter,
    AaveV2StableDebtTokenPoolAdapter,
    AaveV2VariableDebtTokenPoolAdapter,
]

supported_protocols: SupportedProtocols = {
    Protocol.AaveV2: {
        Chain.Ethereum: AAVE_V2_ADAPTERS,
        Chain.Polygon: AAVE_V2_ADAPTERS,
        Chain.Avalanche: AAVE_V2_ADAPTERS,
    },
    Protocol.CompoundV2: {
        Chain.Ethereum: [CompoundV2SupplyMarketAdapter],
    },
}
