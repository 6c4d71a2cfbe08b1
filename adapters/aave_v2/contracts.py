"""
Aave V2 contract addresses and ABIs.

Architecture:
- ProtocolDataProvider: lists reserves and the aToken / stableDebtToken /
  variableDebtToken addresses of each reserve
"""

from config.chains import Chain

PROTOCOL_DATA_PROVIDER = {
    Chain.Ethereum: "0x057835Ad21a177dbdd3090bB1CAE03EaCF78Fc6d",
    Chain.Polygon: "0x7551b5D2763519d4e37e8B81929D336De671d46d",
    Chain.Avalanche: "0x65285E9dfab318f57051ab2b139ccCf232945451",
}

PROTOCOL_DATA_PROVIDER_ABI = [
    {
        "inputs": [],
        "name": "getAllReservesTokens",
        "outputs": [
            {
                "components": [
                    {"internalType": "string", "name": "symbol", "type": "string"},
                    {"internalType": "address", "name": "tokenAddress", "type": "address"},
                ],
                "internalType": "struct AaveProtocolDataProvider.TokenData[]",
                "name": "",
                "type": "tuple[]",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "asset", "type": "address"}],
        "name": "getReserveTokensAddresses",
        "outputs": [
            {"internalType": "address", "name": "aTokenAddress", "type": "address"},
            {"internalType": "address", "name": "stableDebtTokenAddress", "type": "address"},
            {"internalType": "address", "name": "variableDebtTokenAddress", "type": "address"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]
