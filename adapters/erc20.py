"""
ERC20 token metadata lookups shared by the adapters.
"""

from typing import Any, Dict

from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Minimal ABI - only what we need
ERC20_ABI = [
    {
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]

NATIVE_TOKEN = {
    "address": ZERO_ADDRESS,
    "name": "Ethereum",
    "symbol": "ETH",
    "decimals": 18,
}


async def get_token_metadata(provider, address: str) -> Dict[str, Any]:
    """
    Read name/symbol/decimals for an ERC20 token.

    Returns:
        {'address': checksum address, 'name': str, 'symbol': str, 'decimals': int}
    """
    address = Web3.to_checksum_address(address)
    if address == ZERO_ADDRESS:
        return dict(NATIVE_TOKEN)

    token = provider.eth.contract(address=address, abi=ERC20_ABI)
    name = await token.functions.name().call()
    symbol = await token.functions.symbol().call()
    decimals = await token.functions.decimals().call()
    return {
        "address": address,
        "name": name,
        "symbol": symbol,
        "decimals": int(decimals),
    }
