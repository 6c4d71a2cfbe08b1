from config.chains import Chain

COMPTROLLER = {
    Chain.Ethereum: "0x3d9819210A31b4961b30EF54bE2aeD79B9c9Cd3B",
}

COMPTROLLER_ABI = [
    {
        "inputs": [],
        "name": "getAllMarkets",
        "outputs": [{"internalType": "contract CToken[]", "name": "", "type": "address[]"}],
        "stateMutability": "view",
        "type": "function",
    }
]

CTOKEN_ABI = [
    {
        "inputs": [],
        "name": "underlying",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    }
]
