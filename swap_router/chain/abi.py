"""Minimal contract ABIs - just the read functions the reader calls."""

_ADDRESS_OUT = [{"name": "", "type": "address"}]

FACTORY_ABI = [
    {
        "name": "allPairsLength",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "allPairs",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "uint256"}],
        "outputs": _ADDRESS_OUT,
    },
]

PAIR_ABI = [
    {
        "name": "token0",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": _ADDRESS_OUT,
    },
    {
        "name": "token1",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": _ADDRESS_OUT,
    },
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "_reserve0", "type": "uint112"},
            {"name": "_reserve1", "type": "uint112"},
            {"name": "_blockTimestampLast", "type": "uint32"},
        ],
    },
]

# Optional capability: only launch tokens implement these
LAUNCH_TOKEN_ABI = [
    {
        "name": "launcher",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": _ADDRESS_OUT,
    },
    {
        "name": "creator",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": _ADDRESS_OUT,
    },
]

__all__ = ["FACTORY_ABI", "LAUNCH_TOKEN_ABI", "PAIR_ABI"]
