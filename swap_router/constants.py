"""Protocol constants for the swap router.

Centralizes fee parameters, limits and well-known deployment addresses.
"""

import re

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

# The zero address, used as "no recipient"
ZERO_ADDRESS = "0x" + "0" * 40

# Fee parts are expressed out of this denominator (3 parts = 0.3%)
FEE_DENOMINATOR = 1000

# Default tier: the whole fee goes to liquidity providers
DEFAULT_LP_FEE_PARTS = 3
DEFAULT_CREATOR_FEE_PARTS = 0

# Launch-token tier: part of the fee is diverted to the token creator
LAUNCH_LP_FEE_PARTS = 2
LAUNCH_CREATOR_FEE_PARTS = 1

# Basis points denominator (10000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Search defaults
DEFAULT_MAX_HOPS = 3
# Search cost grows exponentially with hops; refuse anything deeper
MAX_HOPS_LIMIT = 6

# Slippage tolerance applied when a request does not specify one (0.5%)
DEFAULT_TOLERANCE_BPS = 50


def validate_contract_address(name: str, address: str) -> str:
    """Validate and return a lowercase contract address.

    Raises:
        ValueError: If the address is invalid
    """
    if not _ADDRESS_RE.match(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address.lower()


# Ponder deployment on Bitkub Chain (chain id 25925)
DEFAULT_FACTORY = validate_contract_address(
    "factory", "0x07Ac7Fb45a48699c9f3eb1bd02C9e03F21e3c4eD"
)
DEFAULT_LAUNCHER = validate_contract_address(
    "launcher", "0xCC1687173299804Abeb7267686a970D6Bf4E04a3"
)

__all__ = [
    "BPS_DENOMINATOR",
    "DEFAULT_CREATOR_FEE_PARTS",
    "DEFAULT_FACTORY",
    "DEFAULT_LAUNCHER",
    "DEFAULT_LP_FEE_PARTS",
    "DEFAULT_MAX_HOPS",
    "DEFAULT_TOLERANCE_BPS",
    "FEE_DENOMINATOR",
    "LAUNCH_CREATOR_FEE_PARTS",
    "LAUNCH_LP_FEE_PARTS",
    "MAX_HOPS_LIMIT",
    "ZERO_ADDRESS",
]
