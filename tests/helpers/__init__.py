"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token addresses and common amounts
- factories: Pool, resolver and request factory functions
"""

from tests.helpers.constants import (
    CREATOR,
    DAI,
    FAKE_MEME,
    LAUNCHER,
    MEME,
    ONE,
    ORPHAN,
    OTHER_LAUNCHER,
    USDC,
    USDT,
    WBTC,
    WETH,
)
from tests.helpers.factories import (
    make_pool,
    make_pool_id,
    make_request,
    make_resolver,
    meme_profiles,
)

__all__ = [
    # Constants
    "CREATOR",
    "DAI",
    "FAKE_MEME",
    "LAUNCHER",
    "MEME",
    "ONE",
    "ORPHAN",
    "OTHER_LAUNCHER",
    "USDC",
    "USDT",
    "WBTC",
    "WETH",
    # Factories
    "make_pool",
    "make_pool_id",
    "make_request",
    "make_resolver",
    "meme_profiles",
]
