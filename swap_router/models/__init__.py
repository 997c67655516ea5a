"""Pydantic models for the quote API."""

from swap_router.models.quote import HopDetail, SwapQuote, SwapQuoteRequest
from swap_router.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "Address",
    "HopDetail",
    "SwapQuote",
    "SwapQuoteRequest",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
