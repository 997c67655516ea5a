"""Slippage bounds handed to the execution layer.

These figures are computed, never enforced here: the router contract reverts
when the executed swap falls outside them.
"""

from __future__ import annotations

from dataclasses import dataclass

from swap_router.constants import BPS_DENOMINATOR
from swap_router.errors import InvalidInput
from swap_router.routing.types import RouteQuote
from swap_router.safe_int import S


def validate_tolerance(tolerance_bps: int) -> int:
    """Return tolerance_bps if it is within [0, 10000].

    Raises:
        InvalidInput: If the tolerance is out of range
    """
    if tolerance_bps < 0 or tolerance_bps > BPS_DENOMINATOR:
        raise InvalidInput(
            f"Slippage tolerance must be 0..{BPS_DENOMINATOR} bps, got {tolerance_bps}"
        )
    return tolerance_bps


def min_amount_out(amount_out: int, tolerance_bps: int) -> int:
    """Minimum acceptable output for an exact-input swap (rounded down).

    min_amount_out(1000, 50) == 995
    """
    validate_tolerance(tolerance_bps)
    return (S(amount_out) * (BPS_DENOMINATOR - tolerance_bps) // BPS_DENOMINATOR).value


def max_amount_in(amount_in: int, tolerance_bps: int) -> int:
    """Maximum acceptable input for an exact-output swap (rounded up)."""
    validate_tolerance(tolerance_bps)
    return (S(amount_in) * (BPS_DENOMINATOR + tolerance_bps)).ceiling_div(BPS_DENOMINATOR).value


@dataclass(frozen=True)
class SlippageBounds:
    """Enforceable limit for one quote.

    Exactly one field is set: min_amount_out for exact-input quotes,
    max_amount_in for exact-output quotes.
    """

    tolerance_bps: int
    min_amount_out: int | None = None
    max_amount_in: int | None = None

    @classmethod
    def for_quote(cls, quote: RouteQuote, tolerance_bps: int) -> SlippageBounds:
        if quote.exact_input:
            return cls(
                tolerance_bps=tolerance_bps,
                min_amount_out=min_amount_out(quote.amount_out, tolerance_bps),
            )
        return cls(
            tolerance_bps=tolerance_bps,
            max_amount_in=max_amount_in(quote.amount_in, tolerance_bps),
        )


__all__ = ["SlippageBounds", "max_amount_in", "min_amount_out", "validate_tolerance"]
