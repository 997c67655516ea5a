"""Price impact of a swap against the pool's pre-trade price.

Impact is the shortfall of what a hop actually delivered versus what the
same (post-fee) input would buy at the marginal reserve-ratio price, in
basis points. The fee is excluded here because each hop already reports it
as ``fee_amount``.

Route impact is the plain sum of hop impacts. This is an additive
approximation, not a compounded one; callers comparing long routes should
keep that in mind.
"""

from __future__ import annotations

from collections.abc import Iterable

from swap_router.constants import BPS_DENOMINATOR, FEE_DENOMINATOR
from swap_router.fees.types import FeeInfo
from swap_router.safe_int import S


def hop_impact_bps(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee: FeeInfo | None = None,
) -> int:
    """Adverse price deviation of one hop, in basis points (rounded down).

    impact = (1 - (amount_out * reserve_in) / (amount_in_net * reserve_out)) * 10000

    where amount_in_net is the input after ``fee`` (the full input when fee
    is None). Evaluated without intermediate rounding.

    Returns:
        Non-negative impact; 0 for empty inputs or pools.
    """
    if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
        return 0

    multiplier = fee.fee_multiplier if fee is not None else FEE_DENOMINATOR
    # Output at the spot price, scaled by reserve_in * FEE_DENOMINATOR
    reference = S(amount_in) * multiplier * reserve_out
    actual = S(amount_out) * reserve_in * FEE_DENOMINATOR
    if actual >= reference:
        return 0

    return ((reference - actual) * BPS_DENOMINATOR // reference).value


def route_impact_bps(hop_impacts: Iterable[int]) -> int:
    """Route-level impact: sum of hop impacts."""
    return sum(hop_impacts)


__all__ = ["hop_impact_bps", "route_impact_bps"]
