"""Evaluation of a candidate route, hop by hop."""

from __future__ import annotations

import structlog

from swap_router.amm.constant_product import ConstantProductAMM, constant_product
from swap_router.errors import ExternalReadFailure, InsufficientLiquidity
from swap_router.fees.resolver import FeeResolver
from swap_router.models.types import short
from swap_router.routing.impact import hop_impact_bps
from swap_router.routing.types import HopQuote, Route, RouteQuote

logger = structlog.get_logger()


class RouteEvaluator:
    """Quotes a fixed route in exact-input or exact-output mode.

    Each hop resolves its own fee from its own input token. A hop that
    cannot be executed (inert pool, zero output, drained reserve, unreadable
    fee profile) eliminates the route: the evaluate methods return None and
    log the reason, they do not raise.
    """

    def __init__(
        self,
        fee_resolver: FeeResolver,
        amm: ConstantProductAMM | None = None,
    ) -> None:
        self.fee_resolver = fee_resolver
        self.amm = amm if amm is not None else constant_product

    def evaluate_exact_input(self, route: Route, amount_in: int) -> RouteQuote | None:
        """Walk the route forward from a fixed input amount."""
        hops: list[HopQuote] = []
        current_amount = amount_in

        for i, pool in enumerate(route.pools):
            token_in = route.path[i]
            token_out = route.path[i + 1]

            if pool.is_inert:
                return self._eliminated(route, i, "inert_pool")
            try:
                fee = self.fee_resolver.resolve(pool, token_in)
            except ExternalReadFailure:
                return self._eliminated(route, i, "fee_profile_unavailable")

            result = self.amm.simulate_swap(pool, token_in, current_amount, fee)
            if result.amount_out <= 0:
                return self._eliminated(route, i, "zero_output")

            hops.append(
                HopQuote(
                    pool=pool,
                    token_in=token_in,
                    token_out=token_out,
                    amount_in=current_amount,
                    amount_out=result.amount_out,
                    reserve_in=result.reserve_in,
                    reserve_out=result.reserve_out,
                    fee=fee,
                    impact_bps=hop_impact_bps(
                        current_amount,
                        result.amount_out,
                        result.reserve_in,
                        result.reserve_out,
                        fee,
                    ),
                )
            )
            current_amount = result.amount_out

        return RouteQuote(route=route, hops=tuple(hops), exact_input=True)

    def evaluate_exact_output(self, route: Route, amount_out: int) -> RouteQuote | None:
        """Walk the route backwards from a fixed output amount."""
        hops: list[HopQuote] = []
        current_amount = amount_out

        for i in range(route.hop_count - 1, -1, -1):
            pool = route.pools[i]
            token_in = route.path[i]
            token_out = route.path[i + 1]

            if pool.is_inert:
                return self._eliminated(route, i, "inert_pool")
            try:
                fee = self.fee_resolver.resolve(pool, token_in)
                result = self.amm.simulate_swap_exact_output(pool, token_in, current_amount, fee)
            except ExternalReadFailure:
                return self._eliminated(route, i, "fee_profile_unavailable")
            except InsufficientLiquidity:
                return self._eliminated(route, i, "insufficient_liquidity")

            hops.append(
                HopQuote(
                    pool=pool,
                    token_in=token_in,
                    token_out=token_out,
                    amount_in=result.amount_in,
                    amount_out=current_amount,
                    reserve_in=result.reserve_in,
                    reserve_out=result.reserve_out,
                    fee=fee,
                    impact_bps=hop_impact_bps(
                        result.amount_in,
                        current_amount,
                        result.reserve_in,
                        result.reserve_out,
                        fee,
                    ),
                )
            )
            current_amount = result.amount_in

        hops.reverse()
        return RouteQuote(route=route, hops=tuple(hops), exact_input=False)

    def _eliminated(self, route: Route, hop: int, reason: str) -> None:
        logger.debug(
            "candidate_eliminated",
            pools=[short(pool_id) for pool_id in route.pool_ids],
            hop=hop,
            reason=reason,
        )
        return None


__all__ = ["RouteEvaluator"]
