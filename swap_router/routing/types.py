"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass

from swap_router.amm.constant_product import Pool
from swap_router.fees.types import FeeInfo
from swap_router.routing.impact import route_impact_bps


@dataclass(frozen=True)
class Route:
    """Ordered pools from token_in to token_out.

    ``path`` lists the tokens visited, so ``len(path) == len(pools) + 1``.
    """

    pools: tuple[Pool, ...]
    path: tuple[str, ...]

    @property
    def pool_ids(self) -> tuple[str, ...]:
        return tuple(pool.id for pool in self.pools)

    @property
    def hop_count(self) -> int:
        return len(self.pools)

    @property
    def token_in(self) -> str:
        return self.path[0]

    @property
    def token_out(self) -> str:
        return self.path[-1]


@dataclass(frozen=True)
class HopQuote:
    """Result of a single hop in a route."""

    pool: Pool
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    reserve_in: int
    reserve_out: int
    fee: FeeInfo
    impact_bps: int

    @property
    def fee_amount(self) -> int:
        """Total fee taken from this hop's input."""
        return self.fee.fee_amount(self.amount_in)

    @property
    def lp_fee_amount(self) -> int:
        return self.fee.lp_fee_amount(self.amount_in)

    @property
    def creator_fee_amount(self) -> int:
        return self.fee.creator_fee_amount(self.amount_in)


@dataclass(frozen=True)
class RouteQuote:
    """A fully evaluated route.

    Attributes:
        route: Pools and token path
        hops: Per-hop amounts, fees and impact, in route order
        exact_input: True if amount_in was fixed by the caller
        amount_in: Tokens sold into the first hop
        amount_out: Tokens received from the last hop
        price_impact_bps: Sum of per-hop impacts (additive, not compounded)
    """

    route: Route
    hops: tuple[HopQuote, ...]
    exact_input: bool

    @property
    def amount_in(self) -> int:
        return self.hops[0].amount_in

    @property
    def amount_out(self) -> int:
        return self.hops[-1].amount_out

    @property
    def price_impact_bps(self) -> int:
        return route_impact_bps(hop.impact_bps for hop in self.hops)

    @property
    def total_fee_amount(self) -> int:
        """Plain sum of per-hop fees, each in its own hop's input token."""
        return sum(hop.fee_amount for hop in self.hops)


__all__ = ["HopQuote", "Route", "RouteQuote"]
