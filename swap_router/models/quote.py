"""Pydantic models for swap quote requests and responses.

Amounts travel as uint256 decimal strings and field names are camelCase on
the wire, matching what the execution layer passes to the router contract.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from swap_router.constants import DEFAULT_MAX_HOPS, DEFAULT_TOLERANCE_BPS, MAX_HOPS_LIMIT
from swap_router.models.types import Address, Uint256

if TYPE_CHECKING:
    from swap_router.routing.slippage import SlippageBounds
    from swap_router.routing.types import HopQuote, RouteQuote


class SwapQuoteRequest(BaseModel):
    """Request for the best route between two tokens.

    Exactly one of amount_in (exact-input swap) or amount_out (exact-output
    swap) must be set; the engine rejects anything else as InvalidInput.
    """

    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    amount_in: Uint256 | None = Field(default=None, alias="amountIn")
    amount_out: Uint256 | None = Field(default=None, alias="amountOut")
    max_hops: int = Field(default=DEFAULT_MAX_HOPS, ge=1, le=MAX_HOPS_LIMIT, alias="maxHops")
    tolerance_bps: int = Field(
        default=DEFAULT_TOLERANCE_BPS,
        ge=0,
        le=10_000,
        alias="toleranceBps",
        description="Slippage tolerance used to derive minAmountOut / maxAmountIn.",
    )
    max_price_impact_bps: int | None = Field(
        default=None,
        ge=0,
        alias="maxPriceImpactBps",
        description="Reject the quote if the best route's price impact exceeds this.",
    )

    model_config = {"populate_by_name": True}

    @property
    def amount_in_int(self) -> int | None:
        return int(self.amount_in) if self.amount_in is not None else None

    @property
    def amount_out_int(self) -> int | None:
        return int(self.amount_out) if self.amount_out is not None else None

    @property
    def exact_input(self) -> bool:
        return self.amount_in is not None


class HopDetail(BaseModel):
    """One hop of the quoted route."""

    pool_id: str = Field(alias="poolId")
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    fee_amount: Uint256 = Field(alias="feeAmount")
    lp_fee_amount: Uint256 = Field(alias="lpFeeAmount")
    creator_fee_amount: Uint256 = Field(alias="creatorFeeAmount")
    fee_recipient: Address = Field(alias="feeRecipient")
    impact_bps: int = Field(alias="impactBps")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_hop(cls, hop: HopQuote) -> HopDetail:
        return cls(
            pool_id=hop.pool.id,
            token_in=hop.token_in,
            token_out=hop.token_out,
            amount_in=str(hop.amount_in),
            amount_out=str(hop.amount_out),
            fee_amount=str(hop.fee_amount),
            lp_fee_amount=str(hop.lp_fee_amount),
            creator_fee_amount=str(hop.creator_fee_amount),
            fee_recipient=hop.fee.creator_recipient,
            impact_bps=hop.impact_bps,
        )


class SwapQuote(BaseModel):
    """Best route for a request, with the limits the execution layer enforces.

    min_amount_out is set for exact-input quotes, max_amount_in for
    exact-output quotes.
    """

    route: list[str] = Field(description="Pool ids, in swap order")
    path: list[Address] = Field(description="Tokens visited, tokenIn first")
    per_hop: list[HopDetail] = Field(alias="perHop")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    price_impact_bps: int = Field(
        alias="priceImpactBps",
        description="Sum of per-hop impacts (additive approximation).",
    )
    total_fee_amount: Uint256 = Field(alias="totalFeeAmount")
    exact_input: bool = Field(alias="exactInput")
    tolerance_bps: int = Field(alias="toleranceBps")
    min_amount_out: Uint256 | None = Field(default=None, alias="minAmountOut")
    max_amount_in: Uint256 | None = Field(default=None, alias="maxAmountIn")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_route_quote(cls, quote: RouteQuote, bounds: SlippageBounds) -> SwapQuote:
        """Build the response from an evaluated route and its bounds."""
        min_out = bounds.min_amount_out
        max_in = bounds.max_amount_in
        return cls(
            route=list(quote.route.pool_ids),
            path=list(quote.route.path),
            per_hop=[HopDetail.from_hop(hop) for hop in quote.hops],
            amount_in=str(quote.amount_in),
            amount_out=str(quote.amount_out),
            price_impact_bps=quote.price_impact_bps,
            total_fee_amount=str(quote.total_fee_amount),
            exact_input=quote.exact_input,
            tolerance_bps=bounds.tolerance_bps,
            min_amount_out=str(min_out) if min_out is not None else None,
            max_amount_in=str(max_in) if max_in is not None else None,
        )


__all__ = ["HopDetail", "SwapQuote", "SwapQuoteRequest"]
