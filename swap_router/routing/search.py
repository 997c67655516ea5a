"""Best-route search: enumerate, evaluate, select.

RouteSearch is the pure entry point of the quoting core. Given a captured
PoolGraph and FeeResolver it validates the request, enumerates candidate
routes, quotes each one and returns the best, all without I/O.
"""

from __future__ import annotations

import threading

import structlog

from swap_router.amm.constant_product import ConstantProductAMM
from swap_router.constants import DEFAULT_MAX_HOPS, MAX_HOPS_LIMIT
from swap_router.errors import InvalidInput, NoRouteFound
from swap_router.fees.resolver import FeeResolver
from swap_router.models.types import normalize_address, short
from swap_router.pools.graph import PoolGraph
from swap_router.routing.evaluation import RouteEvaluator
from swap_router.routing.pathfinding import PathFinder, check_cancelled
from swap_router.routing.types import RouteQuote

logger = structlog.get_logger()


def validate_search(
    token_in: str,
    token_out: str,
    amount_in: int | None,
    amount_out: int | None,
    max_hops: int,
) -> None:
    """Check request semantics before any search work is done.

    Raises:
        InvalidInput: Identical tokens, both or neither amount given, a
            non-positive amount, or max_hops outside 1..MAX_HOPS_LIMIT
    """
    if normalize_address(token_in) == normalize_address(token_out):
        raise InvalidInput(f"tokenIn and tokenOut are the same token: {token_in}")
    if (amount_in is None) == (amount_out is None):
        raise InvalidInput("Exactly one of amountIn or amountOut is required")
    amount = amount_in if amount_in is not None else amount_out
    if amount is None or amount <= 0:
        raise InvalidInput(f"Amount must be positive, got {amount}")
    if max_hops < 1 or max_hops > MAX_HOPS_LIMIT:
        raise InvalidInput(f"maxHops must be 1..{MAX_HOPS_LIMIT}, got {max_hops}")


class RouteSearch:
    """Finds the best route between two tokens over one pool snapshot.

    Selection maximizes the final output (exact input) or minimizes the
    initial input (exact output). Ties keep the earliest discovered route,
    so results are reproducible for the same snapshot order.

    Usage:
        search = RouteSearch(graph, fee_resolver)
        quote = search.search(weth, dai, amount_in=10**18)
    """

    def __init__(
        self,
        graph: PoolGraph,
        fee_resolver: FeeResolver,
        amm: ConstantProductAMM | None = None,
    ) -> None:
        self.graph = graph
        self.fee_resolver = fee_resolver
        self.pathfinder = PathFinder(graph)
        self.evaluator = RouteEvaluator(fee_resolver, amm)

    def search(
        self,
        token_in: str,
        token_out: str,
        amount_in: int | None = None,
        amount_out: int | None = None,
        max_hops: int = DEFAULT_MAX_HOPS,
        cancel_event: threading.Event | None = None,
    ) -> RouteQuote:
        """Quote the best route for an exact-input or exact-output swap.

        Args:
            token_in: Token sold
            token_out: Token bought
            amount_in: Exact input (exclusive with amount_out)
            amount_out: Exact output (exclusive with amount_in)
            max_hops: Maximum pools per route
            cancel_event: When set, the search stops at its next check

        Returns:
            The winning RouteQuote

        Raises:
            InvalidInput: If the request is malformed
            NoRouteFound: If no route exists or none survives evaluation
            SearchCancelled: If cancel_event is set mid-search
        """
        validate_search(token_in, token_out, amount_in, amount_out, max_hops)
        exact_input = amount_in is not None

        routes = self.pathfinder.find_all_routes(token_in, token_out, max_hops, cancel_event)
        if not routes:
            raise NoRouteFound(
                f"No route from {token_in} to {token_out} within {max_hops} hops"
            )

        best: RouteQuote | None = None
        evaluated = 0
        for route in routes:
            check_cancelled(cancel_event)
            quote: RouteQuote | None = None
            if amount_in is not None:
                quote = self.evaluator.evaluate_exact_input(route, amount_in)
            elif amount_out is not None:
                quote = self.evaluator.evaluate_exact_output(route, amount_out)
            if quote is None:
                continue
            evaluated += 1
            if best is None or self._is_better(quote, best):
                best = quote

        if best is None:
            raise NoRouteFound(
                f"All {len(routes)} routes from {token_in} to {token_out} were eliminated"
            )

        logger.info(
            "route_selected",
            token_in=short(best.route.token_in),
            token_out=short(best.route.token_out),
            exact_input=exact_input,
            hops=best.route.hop_count,
            pools=[short(pool_id) for pool_id in best.route.pool_ids],
            amount_in=best.amount_in,
            amount_out=best.amount_out,
            candidates=len(routes),
            evaluated=evaluated,
        )
        return best

    @staticmethod
    def _is_better(candidate: RouteQuote, best: RouteQuote) -> bool:
        """Strictly better only; equal quotes keep the earlier route."""
        if candidate.exact_input:
            return candidate.amount_out > best.amount_out
        return candidate.amount_in < best.amount_in


__all__ = ["RouteSearch", "validate_search"]
