"""Candidate route enumeration over a PoolGraph.

Search is depth-first over an explicit stack. Every stack entry carries its
own immutable set of used pool ids, so there is no shared visited state to
undo and no recursion depth to worry about.

Discovery order is part of the contract: route selection breaks ties by it.
Children are pushed in reverse enumeration order so they pop in enumeration
order, which reproduces a recursive depth-first walk over the snapshot's
pool order exactly.
"""

from __future__ import annotations

import threading

import structlog

from swap_router.amm.constant_product import Pool
from swap_router.constants import DEFAULT_MAX_HOPS
from swap_router.errors import SearchCancelled
from swap_router.models.types import normalize_address, short
from swap_router.pools.graph import PoolGraph
from swap_router.routing.types import Route

logger = structlog.get_logger()

# (pools so far, tokens visited, ids of pools used)
_PartialPath = tuple[tuple[Pool, ...], tuple[str, ...], frozenset[str]]


def check_cancelled(cancel_event: threading.Event | None) -> None:
    """Raise SearchCancelled if the caller has set ``cancel_event``."""
    if cancel_event is not None and cancel_event.is_set():
        raise SearchCancelled("Route search cancelled")


class PathFinder:
    """Enumerates candidate routes between two tokens.

    Usage:
        finder = PathFinder(graph)
        routes = finder.find_all_routes(token_in, token_out, max_hops=3)
    """

    def __init__(self, graph: PoolGraph) -> None:
        self.graph = graph

    def find_all_routes(
        self,
        token_in: str,
        token_out: str,
        max_hops: int = DEFAULT_MAX_HOPS,
        cancel_event: threading.Event | None = None,
    ) -> list[Route]:
        """Find every route from token_in to token_out within max_hops.

        The direct pool, when one exists, is always the first candidate.
        The depth-first walk then adds every other path that reaches
        token_out using each pool at most once. A path ends as soon as it
        reaches token_out. Inert pools are not expanded.

        Args:
            token_in: Starting token address (any case)
            token_out: Target token address (any case)
            max_hops: Maximum number of pools per route
            cancel_event: Checked on every expansion step

        Returns:
            Routes in discovery order. Empty if none exists.

        Raises:
            SearchCancelled: If cancel_event is set during the walk
        """
        start = normalize_address(token_in)
        target = normalize_address(token_out)

        if start == target or max_hops < 1:
            return []

        routes: list[Route] = []
        seen: set[tuple[str, ...]] = set()

        direct = self.graph.direct_pool(start, target)
        if direct is not None:
            route = Route(pools=(direct,), path=(start, target))
            routes.append(route)
            seen.add(route.pool_ids)

        if not self.graph.has_token(start) or not self.graph.has_token(target):
            return routes

        stack: list[_PartialPath] = [((), (start,), frozenset())]
        expanded = 0

        while stack:
            check_cancelled(cancel_event)
            pools, path, used = stack.pop()
            current = path[-1]

            if pools and current == target:
                route = Route(pools=pools, path=path)
                if route.pool_ids not in seen:
                    seen.add(route.pool_ids)
                    routes.append(route)
                continue

            if len(pools) >= max_hops:
                continue

            expanded += 1
            children: list[_PartialPath] = []
            for pool, counter in self.graph.neighbors(current):
                if pool.id in used or pool.is_inert:
                    continue
                children.append((pools + (pool,), path + (counter,), used | {pool.id}))
            stack.extend(reversed(children))

        logger.debug(
            "routes_enumerated",
            token_in=short(start),
            token_out=short(target),
            max_hops=max_hops,
            routes=len(routes),
            expanded=expanded,
        )
        return routes


__all__ = ["PathFinder", "check_cancelled"]
