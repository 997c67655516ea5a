"""Pool graph over an immutable snapshot of pools.

Tokens are nodes and pools are edges. Unlike a pair-level token graph, the
adjacency here keeps every pool as its own edge, in the order the snapshot
enumerated them, because route search forbids reusing a pool (not a token)
and breaks ties by discovery order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

import structlog

from swap_router.amm.constant_product import Pool, normalize_pool_id
from swap_router.models.types import normalize_address, short

logger = structlog.get_logger()


class PoolGraph:
    """Adjacency structure over a supplied list of pools.

    The graph never fetches pools itself; the caller captures a snapshot
    and passes it in. Lookups accept any textual form of an address.

    Usage:
        graph = PoolGraph(pools)
        graph.neighbors(token)            # [(pool, counter_token), ...]
        graph.direct_pool(token_a, token_b)
    """

    def __init__(self, pools: Iterable[Pool] = ()) -> None:
        self._pools: list[Pool] = []
        self._pools_by_id: dict[str, Pool] = {}
        self._adjacency: dict[str, list[tuple[Pool, str]]] = {}
        # Canonical (token0, token1) -> first pool enumerated for that pair
        self._direct: dict[tuple[str, str], Pool] = {}

        for pool in pools:
            self._add_pool(pool)

    def _add_pool(self, pool: Pool) -> None:
        if pool.id in self._pools_by_id:
            logger.debug("duplicate_pool_ignored", pool=short(pool.id))
            return

        self._pools.append(pool)
        self._pools_by_id[pool.id] = pool
        self._adjacency.setdefault(pool.token0, []).append((pool, pool.token1))
        self._adjacency.setdefault(pool.token1, []).append((pool, pool.token0))

        if pool.pair_key in self._direct:
            logger.debug(
                "second_pool_for_pair",
                pool=short(pool.id),
                kept=short(self._direct[pool.pair_key].id),
                token0=short(pool.token0),
                token1=short(pool.token1),
            )
        else:
            self._direct[pool.pair_key] = pool

    @staticmethod
    def pair_key(token_a: str, token_b: str) -> tuple[str, str]:
        """Canonical (lower, higher) key for an unordered token pair."""
        token_a_norm = normalize_address(token_a)
        token_b_norm = normalize_address(token_b)
        if token_a_norm > token_b_norm:
            token_a_norm, token_b_norm = token_b_norm, token_a_norm
        return (token_a_norm, token_b_norm)

    def neighbors(self, token: str) -> list[tuple[Pool, str]]:
        """All pools containing ``token``, each paired with its other token.

        Returns:
            List of (pool, counter_token) in pool enumeration order. Empty if
            the token is not in the graph.
        """
        return self._adjacency.get(normalize_address(token), [])

    def direct_pool(self, token_a: str, token_b: str) -> Pool | None:
        """Pool trading ``token_a`` against ``token_b`` directly, if any."""
        return self._direct.get(self.pair_key(token_a, token_b))

    def get_pool(self, pool_id: str) -> Pool | None:
        return self._pools_by_id.get(normalize_pool_id(pool_id))

    def has_token(self, token: str) -> bool:
        return normalize_address(token) in self._adjacency

    def reachable_tokens(self, token: str, max_depth: int) -> list[str]:
        """Tokens reachable from ``token`` in at most ``max_depth`` edges.

        Includes ``token`` itself (depth 0). Inert pools are not crossed.
        Used to bound which fee profiles a search can ever need: the input
        token of hop ``k`` is at most ``k - 1`` edges from the start.

        Returns:
            Tokens in breadth-first discovery order
        """
        start = normalize_address(token)
        seen = {start}
        order = [start]
        queue: deque[tuple[str, int]] = deque([(start, 0)])

        while queue:
            current, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for pool, counter in self._adjacency.get(current, []):
                if pool.is_inert or counter in seen:
                    continue
                seen.add(counter)
                order.append(counter)
                queue.append((counter, depth + 1))

        return order

    @property
    def pools(self) -> list[Pool]:
        """All pools, in enumeration order."""
        return list(self._pools)

    @property
    def tokens(self) -> list[str]:
        return list(self._adjacency)

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    @property
    def token_count(self) -> int:
        """Number of unique tokens in the graph."""
        return len(self._adjacency)


__all__ = ["PoolGraph"]
