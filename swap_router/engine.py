"""Quote engine: the I/O shell around the pure routing core.

A quote runs in three phases:
1. Snapshot: pool reserves and the fee profiles the search can need are
   read concurrently (bounded by a semaphore) from a ChainReader.
2. Search: RouteSearch runs over the immutable snapshot in a worker thread.
3. Limits: the winning route gets its slippage bounds and is returned as a
   SwapQuote.

Failed pool reads exclude the pool. Failed fee-profile reads mark the token
unavailable, which eliminates only the routes that sell that token.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from functools import lru_cache, partial
from typing import TypeVar

import structlog

from swap_router.amm.constant_product import ConstantProductAMM, Pool
from swap_router.chain.reader import ChainReader, Web3ChainReader
from swap_router.config import EngineConfig
from swap_router.errors import ExcessivePriceImpact, ExternalReadFailure, SearchCancelled
from swap_router.fees.resolver import FeeResolver
from swap_router.fees.types import LaunchProfile
from swap_router.models.quote import SwapQuote, SwapQuoteRequest
from swap_router.models.types import normalize_address, short
from swap_router.pools.graph import PoolGraph
from swap_router.routing.search import RouteSearch, validate_search
from swap_router.routing.slippage import SlippageBounds, validate_tolerance
from swap_router.routing.types import RouteQuote

logger = structlog.get_logger()

T = TypeVar("T")


class QuoteEngine:
    """Answers SwapQuoteRequests from live chain state.

    Args:
        reader: Source of pools and fee profiles
        config: Engine settings (defaults when None)
        amm: Constant-product math, injectable for tests
    """

    def __init__(
        self,
        reader: ChainReader,
        config: EngineConfig | None = None,
        amm: ConstantProductAMM | None = None,
    ) -> None:
        self.reader = reader
        self.config = config if config is not None else EngineConfig()
        self.amm = amm

    async def _run_blocking(
        self, semaphore: asyncio.Semaphore, fn: Callable[..., T], *args: object
    ) -> T:
        async with semaphore:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, partial(fn, *args))

    async def load_graph(self) -> PoolGraph:
        """Read every pool and build the routing graph.

        Raises:
            ExternalReadFailure: If the pool list itself cannot be read
        """
        loop = asyncio.get_running_loop()
        pool_ids = await loop.run_in_executor(None, self.reader.list_pool_ids)
        semaphore = asyncio.Semaphore(self.config.max_concurrent_reads)

        async def read(pool_id: str) -> Pool | None:
            try:
                return await self._run_blocking(semaphore, self.reader.read_pool, pool_id)
            except ExternalReadFailure as e:
                logger.warning("pool_excluded", pool=short(pool_id), error=str(e))
                return None

        results = await asyncio.gather(*(read(pool_id) for pool_id in pool_ids))
        pools = [pool for pool in results if pool is not None]

        graph = PoolGraph(pools)
        logger.debug(
            "graph_loaded",
            pools=graph.pool_count,
            tokens=graph.token_count,
            excluded=len(pool_ids) - len(pools),
        )
        return graph

    async def load_fee_resolver(
        self,
        graph: PoolGraph,
        token_in: str,
        token_out: str,
        max_hops: int,
    ) -> FeeResolver:
        """Read the fee profiles of every token that can sell on some hop.

        Only tokens within ``max_hops - 1`` edges of token_in can be a hop
        input; token_out never is, because paths end there.
        """
        token_out_norm = normalize_address(token_out)
        tokens = [
            token
            for token in graph.reachable_tokens(token_in, max_hops - 1)
            if token != token_out_norm
        ]
        semaphore = asyncio.Semaphore(self.config.max_concurrent_reads)
        unavailable: list[str] = []

        async def read(token: str) -> LaunchProfile | None:
            try:
                return await self._run_blocking(semaphore, self.reader.read_fee_profile, token)
            except ExternalReadFailure as e:
                logger.warning("fee_profile_unavailable", token=short(token), error=str(e))
                unavailable.append(token)
                return None

        results = await asyncio.gather(*(read(token) for token in tokens))
        profiles = dict(zip(tokens, results, strict=True))
        return FeeResolver(self.config.launcher, profiles, unavailable)

    async def quote(self, request: SwapQuoteRequest) -> SwapQuote:
        """Quote the best route for a request.

        Raises:
            InvalidInput: If the request is malformed
            NoRouteFound: If no route survives
            ExcessivePriceImpact: If the best route exceeds maxPriceImpactBps
            ExternalReadFailure: If the pool list cannot be read
            SearchCancelled: If the quote exceeds quote_timeout_seconds
        """
        timeout = self.config.quote_timeout_seconds
        if timeout is None:
            return await self._quote(request)
        try:
            return await asyncio.wait_for(self._quote(request), timeout=timeout)
        except TimeoutError as e:
            logger.warning(
                "quote_timeout",
                token_in=short(request.token_in),
                token_out=short(request.token_out),
                timeout_seconds=timeout,
            )
            raise SearchCancelled(f"Quote exceeded {timeout}s") from e

    async def _quote(self, request: SwapQuoteRequest) -> SwapQuote:
        max_hops = self._max_hops(request)
        tolerance_bps = self._tolerance_bps(request)
        validate_search(
            request.token_in,
            request.token_out,
            request.amount_in_int,
            request.amount_out_int,
            max_hops,
        )
        validate_tolerance(tolerance_bps)

        graph = await self.load_graph()
        fee_resolver = await self.load_fee_resolver(
            graph, request.token_in, request.token_out, max_hops
        )
        best = await self._search(
            RouteSearch(graph, fee_resolver, self.amm), request, max_hops
        )

        limit = request.max_price_impact_bps
        if limit is not None and best.price_impact_bps > limit:
            raise ExcessivePriceImpact(
                f"Price impact {best.price_impact_bps} bps exceeds limit {limit} bps"
            )

        bounds = SlippageBounds.for_quote(best, tolerance_bps)
        logger.info(
            "quote_ready",
            token_in=short(request.token_in),
            token_out=short(request.token_out),
            amount_in=best.amount_in,
            amount_out=best.amount_out,
            hops=best.route.hop_count,
            price_impact_bps=best.price_impact_bps,
            min_amount_out=bounds.min_amount_out,
            max_amount_in=bounds.max_amount_in,
        )
        return SwapQuote.from_route_quote(best, bounds)

    async def _search(
        self, search: RouteSearch, request: SwapQuoteRequest, max_hops: int
    ) -> RouteQuote:
        """Run the pure search in a worker thread.

        If this coroutine is cancelled, the cancel event tells the thread
        to stop at its next check.
        """
        cancel_event = threading.Event()
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None,
                partial(
                    search.search,
                    request.token_in,
                    request.token_out,
                    amount_in=request.amount_in_int,
                    amount_out=request.amount_out_int,
                    max_hops=max_hops,
                    cancel_event=cancel_event,
                ),
            )
        except asyncio.CancelledError:
            cancel_event.set()
            logger.info("search_cancelled", token_in=short(request.token_in))
            raise

    def _max_hops(self, request: SwapQuoteRequest) -> int:
        if "max_hops" in request.model_fields_set:
            return request.max_hops
        return self.config.max_hops

    def _tolerance_bps(self, request: SwapQuoteRequest) -> int:
        if "tolerance_bps" in request.model_fields_set:
            return request.tolerance_bps
        return self.config.tolerance_bps


@lru_cache(maxsize=1)
def get_default_engine() -> QuoteEngine:
    """Engine configured from SWAP_ROUTER_* environment variables.

    Raises:
        ExternalReadFailure: If SWAP_ROUTER_RPC_URL is not set
    """
    config = EngineConfig.from_env()
    if config.rpc_url is None:
        logger.warning("rpc_not_configured", reason="SWAP_ROUTER_RPC_URL not set")
        raise ExternalReadFailure("No chain reader configured (set SWAP_ROUTER_RPC_URL)")

    logger.info("engine_configured", rpc_url=config.rpc_url[:50] + "...", factory=config.factory)
    reader = Web3ChainReader(config.rpc_url, config.factory, timeout=config.rpc_timeout_seconds)
    return QuoteEngine(reader, config)


__all__ = ["QuoteEngine", "get_default_engine"]
