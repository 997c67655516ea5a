"""Tests for best-route search."""

import threading

import pytest

from swap_router.amm.constant_product import constant_product
from swap_router.constants import MAX_HOPS_LIMIT
from swap_router.errors import InvalidInput, NoRouteFound, SearchCancelled
from swap_router.fees.types import DEFAULT_FEE
from swap_router.pools.graph import PoolGraph
from swap_router.routing.evaluation import RouteEvaluator
from swap_router.routing.search import RouteSearch, validate_search
from tests.helpers import (
    CREATOR,
    DAI,
    MEME,
    ONE,
    ORPHAN,
    USDC,
    USDT,
    WETH,
    make_pool,
    make_resolver,
)


@pytest.fixture
def detour_pools():
    """Direct WETH/DAI at 1:1, and a WETH -> USDC -> DAI detour worth ~2:1."""
    ab = make_pool(WETH, DAI, 1_000 * ONE, 1_000 * ONE)
    ac = make_pool(WETH, USDC, 1_000 * ONE, 2_000 * ONE)
    cb = make_pool(USDC, DAI, 2_000 * ONE, 2_000 * ONE)
    return ab, ac, cb


class TestExactInputSearch:
    """Exact input: maximize the final output."""

    def test_chained_hops_match_manual_math(self, chain_graph, plain_resolver):
        """1 WETH -> USDC -> DAI equals chaining get_amount_out by hand."""
        quote = RouteSearch(chain_graph, plain_resolver).search(WETH, DAI, amount_in=ONE)

        usdc = constant_product.get_amount_out(ONE, 10 * ONE, 20_000 * ONE, DEFAULT_FEE)
        dai = constant_product.get_amount_out(usdc, 20_000 * ONE, 20_000 * ONE, DEFAULT_FEE)
        assert quote.route.path == (WETH, USDC, DAI)
        assert quote.hops[0].amount_out == usdc
        assert quote.amount_out == dai

    def test_multihop_beats_worse_direct(self, detour_pools, plain_resolver):
        ab, ac, cb = detour_pools
        search = RouteSearch(PoolGraph([ab, ac, cb]), plain_resolver)
        quote = search.search(WETH, DAI, amount_in=ONE)

        assert quote.route.pool_ids == (ac.id, cb.id)
        direct = RouteEvaluator(plain_resolver).evaluate_exact_input(
            search.pathfinder.find_all_routes(WETH, DAI)[0], ONE
        )
        assert direct is not None
        assert direct.route.pool_ids == (ab.id,)
        assert quote.amount_out > direct.amount_out

    def test_max_hops_one_forces_direct(self, detour_pools, plain_resolver):
        ab, ac, cb = detour_pools
        quote = RouteSearch(PoolGraph([ab, ac, cb]), plain_resolver).search(
            WETH, DAI, amount_in=ONE, max_hops=1
        )
        assert quote.route.pool_ids == (ab.id,)

    def test_tie_keeps_direct_pool(self, plain_resolver):
        """Identical pools for one pair: the first enumerated wins."""
        first = make_pool(WETH, DAI, 100 * ONE, 100 * ONE)
        second = make_pool(WETH, DAI, 100 * ONE, 100 * ONE)
        quote = RouteSearch(PoolGraph([first, second]), plain_resolver).search(
            WETH, DAI, amount_in=ONE
        )
        assert quote.route.pool_ids == (first.id,)

    def test_tie_keeps_first_discovered(self, plain_resolver):
        """Equal two-hop routes: the one discovered first wins."""
        ad = make_pool(WETH, USDT, 100 * ONE, 100 * ONE)
        db = make_pool(USDT, DAI, 100 * ONE, 100 * ONE)
        ac = make_pool(WETH, USDC, 100 * ONE, 100 * ONE)
        cb = make_pool(USDC, DAI, 100 * ONE, 100 * ONE)
        quote = RouteSearch(PoolGraph([ad, db, ac, cb]), plain_resolver).search(
            WETH, DAI, amount_in=ONE
        )
        assert quote.route.pool_ids == (ad.id, db.id)

    def test_launch_token_fee_in_quote(self):
        pool = make_pool(MEME, WETH, 1_000 * ONE, 10 * ONE)
        quote = RouteSearch(PoolGraph([pool]), make_resolver({MEME: CREATOR})).search(
            MEME, WETH, amount_in=ONE
        )
        assert quote.hops[0].fee.creator_recipient == CREATOR
        assert quote.hops[0].creator_fee_amount == ONE // 1000

    def test_unreadable_intermediate_avoided(self, plain_resolver):
        """A route through a token whose profile failed is skipped, others survive."""
        am = make_pool(WETH, MEME, 100 * ONE, 1_000 * ONE)
        mb = make_pool(MEME, DAI, 1_000 * ONE, 1_000 * ONE)
        ac = make_pool(WETH, USDC, 100 * ONE, 100 * ONE)
        cb = make_pool(USDC, DAI, 100 * ONE, 100 * ONE)
        resolver = make_resolver(unavailable=(MEME,))
        quote = RouteSearch(PoolGraph([am, mb, ac, cb]), resolver).search(
            WETH, DAI, amount_in=ONE
        )
        assert quote.route.pool_ids == (ac.id, cb.id)

    def test_addresses_any_case(self, chain_graph, plain_resolver):
        quote = RouteSearch(chain_graph, plain_resolver).search(
            WETH.upper().replace("0X", "0x"), DAI[2:], amount_in=ONE
        )
        assert quote.route.path == (WETH, USDC, DAI)


class TestExactOutputSearch:
    """Exact output: minimize the initial input."""

    def test_picks_cheapest_input(self, detour_pools, plain_resolver):
        ab, ac, cb = detour_pools
        search = RouteSearch(PoolGraph([ab, ac, cb]), plain_resolver)
        quote = search.search(WETH, DAI, amount_out=ONE // 2)

        assert not quote.exact_input
        assert quote.amount_out == ONE // 2
        assert quote.route.pool_ids == (ac.id, cb.id)
        evaluator = RouteEvaluator(plain_resolver)
        inputs = [
            evaluator.evaluate_exact_output(route, ONE // 2).amount_in
            for route in search.pathfinder.find_all_routes(WETH, DAI)
        ]
        assert quote.amount_in == min(inputs)

    def test_matches_single_pool_math(self, plain_resolver):
        pool = make_pool(WETH, USDC, 1_000_000, 1_000_000)
        quote = RouteSearch(PoolGraph([pool]), plain_resolver).search(
            WETH, USDC, amount_out=996
        )
        assert quote.amount_in == 1000

    def test_output_beyond_liquidity(self, plain_resolver):
        """Every route drained: NoRouteFound, not InsufficientLiquidity."""
        pool = make_pool(WETH, USDC, 1_000_000, 1_000_000)
        with pytest.raises(NoRouteFound):
            RouteSearch(PoolGraph([pool]), plain_resolver).search(
                WETH, USDC, amount_out=1_000_000
            )


class TestSearchFailures:
    """Validation, missing routes and cancellation."""

    def test_unreachable_token(self, chain_graph, plain_resolver):
        with pytest.raises(NoRouteFound):
            RouteSearch(chain_graph, plain_resolver).search(WETH, ORPHAN, amount_in=ONE)

    def test_all_routes_eliminated(self, plain_resolver):
        pool = make_pool(WETH, USDC, 0, 1_000_000)
        with pytest.raises(NoRouteFound):
            RouteSearch(PoolGraph([pool]), plain_resolver).search(WETH, USDC, amount_in=ONE)

    def test_cancelled(self, chain_graph, plain_resolver):
        event = threading.Event()
        event.set()
        with pytest.raises(SearchCancelled):
            RouteSearch(chain_graph, plain_resolver).search(
                WETH, DAI, amount_in=ONE, cancel_event=event
            )

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"token_out": WETH, "amount_in": ONE},
            {"token_out": WETH.upper().replace("0X", "0x"), "amount_in": ONE},
            {"token_out": DAI},
            {"token_out": DAI, "amount_in": ONE, "amount_out": ONE},
            {"token_out": DAI, "amount_in": 0},
            {"token_out": DAI, "amount_out": -5},
            {"token_out": DAI, "amount_in": ONE, "max_hops": 0},
            {"token_out": DAI, "amount_in": ONE, "max_hops": MAX_HOPS_LIMIT + 1},
        ],
    )
    def test_invalid_input(self, chain_graph, plain_resolver, kwargs):
        with pytest.raises(InvalidInput):
            RouteSearch(chain_graph, plain_resolver).search(WETH, **kwargs)

    def test_validation_precedes_search(self):
        """Bad input is rejected even on an empty graph."""
        with pytest.raises(InvalidInput):
            validate_search(WETH, WETH, ONE, None, 3)
