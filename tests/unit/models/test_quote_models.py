"""Tests for quote request/response models."""

import pytest
from pydantic import ValidationError

from swap_router.models.quote import SwapQuote, SwapQuoteRequest
from swap_router.models.types import is_valid_address, normalize_address, validate_uint256
from swap_router.pools.graph import PoolGraph
from swap_router.routing.search import RouteSearch
from swap_router.routing.slippage import SlippageBounds
from tests.helpers import CREATOR, DAI, MEME, ONE, USDC, WETH, make_pool, make_resolver


class TestSwapQuoteRequest:
    """Tests for request parsing."""

    def test_camel_case_aliases(self):
        request = SwapQuoteRequest.model_validate(
            {
                "tokenIn": WETH,
                "tokenOut": DAI,
                "amountIn": "1000000000000000000",
                "maxHops": 2,
                "toleranceBps": 30,
            }
        )
        assert request.amount_in_int == ONE
        assert request.amount_out_int is None
        assert request.exact_input
        assert request.max_hops == 2
        assert request.tolerance_bps == 30

    def test_defaults(self):
        request = SwapQuoteRequest(token_in=WETH, token_out=DAI, amount_out=5)
        assert not request.exact_input
        assert request.amount_out == "5"
        assert request.max_hops == 3
        assert request.tolerance_bps == 50
        assert request.max_price_impact_bps is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"tokenIn": "0x1234"},
            {"amountIn": "-1"},
            {"amountIn": "1.5"},
            {"amountIn": str(2**256)},
            {"amountIn": True},
            {"maxHops": 0},
            {"maxHops": 7},
            {"toleranceBps": 10_001},
            {"maxPriceImpactBps": -1},
        ],
    )
    def test_schema_violations(self, overrides):
        data = {"tokenIn": WETH, "tokenOut": DAI, "amountIn": "1"}
        data.update(overrides)
        with pytest.raises(ValidationError):
            SwapQuoteRequest.model_validate(data)


class TestSwapQuote:
    """Tests for building the response."""

    def test_from_route_quote(self):
        meme_weth = make_pool(MEME, WETH, 1_000 * ONE, 10 * ONE)
        weth_usdc = make_pool(WETH, USDC, 10 * ONE, 20_000 * ONE)
        search = RouteSearch(PoolGraph([meme_weth, weth_usdc]), make_resolver({MEME: CREATOR}))
        route_quote = search.search(MEME, USDC, amount_in=ONE)
        bounds = SlippageBounds.for_quote(route_quote, 50)

        quote = SwapQuote.from_route_quote(route_quote, bounds)
        data = quote.model_dump(by_alias=True, exclude_none=True)

        assert data["route"] == [meme_weth.id, weth_usdc.id]
        assert data["path"] == [MEME, WETH, USDC]
        assert data["amountIn"] == str(ONE)
        assert data["amountOut"] == str(route_quote.amount_out)
        assert data["minAmountOut"] == str(bounds.min_amount_out)
        assert "maxAmountIn" not in data
        assert data["exactInput"] is True
        assert data["totalFeeAmount"] == str(route_quote.total_fee_amount)
        assert data["priceImpactBps"] == route_quote.price_impact_bps
        assert data["perHop"][0]["feeRecipient"] == CREATOR
        assert data["perHop"][0]["creatorFeeAmount"] == str(ONE // 1000)
        assert data["perHop"][1]["creatorFeeAmount"] == "0"


class TestTypes:
    """Tests for address and uint256 helpers."""

    def test_normalize_address(self):
        assert normalize_address(" " + WETH.upper().replace("0X", "0x") + " ") == WETH
        assert normalize_address(WETH[2:]) == WETH

    def test_normalize_address_validates(self):
        with pytest.raises(ValueError):
            normalize_address("0x12", validate=True)

    def test_is_valid_address(self):
        assert is_valid_address(WETH)
        assert not is_valid_address(WETH[2:])
        assert not is_valid_address("0x" + "zz" * 20)

    def test_validate_uint256(self):
        assert validate_uint256(5) == "5"
        assert validate_uint256("007") == "7"
        with pytest.raises(ValueError):
            validate_uint256(False)
