"""Pytest configuration and fixtures."""

import pytest

from swap_router.amm.constant_product import ConstantProductAMM, Pool
from swap_router.chain.reader import StaticChainReader
from swap_router.config import EngineConfig
from swap_router.engine import QuoteEngine
from swap_router.fees.resolver import FeeResolver
from swap_router.fees.types import DEFAULT_FEE, FeeInfo
from swap_router.pools.graph import PoolGraph
from tests.helpers import DAI, LAUNCHER, ONE, USDC, WETH, make_pool, make_pool_id


@pytest.fixture
def amm() -> ConstantProductAMM:
    """Fresh constant-product math instance."""
    return ConstantProductAMM()


@pytest.fixture
def default_fee() -> FeeInfo:
    """The standard 0.3% tier."""
    return DEFAULT_FEE


@pytest.fixture
def plain_resolver() -> FeeResolver:
    """Resolver with no launch tokens: every hop pays the default tier."""
    return FeeResolver(LAUNCHER)


@pytest.fixture
def weth_usdc_pool() -> Pool:
    """10 WETH / 20,000 USDC."""
    return make_pool(WETH, USDC, 10 * ONE, 20_000 * ONE, pool_id=make_pool_id(1))


@pytest.fixture
def usdc_dai_pool() -> Pool:
    """20,000 USDC / 20,000 DAI."""
    return make_pool(USDC, DAI, 20_000 * ONE, 20_000 * ONE, pool_id=make_pool_id(2))


@pytest.fixture
def chain_graph(weth_usdc_pool: Pool, usdc_dai_pool: Pool) -> PoolGraph:
    """WETH - USDC - DAI, no direct WETH/DAI pool."""
    return PoolGraph([weth_usdc_pool, usdc_dai_pool])


# =============================================================================
# Engine fixtures
# =============================================================================


@pytest.fixture
def engine_config() -> EngineConfig:
    """Engine config without a timeout so slow CI machines do not flake."""
    return EngineConfig(quote_timeout_seconds=None)


@pytest.fixture
def static_reader(weth_usdc_pool: Pool, usdc_dai_pool: Pool) -> StaticChainReader:
    """In-memory reader over the WETH - USDC - DAI chain."""
    return StaticChainReader(pools=[weth_usdc_pool, usdc_dai_pool])


@pytest.fixture
def engine(static_reader: StaticChainReader, engine_config: EngineConfig) -> QuoteEngine:
    """Engine over the static reader."""
    return QuoteEngine(static_reader, engine_config)
