"""Chain-state readers: pool reserves and token launch profiles.

The quoting core never reads the chain. It consumes what a ChainReader
returns, captured once per request by swap_router.engine.QuoteEngine.
Readers are synchronous; the engine fans calls out concurrently.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

import structlog
from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from swap_router.amm.constant_product import Pool
from swap_router.chain.abi import FACTORY_ABI, LAUNCH_TOKEN_ABI, PAIR_ABI
from swap_router.errors import ExternalReadFailure
from swap_router.fees.types import LaunchProfile
from swap_router.models.types import normalize_address, short

logger = structlog.get_logger()


class ChainReader(Protocol):
    """Protocol for chain-state readers.

    This allows swapping between the RPC-backed reader and an in-memory one
    for tests. Every method raises ExternalReadFailure when the underlying
    read fails.
    """

    def list_pool_ids(self) -> list[str]:
        """All pool ids known to the factory, in factory order."""
        ...

    def read_pool(self, pool_id: str) -> Pool:
        """Current tokens and reserves of one pool."""
        ...

    def read_fee_profile(self, token: str) -> LaunchProfile | None:
        """Launch profile of a token, or None if it does not expose one."""
        ...


class StaticChainReader:
    """In-memory reader for tests and offline quoting.

    Configure with pools and launch profiles, optionally mark reads that
    should fail, and inspect ``calls`` for assertions.
    """

    def __init__(
        self,
        pools: Iterable[Pool] = (),
        profiles: Mapping[str, LaunchProfile] | None = None,
        failing_pools: Iterable[str] = (),
        failing_tokens: Iterable[str] = (),
    ) -> None:
        self.pools = {pool.id: pool for pool in pools}
        self.profiles = {normalize_address(t): p for t, p in (profiles or {}).items()}
        self.failing_pools = set(failing_pools)
        self.failing_tokens = {normalize_address(t) for t in failing_tokens}
        self.calls: list[tuple[str, str]] = []

    def list_pool_ids(self) -> list[str]:
        self.calls.append(("list_pool_ids", ""))
        return list(self.pools)

    def read_pool(self, pool_id: str) -> Pool:
        self.calls.append(("read_pool", pool_id))
        if pool_id in self.failing_pools:
            raise ExternalReadFailure(f"Reserves of pool {pool_id} unavailable")
        try:
            return self.pools[pool_id]
        except KeyError as e:
            raise ExternalReadFailure(f"Unknown pool {pool_id}") from e

    def read_fee_profile(self, token: str) -> LaunchProfile | None:
        token_norm = normalize_address(token)
        self.calls.append(("read_fee_profile", token_norm))
        if token_norm in self.failing_tokens:
            raise ExternalReadFailure(f"Fee profile of {token_norm} unavailable")
        return self.profiles.get(token_norm)


class Web3ChainReader:
    """Reader that calls the factory, pair and token contracts via RPC.

    Makes plain eth_call requests; no state is cached between calls.
    """

    def __init__(self, web3_provider: str, factory_address: str, timeout: float = 10.0):
        """Initialize reader with a web3 provider.

        Args:
            web3_provider: HTTP RPC URL
            factory_address: Pair factory to enumerate pools from
            timeout: Per-request HTTP timeout in seconds
        """
        self.w3 = Web3(Web3.HTTPProvider(web3_provider, request_kwargs={"timeout": timeout}))
        self.factory = self.w3.eth.contract(
            address=Web3.to_checksum_address(factory_address),
            abi=FACTORY_ABI,
        )

    def list_pool_ids(self) -> list[str]:
        try:
            length = self.factory.functions.allPairsLength().call()
            return [
                normalize_address(self.factory.functions.allPairs(i).call())
                for i in range(int(length))
            ]
        except Exception as e:
            logger.warning("pool_enumeration_failed", error=str(e))
            raise ExternalReadFailure(f"Could not enumerate pools: {e}") from e

    def read_pool(self, pool_id: str) -> Pool:
        try:
            pair = self.w3.eth.contract(address=Web3.to_checksum_address(pool_id), abi=PAIR_ABI)
            token0 = pair.functions.token0().call()
            token1 = pair.functions.token1().call()
            reserve0, reserve1, _timestamp = pair.functions.getReserves().call()
        except Exception as e:
            logger.warning("pool_read_failed", pool=short(pool_id), error=str(e))
            raise ExternalReadFailure(f"Could not read pool {pool_id}: {e}") from e

        return Pool(
            id=pool_id,
            token0=token0,
            token1=token1,
            reserve0=int(reserve0),
            reserve1=int(reserve1),
        )

    def read_fee_profile(self, token: str) -> LaunchProfile | None:
        """Probe the token for the launch-token interface.

        A revert or undecodable (empty) return from ``launcher()`` means the
        token does not implement the interface, which is the normal case and
        yields None. Transport errors are ExternalReadFailure.
        """
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(token),
            abi=LAUNCH_TOKEN_ABI,
        )
        try:
            launcher = contract.functions.launcher().call()
        except (ContractLogicError, BadFunctionCallOutput):
            return None
        except Exception as e:
            logger.warning("fee_profile_read_failed", token=short(token), error=str(e))
            raise ExternalReadFailure(f"Could not probe {token}: {e}") from e

        try:
            creator = contract.functions.creator().call()
        except (ContractLogicError, BadFunctionCallOutput):
            return None
        except Exception as e:
            logger.warning("fee_profile_read_failed", token=short(token), error=str(e))
            raise ExternalReadFailure(f"Could not read creator of {token}: {e}") from e

        return LaunchProfile(launcher=launcher, creator=creator)


__all__ = ["ChainReader", "StaticChainReader", "Web3ChainReader"]
