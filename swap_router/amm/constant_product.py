"""Constant-product AMM implementation.

Pools follow the x * y = k invariant with a fee deducted from the input
amount. The fee is out of FEE_DENOMINATOR (1000) and depends on the input
token of the swap, so every function here takes a FeeInfo explicitly.

All math is exact integer arithmetic and mirrors the on-chain pair/library
formulas, including their rounding (down for outputs, up for inputs).
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from swap_router.amm.base import SwapResult
from swap_router.constants import FEE_DENOMINATOR
from swap_router.errors import InsufficientLiquidity
from swap_router.fees.types import FeeInfo
from swap_router.models.types import normalize_address, short
from swap_router.safe_int import S

logger = structlog.get_logger()


def normalize_pool_id(pool_id: str) -> str:
    """Normalize a pool id that is an address; other ids are kept as given."""
    if pool_id.strip()[:2].lower() == "0x":
        return normalize_address(pool_id)
    return pool_id


@dataclass(frozen=True)
class Pool:
    """Snapshot of a constant-product pool.

    Tokens are normalized and ordered on construction so that ``token0`` is
    always the lower address; reserves follow their tokens. Constructing
    ``Pool("p", b, a, rb, ra)`` and ``Pool("p", a, b, ra, rb)`` gives equal
    pools.
    """

    id: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", normalize_pool_id(self.id))
        token0 = normalize_address(self.token0)
        token1 = normalize_address(self.token1)
        reserve0, reserve1 = self.reserve0, self.reserve1
        if token0 == token1:
            raise ValueError(f"Pool {self.id} pairs token {token0} with itself")
        if reserve0 < 0 or reserve1 < 0:
            raise ValueError(f"Pool {self.id} has negative reserves")
        if token0 > token1:
            token0, token1 = token1, token0
            reserve0, reserve1 = reserve1, reserve0
        object.__setattr__(self, "token0", token0)
        object.__setattr__(self, "token1", token1)
        object.__setattr__(self, "reserve0", reserve0)
        object.__setattr__(self, "reserve1", reserve1)

    @property
    def is_inert(self) -> bool:
        """True if either reserve is empty; such pools cannot be routed through."""
        return self.reserve0 == 0 or self.reserve1 == 0

    @property
    def pair_key(self) -> tuple[str, str]:
        return (self.token0, self.token1)

    def has_token(self, token: str) -> bool:
        token_norm = normalize_address(token)
        return token_norm == self.token0 or token_norm == self.token1

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token0:
            return self.reserve0, self.reserve1
        elif token_in_norm == self.token1:
            return self.reserve1, self.reserve0
        else:
            raise ValueError(f"Token {token_in} not in pool {self.id}")

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token0:
            return self.token1
        elif token_in_norm == self.token1:
            return self.token0
        else:
            raise ValueError(f"Token {token_in} not in pool {self.id}")


class ConstantProductAMM:
    """Constant-product swap math.

    Formula: amount_out = (in * (D - f) * res_out) / (res_in * D + in * (D - f))

    where D = 1000 and f is the hop's total fee in parts.
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee: FeeInfo,
    ) -> int:
        """Calculate output amount for an exact input.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee: Fee tier of the input token

        Returns:
            Output token amount (rounded down). Zero when the input is not
            positive or the pool has no liquidity.
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0

        amount_in_with_fee = S(amount_in) * fee.fee_multiplier
        numerator = amount_in_with_fee * reserve_out
        denominator = S(reserve_in) * FEE_DENOMINATOR + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee: FeeInfo,
    ) -> int:
        """Calculate required input for an exact output.

        Formula: amount_in = (res_in * out * D) / ((res_out - out) * (D - f)) + 1

        The trailing +1 is the library's round-up: the result is always
        enough to buy ``amount_out`` on-chain, never one unit short.

        Args:
            amount_out: Desired output token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee: Fee tier of the input token

        Returns:
            Required input token amount

        Raises:
            InsufficientLiquidity: If amount_out >= reserve_out or the pool
                has no liquidity
        """
        if amount_out <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidity(
                f"Pool has no liquidity (reserves {reserve_in}/{reserve_out})"
            )
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(
                f"Requested output {amount_out} would drain reserve {reserve_out}"
            )

        numerator = S(reserve_in) * amount_out * FEE_DENOMINATOR
        denominator = (S(reserve_out) - amount_out) * fee.fee_multiplier

        return ((numerator // denominator) + 1).value

    def simulate_swap(
        self,
        pool: Pool,
        token_in: str,
        amount_in: int,
        fee: FeeInfo,
    ) -> SwapResult:
        """Simulate a swap through a pool (exact input)."""
        reserve_in, reserve_out = pool.get_reserves(token_in)
        token_out = pool.get_token_out(token_in)
        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out, fee)

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.id,
            token_in=normalize_address(token_in),
            token_out=token_out,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )

    def simulate_swap_exact_output(
        self,
        pool: Pool,
        token_in: str,
        amount_out: int,
        fee: FeeInfo,
    ) -> SwapResult:
        """Simulate a swap that must deliver ``amount_out``.

        Raises:
            InsufficientLiquidity: If the pool cannot deliver amount_out
        """
        reserve_in, reserve_out = pool.get_reserves(token_in)
        token_out = pool.get_token_out(token_in)
        try:
            amount_in = self.get_amount_in(amount_out, reserve_in, reserve_out, fee)
        except InsufficientLiquidity:
            logger.debug(
                "exact_output_exceeds_reserve",
                pool=short(pool.id),
                amount_out=amount_out,
                reserve_out=reserve_out,
            )
            raise

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.id,
            token_in=normalize_address(token_in),
            token_out=token_out,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )


# Singleton instance
constant_product = ConstantProductAMM()

__all__ = ["ConstantProductAMM", "Pool", "constant_product", "normalize_pool_id"]
