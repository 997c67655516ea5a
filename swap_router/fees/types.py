"""Fee tier types."""

from __future__ import annotations

from dataclasses import dataclass

from swap_router.constants import (
    DEFAULT_CREATOR_FEE_PARTS,
    DEFAULT_LP_FEE_PARTS,
    FEE_DENOMINATOR,
    LAUNCH_CREATOR_FEE_PARTS,
    LAUNCH_LP_FEE_PARTS,
    ZERO_ADDRESS,
)
from swap_router.models.types import normalize_address


@dataclass(frozen=True)
class FeeInfo:
    """Fee charged on the input amount of one hop.

    Parts are out of FEE_DENOMINATOR (1000), so the default tier of 3 parts
    is 0.3%. The creator share is paid to ``creator_recipient``; the LP share
    stays in the pool.

    Attributes:
        lp_fee_parts: Parts kept by liquidity providers
        creator_fee_parts: Parts diverted to the token creator
        creator_recipient: Address receiving the creator share (zero if none)
    """

    lp_fee_parts: int
    creator_fee_parts: int = 0
    creator_recipient: str = ZERO_ADDRESS

    def __post_init__(self) -> None:
        if self.lp_fee_parts < 0 or self.creator_fee_parts < 0:
            raise ValueError(
                f"Fee parts cannot be negative: lp={self.lp_fee_parts}, "
                f"creator={self.creator_fee_parts}"
            )
        if self.lp_fee_parts + self.creator_fee_parts >= FEE_DENOMINATOR:
            raise ValueError(
                f"Total fee {self.lp_fee_parts + self.creator_fee_parts} parts "
                f"must be below {FEE_DENOMINATOR}"
            )

    @property
    def total_parts(self) -> int:
        """Combined fee parts (lp + creator)."""
        return self.lp_fee_parts + self.creator_fee_parts

    @property
    def fee_multiplier(self) -> int:
        """Share of the input that reaches the curve (FEE_DENOMINATOR - total).

        For the default 3-part tier this returns 997.
        """
        return FEE_DENOMINATOR - self.total_parts

    @property
    def has_creator_fee(self) -> bool:
        return self.creator_fee_parts > 0

    def fee_amount(self, amount_in: int) -> int:
        """Total fee taken from ``amount_in`` (floor)."""
        return amount_in * self.total_parts // FEE_DENOMINATOR

    def lp_fee_amount(self, amount_in: int) -> int:
        return amount_in * self.lp_fee_parts // FEE_DENOMINATOR

    def creator_fee_amount(self, amount_in: int) -> int:
        return amount_in * self.creator_fee_parts // FEE_DENOMINATOR

    @classmethod
    def launch(cls, creator: str) -> FeeInfo:
        """Launch-token tier: 0.2% to LPs, 0.1% to ``creator``."""
        return cls(
            lp_fee_parts=LAUNCH_LP_FEE_PARTS,
            creator_fee_parts=LAUNCH_CREATOR_FEE_PARTS,
            creator_recipient=normalize_address(creator),
        )


DEFAULT_FEE = FeeInfo(
    lp_fee_parts=DEFAULT_LP_FEE_PARTS,
    creator_fee_parts=DEFAULT_CREATOR_FEE_PARTS,
)


@dataclass(frozen=True)
class LaunchProfile:
    """Answer of the optional "launch token" capability query on a token.

    A token either exposes this profile (``LaunchProfile``) or does not
    (``None``); the absence is a normal outcome, not an error.

    Attributes:
        launcher: Launch platform the token reports it was created by
        creator: Address registered as the token's creator
    """

    launcher: str
    creator: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "launcher", normalize_address(self.launcher))
        object.__setattr__(self, "creator", normalize_address(self.creator))


__all__ = ["DEFAULT_FEE", "FeeInfo", "LaunchProfile"]
