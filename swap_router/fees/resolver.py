"""Fee tier resolution for a (pool, input token) pair.

The fee of a hop is decided by the hop's input token alone: tokens created
by the known launch platform carry a split tier that pays part of the fee to
their creator; everything else pays the default tier.

FeeResolver itself does no I/O. It answers from a table of launch profiles
captured at the start of the request (see swap_router.engine), which keeps
route search deterministic and testable without a chain.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

import structlog

from swap_router.errors import ExternalReadFailure
from swap_router.fees.types import DEFAULT_FEE, FeeInfo, LaunchProfile
from swap_router.models.types import normalize_address, short

if TYPE_CHECKING:
    from swap_router.amm.constant_product import Pool

logger = structlog.get_logger()


class FeeResolver:
    """Resolves the FeeInfo for each hop from captured launch profiles.

    Args:
        launcher: Address of the launch platform whose tokens get the split tier
        profiles: token -> LaunchProfile, or None for tokens that do not
            expose the launch capability. Tokens missing from the table are
            treated as plain tokens.
        unavailable: Tokens whose profile read failed. Resolving a fee for
            one of them raises ExternalReadFailure.
    """

    def __init__(
        self,
        launcher: str,
        profiles: Mapping[str, LaunchProfile | None] | None = None,
        unavailable: Iterable[str] = (),
    ) -> None:
        self.launcher = normalize_address(launcher)
        self._profiles: dict[str, LaunchProfile | None] = {
            normalize_address(token): profile for token, profile in (profiles or {}).items()
        }
        self._unavailable = frozenset(normalize_address(t) for t in unavailable)

    @property
    def unavailable(self) -> frozenset[str]:
        return self._unavailable

    def profile(self, token: str) -> LaunchProfile | None:
        """Captured launch profile for ``token`` (None if it has none).

        Raises:
            ExternalReadFailure: If the profile read for this token failed
        """
        token_norm = normalize_address(token)
        if token_norm in self._unavailable:
            raise ExternalReadFailure(f"Fee profile for {token_norm} could not be read")
        return self._profiles.get(token_norm)

    def is_launch_token(self, token: str) -> bool:
        profile = self.profile(token)
        return profile is not None and profile.launcher == self.launcher

    def resolve(self, pool: Pool, input_token: str) -> FeeInfo:
        """Fee tier for swapping ``input_token`` through ``pool``.

        Args:
            pool: Pool the hop trades through
            input_token: Token sold into the pool on this hop

        Returns:
            Launch tier with the token's creator as recipient when the token
            was created by the known launcher, otherwise the default tier.

        Raises:
            ValueError: If input_token is not one of the pool's tokens
            ExternalReadFailure: If the token's profile could not be read
        """
        if not pool.has_token(input_token):
            raise ValueError(f"Token {input_token} not in pool {pool.id}")

        profile = self.profile(input_token)
        if profile is None:
            return DEFAULT_FEE

        if profile.launcher != self.launcher:
            logger.debug(
                "foreign_launcher",
                token=short(normalize_address(input_token)),
                launcher=short(profile.launcher),
            )
            return DEFAULT_FEE

        return FeeInfo.launch(profile.creator)


__all__ = ["FeeResolver"]
