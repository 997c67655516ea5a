"""Fee tiers and per-hop fee resolution.

Usage:
    from swap_router.fees import FeeResolver, LaunchProfile

    resolver = FeeResolver(launcher, profiles={token: LaunchProfile(launcher, creator)})
    fee = resolver.resolve(pool, token)
"""

from swap_router.fees.resolver import FeeResolver
from swap_router.fees.types import DEFAULT_FEE, FeeInfo, LaunchProfile

__all__ = [
    "DEFAULT_FEE",
    "FeeInfo",
    "FeeResolver",
    "LaunchProfile",
]
