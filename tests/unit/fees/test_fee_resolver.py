"""Tests for fee tiers and per-hop fee resolution."""

import pytest

from swap_router.constants import ZERO_ADDRESS
from swap_router.errors import ExternalReadFailure
from swap_router.fees.resolver import FeeResolver
from swap_router.fees.types import DEFAULT_FEE, FeeInfo, LaunchProfile
from tests.helpers import (
    CREATOR,
    FAKE_MEME,
    LAUNCHER,
    MEME,
    OTHER_LAUNCHER,
    USDC,
    WETH,
    make_pool,
    make_resolver,
)


class TestFeeInfo:
    """Tests for FeeInfo validation and amounts."""

    def test_default_tier(self):
        assert DEFAULT_FEE.lp_fee_parts == 3
        assert DEFAULT_FEE.creator_fee_parts == 0
        assert DEFAULT_FEE.creator_recipient == ZERO_ADDRESS
        assert DEFAULT_FEE.fee_multiplier == 997

    def test_launch_tier(self):
        fee = FeeInfo.launch(CREATOR.upper().replace("0X", "0x"))
        assert fee.lp_fee_parts == 2
        assert fee.creator_fee_parts == 1
        assert fee.creator_recipient == CREATOR
        assert fee.has_creator_fee
        assert fee.fee_multiplier == 997

    def test_fee_amounts_floor(self):
        fee = FeeInfo.launch(CREATOR)
        assert fee.fee_amount(1000) == 3
        assert fee.lp_fee_amount(1000) == 2
        assert fee.creator_fee_amount(1000) == 1
        assert fee.fee_amount(999) == 2
        assert fee.creator_fee_amount(999) == 0

    def test_total_must_stay_below_denominator(self):
        with pytest.raises(ValueError):
            FeeInfo(lp_fee_parts=999, creator_fee_parts=1)
        with pytest.raises(ValueError):
            FeeInfo(lp_fee_parts=1000)

    def test_negative_parts_rejected(self):
        with pytest.raises(ValueError):
            FeeInfo(lp_fee_parts=-1)
        with pytest.raises(ValueError):
            FeeInfo(lp_fee_parts=3, creator_fee_parts=-1)

    def test_launch_profile_normalized(self):
        profile = LaunchProfile(launcher=LAUNCHER.upper().replace("0X", "0x"), creator=CREATOR[2:])
        assert profile.launcher == LAUNCHER
        assert profile.creator == CREATOR


class TestFeeResolver:
    """Tests for FeeResolver.resolve."""

    def test_plain_token_gets_default(self):
        """A token without a launch profile pays the default tier."""
        resolver = make_resolver()
        pool = make_pool(WETH, USDC, 10, 10)
        assert resolver.resolve(pool, WETH) == DEFAULT_FEE

    def test_launch_token_gets_split_tier(self):
        """A token launched by the known launcher pays 2 + 1 to its creator."""
        resolver = make_resolver({MEME: CREATOR})
        pool = make_pool(MEME, WETH, 10, 10)
        fee = resolver.resolve(pool, MEME)
        assert fee == FeeInfo(lp_fee_parts=2, creator_fee_parts=1, creator_recipient=CREATOR)
        assert fee.creator_recipient != ZERO_ADDRESS

    def test_tier_follows_input_token(self):
        """Selling the other side of a launch-token pool pays the default tier."""
        resolver = make_resolver({MEME: CREATOR})
        pool = make_pool(MEME, WETH, 10, 10)
        assert resolver.resolve(pool, WETH) == DEFAULT_FEE

    def test_foreign_launcher_gets_default(self):
        """A profile naming another launcher is not our launch token."""
        resolver = FeeResolver(
            LAUNCHER, {FAKE_MEME: LaunchProfile(launcher=OTHER_LAUNCHER, creator=CREATOR)}
        )
        pool = make_pool(FAKE_MEME, WETH, 10, 10)
        assert resolver.resolve(pool, FAKE_MEME) == DEFAULT_FEE
        assert not resolver.is_launch_token(FAKE_MEME)

    def test_explicit_none_profile_gets_default(self):
        resolver = FeeResolver(LAUNCHER, {MEME: None})
        pool = make_pool(MEME, WETH, 10, 10)
        assert resolver.resolve(pool, MEME) == DEFAULT_FEE

    def test_lookup_is_case_insensitive(self):
        resolver = make_resolver({MEME.upper().replace("0X", "0x"): CREATOR})
        pool = make_pool(MEME, WETH, 10, 10)
        assert resolver.resolve(pool, MEME).has_creator_fee
        assert resolver.is_launch_token(MEME[2:])

    def test_unavailable_profile_raises(self):
        """A failed profile read surfaces as ExternalReadFailure."""
        resolver = make_resolver(unavailable=(MEME,))
        pool = make_pool(MEME, WETH, 10, 10)
        with pytest.raises(ExternalReadFailure):
            resolver.resolve(pool, MEME)
        assert MEME in resolver.unavailable

    def test_unavailable_does_not_affect_other_side(self):
        resolver = make_resolver(unavailable=(MEME,))
        pool = make_pool(MEME, WETH, 10, 10)
        assert resolver.resolve(pool, WETH) == DEFAULT_FEE

    def test_token_not_in_pool_raises(self):
        resolver = make_resolver()
        pool = make_pool(WETH, USDC, 10, 10)
        with pytest.raises(ValueError):
            resolver.resolve(pool, MEME)
