"""Tests for the access guard and the swap configuration."""

import pytest

from tokenswap.errors import InvalidPercentageError, InvalidRateError, UnauthorizedError
from tokenswap.swap.access import ADMIN as ADMIN_CAPABILITY
from tokenswap.swap.access import AccessGuard
from tokenswap.swap.config import FeeSchedule, SwapConfig
from tokenswap.swap.fee_math import PCT_SCALE

ADMIN = "admin"
ALICE = "alice"
TEN_PERCENT = 10 * 10**8


class TestAccessGuard:
    """Tests for capability checks."""

    @pytest.mark.asyncio
    async def test_missing_capability_is_unauthorized(self, gateway):
        guard = AccessGuard(gateway)

        with pytest.raises(UnauthorizedError) as exc_info:
            await guard.require_capability(ALICE, ADMIN_CAPABILITY)

        assert exc_info.value.account == ALICE
        assert exc_info.value.capability == ADMIN_CAPABILITY

    @pytest.mark.asyncio
    async def test_granted_capability_passes(self, gateway):
        async with gateway.transaction() as ledgers:
            await ledgers.capabilities.grant(ALICE, ADMIN_CAPABILITY)

        await AccessGuard(gateway).require_capability(ALICE, ADMIN_CAPABILITY)

    @pytest.mark.asyncio
    async def test_revocation_applies_on_next_check(self, gateway):
        """Nothing is cached between checks."""
        guard = AccessGuard(gateway)
        async with gateway.transaction() as ledgers:
            await ledgers.capabilities.grant(ALICE, ADMIN_CAPABILITY)

        assert await guard.has_capability(ALICE, ADMIN_CAPABILITY)

        async with gateway.transaction() as ledgers:
            await ledgers.capabilities.revoke(ALICE, ADMIN_CAPABILITY)

        with pytest.raises(UnauthorizedError):
            await guard.require_capability(ALICE, ADMIN_CAPABILITY)


class TestSwapConfigCreation:
    """Tests for SwapConfig.create."""

    @pytest.mark.asyncio
    async def test_create_grants_admin(self, gateway):
        config = await SwapConfig.create(gateway, ADMIN, 3, 0, TEN_PERCENT)

        assert config.get_rate() == 3
        assert config.get_fee_percent_a() == 0
        assert config.get_fee_percent_b() == TEN_PERCENT
        assert await AccessGuard(gateway).has_capability(ADMIN, ADMIN_CAPABILITY)

    @pytest.mark.asyncio
    async def test_create_rejects_fee_above_scale(self, gateway):
        with pytest.raises(InvalidPercentageError):
            await SwapConfig.create(gateway, ADMIN, 3, PCT_SCALE + 1, 0)

        # Nothing was granted
        assert not await AccessGuard(gateway).has_capability(ADMIN, ADMIN_CAPABILITY)

    @pytest.mark.asyncio
    async def test_create_rejects_zero_rate(self, gateway):
        with pytest.raises(InvalidRateError):
            await SwapConfig.create(gateway, ADMIN, 0, 0, 0)


class TestSetFees:
    """Tests for fee updates."""

    @pytest.fixture
    async def config(self, gateway) -> SwapConfig:
        return await SwapConfig.create(gateway, ADMIN, 3, 0, 0)

    @pytest.mark.asyncio
    async def test_admin_sets_fees(self, config):
        await config.set_fees(ADMIN, TEN_PERCENT, 0)

        assert config.get_fee_percent_a() == TEN_PERCENT
        assert config.get_fee_percent_b() == 0

    @pytest.mark.asyncio
    async def test_full_fee_is_allowed(self, config):
        await config.set_fees(ADMIN, PCT_SCALE, PCT_SCALE)

        assert config.snapshot() == FeeSchedule(rate=3, fee_percent_a=PCT_SCALE, fee_percent_b=PCT_SCALE)

    @pytest.mark.asyncio
    async def test_fee_above_100_percent_rejected(self, config):
        with pytest.raises(InvalidPercentageError, match="fee_percent_a"):
            await config.set_fees(ADMIN, 101 * 10**8, 0)

        assert config.get_fee_percent_a() == 0

    @pytest.mark.asyncio
    async def test_rejection_leaves_both_fees_unchanged(self, config):
        """A valid first value is not committed when the second is invalid."""
        await config.set_fees(ADMIN, TEN_PERCENT, TEN_PERCENT)

        with pytest.raises(InvalidPercentageError, match="fee_percent_b"):
            await config.set_fees(ADMIN, 5 * 10**8, PCT_SCALE + 1)

        assert config.get_fee_percent_a() == TEN_PERCENT
        assert config.get_fee_percent_b() == TEN_PERCENT

    @pytest.mark.asyncio
    async def test_non_admin_rejected(self, config):
        with pytest.raises(UnauthorizedError):
            await config.set_fees(ALICE, TEN_PERCENT, TEN_PERCENT)

        assert config.get_fee_percent_a() == 0
        assert config.get_fee_percent_b() == 0

    @pytest.mark.asyncio
    async def test_authorization_checked_before_validation(self, config):
        """An unauthorized caller learns nothing about value validity."""
        with pytest.raises(UnauthorizedError):
            await config.set_fees(ALICE, PCT_SCALE + 1, 0)


class TestSetRate:
    """Tests for rate updates."""

    @pytest.mark.asyncio
    async def test_admin_sets_rate(self, gateway):
        config = await SwapConfig.create(gateway, ADMIN, 3, 0, 0)

        await config.set_rate(ADMIN, 5)

        assert config.get_rate() == 5

    @pytest.mark.asyncio
    async def test_zero_rate_rejected(self, gateway):
        config = await SwapConfig.create(gateway, ADMIN, 3, 0, 0)

        with pytest.raises(InvalidRateError):
            await config.set_rate(ADMIN, 0)

        assert config.get_rate() == 3

    @pytest.mark.asyncio
    async def test_non_admin_rejected(self, gateway):
        config = await SwapConfig.create(gateway, ADMIN, 3, 0, 0)

        with pytest.raises(UnauthorizedError):
            await config.set_rate(ALICE, 10)

        assert config.get_rate() == 3
