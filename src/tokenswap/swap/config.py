"""Mutable swap configuration: rate and per-direction fees."""

import logging
from dataclasses import dataclass

from tokenswap.swap import fee_math
from tokenswap.swap.access import ADMIN, AccessGuard
from tokenswap.swap.interfaces import LedgerGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeSchedule:
    """Consistent view of the configuration for one quote or swap."""

    rate: int
    fee_percent_a: int
    fee_percent_b: int


class SwapConfig:
    """Rate and fee state for a single engine.

    Reads are public. Writes require the ADMIN capability and validate every
    argument before anything is assigned, so a rejected write leaves the
    previous values untouched.
    """

    def __init__(self, guard: AccessGuard, rate: int, fee_percent_a: int, fee_percent_b: int):
        self._guard = guard
        self._rate = fee_math.validate_rate(rate)
        self._fee_percent_a = fee_math.validate_percentage(fee_percent_a, "fee_percent_a")
        self._fee_percent_b = fee_math.validate_percentage(fee_percent_b, "fee_percent_b")

    @classmethod
    async def create(
        cls,
        gateway: LedgerGateway,
        admin: str,
        rate: int,
        fee_percent_a: int,
        fee_percent_b: int,
    ) -> "SwapConfig":
        """Validate the initial values and grant ADMIN to ``admin``."""
        config = cls(AccessGuard(gateway), rate, fee_percent_a, fee_percent_b)

        async with gateway.transaction() as ledgers:
            await ledgers.capabilities.grant(admin, ADMIN)

        logger.info(
            f"Swap config created: admin={admin} rate={rate} "
            f"fee_a={fee_percent_a} fee_b={fee_percent_b}"
        )
        return config

    def get_rate(self) -> int:
        return self._rate

    def get_fee_percent_a(self) -> int:
        return self._fee_percent_a

    def get_fee_percent_b(self) -> int:
        return self._fee_percent_b

    def snapshot(self) -> FeeSchedule:
        return FeeSchedule(
            rate=self._rate,
            fee_percent_a=self._fee_percent_a,
            fee_percent_b=self._fee_percent_b,
        )

    async def set_fees(self, caller: str, fee_percent_a: int, fee_percent_b: int) -> None:
        """Replace both fee percentages, or neither."""
        await self._guard.require_capability(caller, ADMIN)

        fee_math.validate_percentage(fee_percent_a, "fee_percent_a")
        fee_math.validate_percentage(fee_percent_b, "fee_percent_b")

        self._fee_percent_a = fee_percent_a
        self._fee_percent_b = fee_percent_b
        logger.info(f"Fees updated by {caller}: fee_a={fee_percent_a} fee_b={fee_percent_b}")

    async def set_rate(self, caller: str, rate: int) -> None:
        """Replace the exchange rate."""
        await self._guard.require_capability(caller, ADMIN)

        fee_math.validate_rate(rate)

        self._rate = rate
        logger.info(f"Rate updated by {caller}: rate={rate}")
