"""Swap engine - fixed-rate conversion between one pair of tokens.

Flow for a swap:
1. Reject a zero amount before touching any balance
2. Quote against a snapshot of the current fee schedule
3. Take the pair lock, open one ledger transaction
4. Debit the source token from the caller, credit the destination token
5. Commit; any failure rolls back both legs

Fee A taxes the A -> B input, fee B taxes the B -> A input. The fee is
always taken from what the caller gives up, before conversion.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tokenswap.errors import InvalidAmountError, SwapError
from tokenswap.swap import fee_math
from tokenswap.swap.config import FeeSchedule, SwapConfig
from tokenswap.swap.interfaces import LedgerGateway
from tokenswap.utils.locks import pair_key, pair_lock

logger = logging.getLogger(__name__)


class SwapDirection(str, Enum):
    """Which way a swap converts."""

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"


@dataclass(frozen=True)
class SwapRequest:
    """One swap invocation. Never persisted."""

    direction: SwapDirection
    amount: int
    initiator: str


@dataclass(frozen=True)
class SwapQuote:
    """Breakdown of a conversion under one fee schedule."""

    direction: SwapDirection
    amount_in: int
    fee_amount: int
    net_amount: int
    amount_out: int
    rate: int
    fee_percent: int


def compute_quote(direction: SwapDirection, amount: int, schedule: FeeSchedule) -> SwapQuote:
    """Apply the fee to the input, then convert at the scheduled rate."""
    if direction == SwapDirection.A_TO_B:
        fee_percent = schedule.fee_percent_a
    else:
        fee_percent = schedule.fee_percent_b

    fee_amount = fee_math.fee_for(amount, fee_percent)
    net_amount = amount - fee_amount

    if direction == SwapDirection.A_TO_B:
        amount_out = fee_math.convert_a_to_b(net_amount, schedule.rate)
    else:
        amount_out = fee_math.convert_b_to_a(net_amount, schedule.rate)

    return SwapQuote(
        direction=direction,
        amount_in=amount,
        fee_amount=fee_amount,
        net_amount=net_amount,
        amount_out=amount_out,
        rate=schedule.rate,
        fee_percent=fee_percent,
    )


class SwapEngine:
    """Converts between token A and token B at the configured rate.

    The engine owns its configuration and its two token references. Ledger
    access goes through the gateway, one transaction per swap.
    """

    def __init__(
        self,
        gateway: LedgerGateway,
        config: SwapConfig,
        token_a: str,
        token_b: str,
        lock_timeout: Optional[float] = 30.0,
    ):
        self._gateway = gateway
        self.config = config
        self.token_a = token_a.upper()
        self.token_b = token_b.upper()
        self.lock_timeout = lock_timeout
        self._pair_key = pair_key(self.token_a, self.token_b)

    @classmethod
    async def deploy(
        cls,
        gateway: LedgerGateway,
        admin: str,
        token_a: str,
        token_b: str,
        rate: int,
        fee_percent_a: int,
        fee_percent_b: int,
        lock_timeout: Optional[float] = 30.0,
    ) -> "SwapEngine":
        """Create the configuration (granting ADMIN to ``admin``) and the engine."""
        if token_a.upper() == token_b.upper():
            raise ValueError(f"Swap pair needs two distinct tokens, got {token_a} twice")

        config = await SwapConfig.create(gateway, admin, rate, fee_percent_a, fee_percent_b)
        return cls(gateway, config, token_a, token_b, lock_timeout=lock_timeout)

    # Quoting

    def quote(self, direction: SwapDirection, amount: int) -> SwapQuote:
        """Preview a conversion under the current configuration."""
        fee_math.validate_amount(amount)
        return compute_quote(SwapDirection(direction), amount, self.config.snapshot())

    def get_converted_amount_a_to_b(self, amount: int) -> int:
        return self.quote(SwapDirection.A_TO_B, amount).amount_out

    def get_converted_amount_b_to_a(self, amount: int) -> int:
        return self.quote(SwapDirection.B_TO_A, amount).amount_out

    # Swapping

    async def swap_a_to_b(self, caller: str, amount: int) -> int:
        """Give ``amount`` of A, receive B. Returns the B credited."""
        return await self.swap(SwapDirection.A_TO_B, caller, amount)

    async def swap_b_to_a(self, caller: str, amount: int) -> int:
        """Give ``amount`` of B, receive A. Returns the A credited."""
        return await self.swap(SwapDirection.B_TO_A, caller, amount)

    async def swap(self, direction: SwapDirection, caller: str, amount: int) -> int:
        request = SwapRequest(direction=SwapDirection(direction), amount=amount, initiator=caller)
        fee_math.validate_amount(request.amount)
        if request.amount == 0:
            raise InvalidAmountError("Swap amount must be greater than zero")

        source, destination = self._legs(request.direction)

        async with pair_lock(
            self._pair_key, timeout=self.lock_timeout, operation=f"swap_{request.direction.value}"
        ):
            quote = compute_quote(request.direction, request.amount, self.config.snapshot())

            try:
                async with self._gateway.transaction() as ledgers:
                    await ledgers.ledger(source).debit(request.initiator, request.amount)
                    await ledgers.ledger(destination).credit(request.initiator, quote.amount_out)
            except SwapError as e:
                logger.warning(
                    f"Swap {request.direction.value} failed for {request.initiator}: {e}"
                )
                raise

        logger.info(
            f"Swap {request.direction.value}: {request.initiator} gave {quote.amount_in} {source} "
            f"(fee {quote.fee_amount}), received {quote.amount_out} {destination}"
        )
        return quote.amount_out

    def _legs(self, direction: SwapDirection) -> tuple[str, str]:
        if direction == SwapDirection.A_TO_B:
            return self.token_a, self.token_b
        return self.token_b, self.token_a
