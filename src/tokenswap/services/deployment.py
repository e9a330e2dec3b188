"""Deploy a swap engine from settings.

Token A settles by custody (the operator holds what callers pay in and pays
out of it), token B by mint and burn. The operator is made a minter of
token B so the A -> B direction can credit.
"""

import logging
from typing import Optional

from tokenswap.config import Settings, get_settings
from tokenswap.ledger.gateway import SqlLedgerGateway
from tokenswap.ledger.models import SettlementMode
from tokenswap.swap.access import minter_capability
from tokenswap.swap.engine import SwapEngine

logger = logging.getLogger(__name__)


async def register_pair(settings: Settings, gateway: SqlLedgerGateway) -> None:
    """Register both tokens and hand out the minter capabilities.

    The operator mints token B. The admin, as issuer of both tokens, may
    mint either.
    """
    async with gateway.transaction() as ledgers:
        await ledgers.tokens.register(
            settings.token_a_symbol, settings.token_a_name, SettlementMode.CUSTODY
        )
        await ledgers.tokens.register(
            settings.token_b_symbol, settings.token_b_name, SettlementMode.MINT_BURN
        )
        await ledgers.capabilities.grant(
            settings.operator_account, minter_capability(settings.token_b_symbol)
        )
        if settings.admin_account:
            for symbol in (settings.token_a_symbol, settings.token_b_symbol):
                await ledgers.capabilities.grant(settings.admin_account, minter_capability(symbol))


async def deploy_swap(
    gateway: SqlLedgerGateway,
    settings: Optional[Settings] = None,
) -> SwapEngine:
    """Register the pair and construct the engine with the configured admin."""
    settings = settings or get_settings()

    if not settings.admin_account:
        raise ValueError("ADMIN_ACCOUNT must be set to deploy the swap")

    await register_pair(settings, gateway)

    engine = await SwapEngine.deploy(
        gateway,
        admin=settings.admin_account,
        token_a=settings.token_a_symbol,
        token_b=settings.token_b_symbol,
        rate=settings.swap_rate,
        fee_percent_a=settings.fee_percent_a,
        fee_percent_b=settings.fee_percent_b,
        lock_timeout=settings.lock_timeout,
    )

    logger.info(
        f"Swap deployed: {engine.token_a}/{engine.token_b} rate={settings.swap_rate} "
        f"admin={settings.admin_account} operator={settings.operator_account}"
    )
    return engine
