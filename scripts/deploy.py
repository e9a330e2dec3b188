#!/usr/bin/env python3
"""Deploy the swap: create tables, register both tokens, grant roles.

Reads ADMIN_ACCOUNT, TOKEN_A_SYMBOL, TOKEN_B_SYMBOL, SWAP_RATE, FEE_PERCENT_A
and FEE_PERCENT_B from the environment (or .env).
"""

import asyncio
import sys

from dotenv import load_dotenv
load_dotenv()

from tokenswap.config import get_settings
from tokenswap.ledger.database import close_db, get_session_factory, init_db
from tokenswap.ledger.gateway import SqlLedgerGateway
from tokenswap.services.deployment import deploy_swap


async def deploy() -> int:
    settings = get_settings()

    if not settings.admin_account:
        print("Please set ADMIN_ACCOUNT in the environment or .env file")
        return 1

    print(f"Deploying swap with admin account: {settings.admin_account}")

    await init_db()
    try:
        gateway = SqlLedgerGateway(get_session_factory(), settings.operator_account)
        engine = await deploy_swap(gateway, settings)
    finally:
        await close_db()

    print(f"Swap deployed: {engine.token_a} <-> {engine.token_b}")
    print(f"  rate:          {engine.config.get_rate()}")
    print(f"  fee_percent_a: {engine.config.get_fee_percent_a()}")
    print(f"  fee_percent_b: {engine.config.get_fee_percent_b()}")
    print(f"  operator:      {settings.operator_account}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(deploy()))
