#!/usr/bin/env python3
"""Mint tokens to an account directly in the database."""

import asyncio
import sys

from dotenv import load_dotenv
load_dotenv()

from tokenswap.config import get_settings
from tokenswap.errors import SwapError
from tokenswap.ledger.database import close_db, get_session_factory
from tokenswap.ledger.gateway import SqlLedgerGateway


async def mint_tokens(minter: str, account: str, symbol: str, amount: int):
    settings = get_settings()
    gateway = SqlLedgerGateway(get_session_factory(), settings.operator_account)

    try:
        async with gateway.transaction() as ledgers:
            ledger = ledgers.ledger(symbol)
            await ledger.mint(minter, account, amount)
            balance = await ledger.balance_of(account)
    except SwapError as e:
        print(f"Mint failed: {e}")
        return
    finally:
        await close_db()

    print(f"Minted {amount} {symbol.upper()} to {account}")
    print(f"New balance: {balance} {symbol.upper()}")


if __name__ == "__main__":
    if len(sys.argv) != 5:
        print("Usage: python mint_tokens.py <minter> <account> <symbol> <amount>")
        print("Example: python mint_tokens.py admin alice TT 300000000000000000000")
        sys.exit(1)

    minter = sys.argv[1]
    account = sys.argv[2]
    symbol = sys.argv[3]
    amount = int(sys.argv[4])

    asyncio.run(mint_tokens(minter, account, symbol, amount))
