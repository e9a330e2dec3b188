"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["ADMIN_ACCOUNT"] = "admin"

from tokenswap.config import Settings
from tokenswap.ledger.gateway import SqlLedgerGateway
from tokenswap.ledger.models import Base
from tokenswap.services.deployment import deploy_swap
from tokenswap.utils.locks import clear_pair_locks

ADMIN = "admin"
OPERATOR = "tokenswap"
ALICE = "alice"
BOB = "bob"
TOKEN_A = "TT"
TOKEN_B = "MT"

# One whole token with 18 decimals
E18 = 10**18


@pytest.fixture(autouse=True)
def reset_locks():
    """Pair locks must not leak between event loops."""
    clear_pair_locks()
    yield
    clear_pair_locks()


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway(session_factory) -> SqlLedgerGateway:
    """Ledger gateway acting as the swap operator."""
    return SqlLedgerGateway(session_factory, OPERATOR)


@pytest.fixture
def swap_settings() -> Settings:
    """Rate 3, no fees."""
    return Settings(
        admin_account=ADMIN,
        operator_account=OPERATOR,
        token_a_symbol=TOKEN_A,
        token_b_symbol=TOKEN_B,
        swap_rate=3,
        fee_percent_a=0,
        fee_percent_b=0,
    )


@pytest_asyncio.fixture
async def swap_engine(gateway, swap_settings):
    """Deployed engine with both tokens registered."""
    return await deploy_swap(gateway, swap_settings)


@pytest.fixture
def fund(gateway, swap_engine):
    """Mint tokens to an account and approve the operator to spend them."""

    async def _fund(account: str, symbol: str, amount: int, approve: bool = True) -> None:
        async with gateway.transaction() as ledgers:
            ledger = ledgers.ledger(symbol)
            await ledger.mint(ADMIN, account, amount)
            if approve:
                current = await ledger.allowance(account, OPERATOR)
                await ledger.approve(account, OPERATOR, current + amount)

    return _fund


@pytest.fixture
def balance_of(gateway):
    """Read a balance in its own transaction."""

    async def _balance_of(account: str, symbol: str) -> int:
        async with gateway.transaction() as ledgers:
            return await ledgers.ledger(symbol).balance_of(account)

    return _balance_of
