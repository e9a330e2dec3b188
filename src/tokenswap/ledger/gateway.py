"""Transactional access to the ledgers for the swap engine."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tokenswap.ledger.database import shares_connection
from tokenswap.ledger.repository import (
    CapabilityRepository,
    TokenLedgerRepository,
    TokenRepository,
)
from tokenswap.swap.interfaces import LedgerGateway, LedgerSession


class SqlLedgerSession(LedgerSession):
    """Ledgers and capability store sharing one database session."""

    def __init__(self, session: AsyncSession, operator: str):
        self.session = session
        self.operator = operator
        self.tokens = TokenRepository(session)
        self._capabilities = CapabilityRepository(session)
        self._ledgers: dict[str, TokenLedgerRepository] = {}

    def ledger(self, token: str) -> TokenLedgerRepository:
        symbol = token.upper()
        if symbol not in self._ledgers:
            self._ledgers[symbol] = TokenLedgerRepository(self.session, symbol, self.operator)
        return self._ledgers[symbol]

    @property
    def capabilities(self) -> CapabilityRepository:
        return self._capabilities


class SqlLedgerGateway(LedgerGateway):
    """Opens one session per transaction.

    The transaction commits when the block exits normally and rolls back on
    any exception, so a swap whose credit fails leaves its debit undone.

    When every session of the engine runs on one connection (in-memory
    SQLite), transactions are serialized, since a commit from one session
    would also commit another session's flushed writes. Transactions must
    not be nested.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        operator: str,
        serialize: Optional[bool] = None,
    ):
        self._session_factory = session_factory
        self.operator = operator

        if serialize is None:
            bind = session_factory.kw.get("bind")
            serialize = bind is not None and shares_connection(bind)
        self._serial_lock: Optional[asyncio.Lock] = asyncio.Lock() if serialize else None

    @property
    def serialized(self) -> bool:
        return self._serial_lock is not None

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[SqlLedgerSession, None]:
        if self._serial_lock is not None:
            await self._serial_lock.acquire()
        try:
            async with self._session_factory() as session:
                try:
                    yield SqlLedgerSession(session, self.operator)
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        finally:
            if self._serial_lock is not None:
                self._serial_lock.release()
