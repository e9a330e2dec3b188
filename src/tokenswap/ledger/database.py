"""Database engine and session factory for the token ledgers."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tokenswap.config import get_settings
from tokenswap.ledger.models import Base

# Global engine and session factory
_engine = None
_session_factory = None


def get_engine() -> AsyncEngine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        # Convert sqlite:/// to sqlite+aiosqlite:/// if needed
        db_url = settings.database_url
        if db_url.startswith("sqlite:///") and "aiosqlite" not in db_url:
            db_url = db_url.replace("sqlite:///", "sqlite+aiosqlite:///")

        kwargs = {}
        if ":memory:" in db_url:
            # Every connection to :memory: is a separate database
            kwargs["poolclass"] = StaticPool

        _engine = create_async_engine(
            db_url,
            echo=settings.debug and not settings.is_production,
            **kwargs,
        )
    return _engine


def shares_connection(engine: AsyncEngine) -> bool:
    """True when all sessions of ``engine`` run on one DBAPI connection.

    On such an engine a commit from any session also commits whatever other
    open sessions have flushed, so transactions must not overlap.
    """
    return isinstance(engine.pool, StaticPool)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def init_db() -> None:
    """Create all ledger tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine. The next call to get_engine() starts over."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
