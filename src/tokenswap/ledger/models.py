"""SQLAlchemy models for the token ledgers and capability store."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class UintAmount(TypeDecorator):
    """Unsigned integer amount stored as a decimal string.

    256-bit amounts do not fit any native integer column, and NUMERIC on
    SQLite silently goes through float.
    """

    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)


class SettlementMode(str, Enum):
    """How the engine moves a token in and out of a caller's balance."""

    CUSTODY = "custody"      # debit = transfer_from into operator, credit = transfer out
    MINT_BURN = "mint_burn"  # debit = burn_from, credit = mint


class Token(Base):
    """A registered fungible token."""

    __tablename__ = "tokens"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    symbol: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    settlement: Mapped[str] = mapped_column(
        String(20), default=SettlementMode.CUSTODY.value, nullable=False
    )
    total_supply: Mapped[int] = mapped_column(UintAmount, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class TokenBalance(Base):
    """Balance of one account in one token."""

    __tablename__ = "token_balances"
    __table_args__ = (Index("ix_token_balances_token_account", "token", "account", unique=True),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(20), nullable=False)
    account: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(UintAmount, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class TokenAllowance(Base):
    """Amount ``spender`` may move out of ``owner``'s balance."""

    __tablename__ = "token_allowances"
    __table_args__ = (
        Index("ix_token_allowances_token_owner_spender", "token", "owner", "spender", unique=True),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(20), nullable=False)
    owner: Mapped[str] = mapped_column(String(255), nullable=False)
    spender: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(UintAmount, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class CapabilityGrant(Base):
    """Membership of an account in a capability (e.g. ADMIN, MINTER:MT)."""

    __tablename__ = "capability_grants"
    __table_args__ = (
        Index("ix_capability_grants_account_capability", "account", "capability", unique=True),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account: Mapped[str] = mapped_column(String(255), nullable=False)
    capability: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    granted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
