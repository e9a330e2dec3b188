"""Ledger module for token balances, allowances and capabilities."""

from tokenswap.ledger.database import close_db, init_db
from tokenswap.ledger.gateway import SqlLedgerGateway, SqlLedgerSession
from tokenswap.ledger.models import (
    CapabilityGrant,
    SettlementMode,
    Token,
    TokenAllowance,
    TokenBalance,
)
from tokenswap.ledger.repository import (
    CapabilityRepository,
    TokenLedgerRepository,
    TokenRepository,
)

__all__ = [
    # Models
    "Token",
    "TokenBalance",
    "TokenAllowance",
    "CapabilityGrant",
    # Enums
    "SettlementMode",
    # Database
    "close_db",
    "init_db",
    # Repositories
    "TokenRepository",
    "TokenLedgerRepository",
    "CapabilityRepository",
    # Gateway
    "SqlLedgerGateway",
    "SqlLedgerSession",
]
