"""Collaborator interfaces consumed by the swap engine.

The engine never talks to a database directly. It opens a transaction on a
``LedgerGateway`` and works through the ``TokenLedger`` and
``CapabilityStore`` the session hands out.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager


class TokenLedger(ABC):
    """Balance movements for one token."""

    @abstractmethod
    async def balance_of(self, account: str) -> int:
        pass

    @abstractmethod
    async def debit(self, account: str, amount: int) -> None:
        """Take ``amount`` from ``account`` into custody or burn it."""
        pass

    @abstractmethod
    async def credit(self, account: str, amount: int) -> None:
        """Give ``amount`` to ``account`` from custody or by minting."""
        pass


class CapabilityStore(ABC):
    """Who holds which capability."""

    @abstractmethod
    async def has(self, account: str, capability: str) -> bool:
        pass

    @abstractmethod
    async def grant(self, account: str, capability: str):
        pass


class LedgerSession(ABC):
    """A single transactional view over the ledgers."""

    @abstractmethod
    def ledger(self, token: str) -> TokenLedger:
        pass

    @property
    @abstractmethod
    def capabilities(self) -> CapabilityStore:
        pass


class LedgerGateway(ABC):
    """Source of transactions; commits on success and rolls back on error."""

    @abstractmethod
    def transaction(self) -> AsyncContextManager[LedgerSession]:
        pass
