"""Capability checks for configuration changes."""

import logging

from tokenswap.errors import UnauthorizedError
from tokenswap.swap.interfaces import LedgerGateway

logger = logging.getLogger(__name__)

ADMIN = "ADMIN"


def minter_capability(token: str) -> str:
    """Capability allowing an account to mint ``token``."""
    return f"MINTER:{token.upper()}"


class AccessGuard:
    """Read-through check against the capability store.

    Nothing is cached: each call opens a fresh transaction, so a revoked
    capability stops working on the very next check.
    """

    def __init__(self, gateway: LedgerGateway):
        self._gateway = gateway

    async def has_capability(self, account: str, capability: str) -> bool:
        async with self._gateway.transaction() as ledgers:
            return await ledgers.capabilities.has(account, capability)

    async def require_capability(self, caller: str, capability: str) -> None:
        """Raise UnauthorizedError unless ``caller`` holds ``capability``."""
        if not await self.has_capability(caller, capability):
            logger.warning(f"Denied {capability} to {caller}")
            raise UnauthorizedError(caller, capability)
