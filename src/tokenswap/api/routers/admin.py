"""Admin API endpoints (ADMIN capability required for changes)."""

import logging

from fastapi import APIRouter, Depends

from tokenswap.api.dependencies import (
    get_access_guard,
    get_caller,
    get_ledger_gateway,
    http_error,
)
from tokenswap.contracts.tokens import CapabilityChange, CapabilityMembers, CapabilityRequest
from tokenswap.errors import SwapError
from tokenswap.ledger.gateway import SqlLedgerGateway
from tokenswap.swap.access import ADMIN, AccessGuard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


async def require_admin(
    caller: str = Depends(get_caller),
    guard: AccessGuard = Depends(get_access_guard),
) -> str:
    """Verify the caller holds the ADMIN capability."""
    try:
        await guard.require_capability(caller, ADMIN)
    except SwapError as e:
        raise http_error(e)
    return caller


@router.get("/capabilities/{capability}", response_model=CapabilityMembers)
async def list_members(
    capability: str,
    admin: str = Depends(require_admin),
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> CapabilityMembers:
    """List the accounts holding a capability."""
    async with gateway.transaction() as ledgers:
        accounts = await ledgers.capabilities.members(capability)

    return CapabilityMembers(capability=capability.upper(), accounts=accounts)


@router.post("/capabilities/grant", response_model=CapabilityChange)
async def grant_capability(
    request: CapabilityRequest,
    admin: str = Depends(require_admin),
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> CapabilityChange:
    """Grant a capability to an account."""
    async with gateway.transaction() as ledgers:
        await ledgers.capabilities.grant(request.account, request.capability)

    logger.info(f"{admin} granted {request.capability.upper()} to {request.account}")
    return CapabilityChange(
        success=True,
        account=request.account,
        capability=request.capability.upper(),
        message="Capability granted",
    )


@router.post("/capabilities/revoke", response_model=CapabilityChange)
async def revoke_capability(
    request: CapabilityRequest,
    admin: str = Depends(require_admin),
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> CapabilityChange:
    """Revoke a capability from an account."""
    async with gateway.transaction() as ledgers:
        revoked = await ledgers.capabilities.revoke(request.account, request.capability)

    if revoked:
        logger.info(f"{admin} revoked {request.capability.upper()} from {request.account}")

    return CapabilityChange(
        success=revoked,
        account=request.account,
        capability=request.capability.upper(),
        message="Capability revoked" if revoked else "Capability was not held",
    )
