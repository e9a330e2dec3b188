"""Token ledger endpoints: balances, allowances, approvals and minting."""

from fastapi import APIRouter, Depends

from tokenswap.api.dependencies import get_caller, get_ledger_gateway, http_error
from tokenswap.contracts.tokens import (
    AllowanceResponse,
    ApproveRequest,
    BalanceResponse,
    MintRequest,
    TokenInfo,
)
from tokenswap.errors import SwapError
from tokenswap.ledger.gateway import SqlLedgerGateway

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.get("", response_model=list[TokenInfo])
async def list_tokens(gateway: SqlLedgerGateway = Depends(get_ledger_gateway)) -> list[TokenInfo]:
    """List registered tokens."""
    async with gateway.transaction() as ledgers:
        tokens = await ledgers.tokens.list_all()
        return [
            TokenInfo(
                symbol=token.symbol,
                name=token.name,
                settlement=token.settlement,
                total_supply=token.total_supply,
            )
            for token in tokens
        ]


@router.get("/{symbol}/balances/{account}", response_model=BalanceResponse)
async def get_balance(
    symbol: str,
    account: str,
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> BalanceResponse:
    """Get the balance of an account."""
    try:
        async with gateway.transaction() as ledgers:
            balance = await ledgers.ledger(symbol).balance_of(account)
    except SwapError as e:
        raise http_error(e)

    return BalanceResponse(token=symbol.upper(), account=account, balance=balance)


@router.get("/{symbol}/allowances/{owner}/{spender}", response_model=AllowanceResponse)
async def get_allowance(
    symbol: str,
    owner: str,
    spender: str,
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> AllowanceResponse:
    """Get how much ``spender`` may still move out of ``owner``."""
    try:
        async with gateway.transaction() as ledgers:
            allowance = await ledgers.ledger(symbol).allowance(owner, spender)
    except SwapError as e:
        raise http_error(e)

    return AllowanceResponse(token=symbol.upper(), owner=owner, spender=spender, allowance=allowance)


@router.post("/{symbol}/approve", response_model=AllowanceResponse)
async def approve(
    symbol: str,
    request: ApproveRequest,
    caller: str = Depends(get_caller),
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> AllowanceResponse:
    """Set the allowance of ``spender`` over the calling account."""
    try:
        async with gateway.transaction() as ledgers:
            await ledgers.ledger(symbol).approve(caller, request.spender, request.amount)
    except SwapError as e:
        raise http_error(e)

    return AllowanceResponse(
        token=symbol.upper(), owner=caller, spender=request.spender, allowance=request.amount
    )


@router.post("/{symbol}/mint", response_model=BalanceResponse)
async def mint(
    symbol: str,
    request: MintRequest,
    caller: str = Depends(get_caller),
    gateway: SqlLedgerGateway = Depends(get_ledger_gateway),
) -> BalanceResponse:
    """Mint tokens to an account. The caller must hold MINTER:<symbol>."""
    try:
        async with gateway.transaction() as ledgers:
            ledger = ledgers.ledger(symbol)
            await ledger.mint(caller, request.account, request.amount)
            balance = await ledger.balance_of(request.account)
    except SwapError as e:
        raise http_error(e)

    return BalanceResponse(token=symbol.upper(), account=request.account, balance=balance)
