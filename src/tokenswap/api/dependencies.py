"""Shared FastAPI dependencies and error translation."""

from fastapi import Header, HTTPException, Request

from tokenswap.errors import (
    ArithmeticOverflowError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidPercentageError,
    InvalidRateError,
    MintNotPermittedError,
    SwapError,
    UnauthorizedError,
    UnknownTokenError,
)
from tokenswap.ledger.gateway import SqlLedgerGateway
from tokenswap.swap.access import AccessGuard
from tokenswap.swap.engine import SwapEngine
from tokenswap.utils.locks import LockTimeoutError

ERROR_STATUS = {
    InvalidAmountError: 400,
    InvalidPercentageError: 400,
    InvalidRateError: 400,
    ArithmeticOverflowError: 400,
    UnauthorizedError: 403,
    UnknownTokenError: 404,
    InsufficientBalanceError: 409,
    InsufficientAllowanceError: 409,
    MintNotPermittedError: 409,
}


def http_error(error: Exception) -> HTTPException:
    """Translate a swap or ledger failure into an HTTPException."""
    if isinstance(error, LockTimeoutError):
        return HTTPException(
            status_code=503, detail={"error": "lock_timeout", "message": str(error)}
        )

    status_code = 500
    code = "internal_error"
    if isinstance(error, SwapError):
        status_code = ERROR_STATUS.get(type(error), 400)
        code = error.code
    return HTTPException(status_code=status_code, detail={"error": code, "message": str(error)})


async def get_caller(x_account: str = Header(..., min_length=1)) -> str:
    """Account on whose behalf the request acts."""
    return x_account


def get_swap_engine(request: Request) -> SwapEngine:
    engine = getattr(request.app.state, "swap_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Swap engine not deployed")
    return engine


def get_ledger_gateway(request: Request) -> SqlLedgerGateway:
    gateway = getattr(request.app.state, "ledger_gateway", None)
    if gateway is None:
        raise HTTPException(status_code=503, detail="Ledger not initialized")
    return gateway


def get_access_guard(request: Request) -> AccessGuard:
    return AccessGuard(get_ledger_gateway(request))
