"""Swap API endpoints: configuration, quotes and execution."""

from fastapi import APIRouter, Depends, Query

from tokenswap.api.dependencies import get_caller, get_swap_engine, http_error
from tokenswap.contracts.swaps import (
    QuoteResponse,
    SetFeesRequest,
    SetRateRequest,
    SwapConfigResponse,
    SwapRequestBody,
    SwapResponse,
)
from tokenswap.errors import SwapError
from tokenswap.swap.engine import SwapDirection, SwapEngine
from tokenswap.swap.fee_math import PCT_SCALE
from tokenswap.utils.locks import LockTimeoutError

router = APIRouter(prefix="/swap", tags=["swap"])


def _config_response(engine: SwapEngine) -> SwapConfigResponse:
    return SwapConfigResponse(
        token_a=engine.token_a,
        token_b=engine.token_b,
        rate=engine.config.get_rate(),
        fee_percent_a=engine.config.get_fee_percent_a(),
        fee_percent_b=engine.config.get_fee_percent_b(),
        pct_scale=PCT_SCALE,
    )


@router.get("/config", response_model=SwapConfigResponse)
async def get_config(engine: SwapEngine = Depends(get_swap_engine)) -> SwapConfigResponse:
    """Get the public swap configuration."""
    return _config_response(engine)


@router.put("/fees", response_model=SwapConfigResponse)
async def set_fees(
    request: SetFeesRequest,
    caller: str = Depends(get_caller),
    engine: SwapEngine = Depends(get_swap_engine),
) -> SwapConfigResponse:
    """Replace both fee percentages (ADMIN only)."""
    try:
        await engine.config.set_fees(caller, request.fee_percent_a, request.fee_percent_b)
    except SwapError as e:
        raise http_error(e)
    return _config_response(engine)


@router.put("/rate", response_model=SwapConfigResponse)
async def set_rate(
    request: SetRateRequest,
    caller: str = Depends(get_caller),
    engine: SwapEngine = Depends(get_swap_engine),
) -> SwapConfigResponse:
    """Replace the exchange rate (ADMIN only)."""
    try:
        await engine.config.set_rate(caller, request.rate)
    except SwapError as e:
        raise http_error(e)
    return _config_response(engine)


@router.get("/quote", response_model=QuoteResponse)
async def get_quote(
    direction: SwapDirection,
    amount: int = Query(..., ge=0),
    engine: SwapEngine = Depends(get_swap_engine),
) -> QuoteResponse:
    """Preview how much a swap of ``amount`` would return right now."""
    try:
        quote = engine.quote(direction, amount)
    except SwapError as e:
        raise http_error(e)

    return QuoteResponse(
        direction=quote.direction,
        amount_in=quote.amount_in,
        fee_amount=quote.fee_amount,
        amount_out=quote.amount_out,
        rate=quote.rate,
        fee_percent=quote.fee_percent,
    )


@router.post("", response_model=SwapResponse)
async def execute_swap(
    request: SwapRequestBody,
    caller: str = Depends(get_caller),
    engine: SwapEngine = Depends(get_swap_engine),
) -> SwapResponse:
    """Swap for the calling account.

    The caller must have approved the engine operator for ``amount`` of the
    source token beforehand.
    """
    try:
        amount_out = await engine.swap(request.direction, caller, request.amount)
    except (SwapError, LockTimeoutError) as e:
        raise http_error(e)

    if request.direction == SwapDirection.A_TO_B:
        token_in, token_out = engine.token_a, engine.token_b
    else:
        token_in, token_out = engine.token_b, engine.token_a

    return SwapResponse(
        direction=request.direction,
        account=caller,
        amount_in=request.amount,
        amount_out=amount_out,
        token_in=token_in,
        token_out=token_out,
    )
