"""Swap request and response contracts.

Amounts are integers in the smallest unit of their token. Percentages use
the engine scale, where 10_000_000_000 is 100%.
"""

from pydantic import BaseModel, Field

from tokenswap.swap.engine import SwapDirection


class SwapConfigResponse(BaseModel):
    """Current public configuration of the swap."""

    token_a: str = Field(..., description="Token given in the a_to_b direction")
    token_b: str = Field(..., description="Token given in the b_to_a direction")
    rate: int = Field(..., description="Units of token A per one unit of token B")
    fee_percent_a: int = Field(..., description="Fee on a_to_b input")
    fee_percent_b: int = Field(..., description="Fee on b_to_a input")
    pct_scale: int = Field(..., description="Value representing 100%")


class SetFeesRequest(BaseModel):
    """Replace both fee percentages."""

    fee_percent_a: int = Field(..., ge=0, description="Fee on a_to_b input")
    fee_percent_b: int = Field(..., ge=0, description="Fee on b_to_a input")


class SetRateRequest(BaseModel):
    """Replace the exchange rate."""

    rate: int = Field(..., description="Units of token A per one unit of token B")


class QuoteResponse(BaseModel):
    """Preview of a conversion under the current configuration."""

    direction: SwapDirection
    amount_in: int = Field(..., description="Amount the caller gives up")
    fee_amount: int = Field(..., description="Part of amount_in withheld as fee")
    amount_out: int = Field(..., description="Amount the caller would receive")
    rate: int
    fee_percent: int


class SwapRequestBody(BaseModel):
    """Execute a swap for the calling account."""

    direction: SwapDirection
    amount: int = Field(..., ge=0, description="Amount of the source token to give")


class SwapResponse(BaseModel):
    """Result of an executed swap."""

    success: bool = True
    direction: SwapDirection
    account: str
    amount_in: int
    amount_out: int
    token_in: str
    token_out: str
