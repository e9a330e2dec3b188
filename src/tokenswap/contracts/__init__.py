"""Request and response contracts for the API layer."""

from tokenswap.contracts.swaps import (
    QuoteResponse,
    SetFeesRequest,
    SetRateRequest,
    SwapConfigResponse,
    SwapRequestBody,
    SwapResponse,
)
from tokenswap.contracts.tokens import (
    AllowanceResponse,
    ApproveRequest,
    BalanceResponse,
    CapabilityChange,
    CapabilityMembers,
    CapabilityRequest,
    MintRequest,
    TokenInfo,
)

__all__ = [
    # Swap contracts
    "SwapConfigResponse",
    "SetFeesRequest",
    "SetRateRequest",
    "QuoteResponse",
    "SwapRequestBody",
    "SwapResponse",
    # Token contracts
    "TokenInfo",
    "BalanceResponse",
    "AllowanceResponse",
    "ApproveRequest",
    "MintRequest",
    # Capability contracts
    "CapabilityRequest",
    "CapabilityMembers",
    "CapabilityChange",
]
