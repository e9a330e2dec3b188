"""Fixed-rate swap engine for one token pair."""

from tokenswap.swap.access import ADMIN, AccessGuard, minter_capability
from tokenswap.swap.config import FeeSchedule, SwapConfig
from tokenswap.swap.engine import SwapDirection, SwapEngine, SwapQuote, SwapRequest
from tokenswap.swap.fee_math import PCT_SCALE

__all__ = [
    # Engine
    "SwapEngine",
    "SwapDirection",
    "SwapQuote",
    "SwapRequest",
    # Configuration
    "SwapConfig",
    "FeeSchedule",
    "PCT_SCALE",
    # Access
    "AccessGuard",
    "ADMIN",
    "minter_capability",
]
