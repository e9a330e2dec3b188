"""Concurrency control for swaps.

Provides per-pair locking so the debit and credit of one swap are never
interleaved with another swap on the same token pair.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

logger = logging.getLogger(__name__)

# Global lock registry: pair key -> asyncio.Lock
_pair_locks: dict[str, asyncio.Lock] = {}


class LockTimeoutError(Exception):
    """Raised when a lock cannot be acquired within the timeout period."""

    pass


def pair_key(token_a: str, token_b: str) -> str:
    """Order-independent key for a token pair."""
    return "/".join(sorted((token_a.upper(), token_b.upper())))


def get_pair_lock(key: str) -> asyncio.Lock:
    """Get or create the lock for a pair key.

    Runs without awaiting, so two coroutines can never create two locks
    for the same key.
    """
    return _pair_locks.setdefault(key, asyncio.Lock())


@asynccontextmanager
async def pair_lock(
    key: str,
    timeout: Optional[float] = 30.0,
    operation: str = "swap",
):
    """Hold the pair lock for the duration of the block.

    Args:
        key: Pair key from ``pair_key``
        timeout: Maximum time to wait for the lock (None = wait forever)
        operation: Description for logging

    Example:
        async with pair_lock(pair_key("TT", "MT"), operation="swap_a_to_b"):
            # debit and credit here
            pass
    """
    lock = get_pair_lock(key)

    try:
        if timeout:
            await asyncio.wait_for(lock.acquire(), timeout=timeout)
        else:
            await lock.acquire()
    except asyncio.TimeoutError:
        logger.warning(f"Lock timeout for pair {key} after {timeout}s: {operation}")
        raise LockTimeoutError(f"Could not acquire lock for pair {key} within {timeout}s")

    logger.debug(f"Lock acquired for pair {key}: {operation}")
    try:
        yield
    finally:
        lock.release()
        logger.debug(f"Lock released for pair {key}: {operation}")


def clear_pair_locks() -> None:
    """Clear all pair locks (useful for testing)."""
    _pair_locks.clear()
