"""Utility modules for tokenswap."""

from tokenswap.utils.locks import LockTimeoutError, pair_key, pair_lock

__all__ = ["LockTimeoutError", "pair_key", "pair_lock"]
