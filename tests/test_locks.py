"""Tests for the pair locks."""

import asyncio

import pytest

from tokenswap.utils.locks import (
    LockTimeoutError,
    clear_pair_locks,
    get_pair_lock,
    pair_key,
    pair_lock,
)


class TestPairKey:
    """Tests for pair key normalization."""

    def test_order_independent(self):
        assert pair_key("TT", "MT") == pair_key("MT", "TT")

    def test_case_insensitive(self):
        assert pair_key("tt", "Mt") == "MT/TT"


class TestPairLocks:
    """Tests for the concurrency locks module."""

    def test_get_pair_lock_returns_same_instance(self):
        """Test that get_pair_lock returns one lock per key."""
        lock1 = get_pair_lock("MT/TT")
        lock2 = get_pair_lock("MT/TT")

        assert lock1 is lock2

    def test_different_pairs_get_different_locks(self):
        assert get_pair_lock("MT/TT") is not get_pair_lock("AAA/BBB")

    @pytest.mark.asyncio
    async def test_lock_held_inside_block(self):
        async with pair_lock("MT/TT", operation="test"):
            lock = get_pair_lock("MT/TT")
            assert lock.locked()

        # Lock should be released after context
        assert not lock.locked()

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self):
        with pytest.raises(RuntimeError):
            async with pair_lock("MT/TT"):
                raise RuntimeError("boom")

        assert not get_pair_lock("MT/TT").locked()

    @pytest.mark.asyncio
    async def test_lock_prevents_concurrent_access(self):
        """Test that lock prevents concurrent access."""
        results = []

        async def task(name, delay):
            async with pair_lock("MT/TT", timeout=10.0, operation=f"task_{name}"):
                results.append(f"{name}_start")
                await asyncio.sleep(delay)
                results.append(f"{name}_end")

        await asyncio.gather(task("A", 0.05), task("B", 0.05))

        assert results in [
            ["A_start", "A_end", "B_start", "B_end"],
            ["B_start", "B_end", "A_start", "A_end"],
        ]

    @pytest.mark.asyncio
    async def test_other_pairs_are_not_blocked(self):
        async with pair_lock("MT/TT"):
            async with pair_lock("AAA/BBB", timeout=0.1):
                assert get_pair_lock("AAA/BBB").locked()

    @pytest.mark.asyncio
    async def test_lock_timeout_raises_error(self):
        """Test that lock timeout raises LockTimeoutError."""

        async def hold_lock():
            async with pair_lock("MT/TT", timeout=5.0):
                await asyncio.sleep(0.5)

        hold_task = asyncio.create_task(hold_lock())
        await asyncio.sleep(0.05)  # Let hold_lock acquire

        with pytest.raises(LockTimeoutError):
            async with pair_lock("MT/TT", timeout=0.1):
                pass

        await hold_task

    @pytest.mark.asyncio
    async def test_clear_pair_locks(self):
        """Test that clear_pair_locks forgets existing locks."""
        old = get_pair_lock("MT/TT")

        clear_pair_locks()

        new = get_pair_lock("MT/TT")
        assert new is not old
        assert not new.locked()
