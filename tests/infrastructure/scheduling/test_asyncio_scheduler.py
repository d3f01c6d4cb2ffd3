"""Tests for AsyncioScheduler."""

import asyncio

import pytest

from socket_chat.domain.interfaces import ITimer
from socket_chat.infrastructure.scheduling import AsyncioScheduler


class TestAsyncioScheduler:
    """Test scheduling on the running loop."""

    @pytest.mark.asyncio
    async def test_callback_fires(self):
        """Test callback runs after the delay with its arguments."""
        fired = asyncio.Event()
        received = []

        def callback(value):
            received.append(value)
            fired.set()

        timer = AsyncioScheduler().call_later(0.01, callback, "payload")

        assert isinstance(timer, ITimer)
        await asyncio.wait_for(fired.wait(), timeout=1.0)
        assert received == ["payload"]

    @pytest.mark.asyncio
    async def test_cancel(self):
        """Test a cancelled timer never fires."""
        received = []
        timer = AsyncioScheduler().call_later(0.01, received.append, 1)
        timer.cancel()

        await asyncio.sleep(0.05)
        assert received == []
        assert timer.cancelled()

    @pytest.mark.asyncio
    async def test_negative_delay_runs_soon(self):
        """Test negative delays are clamped to zero."""
        received = []
        AsyncioScheduler().call_later(-5, received.append, 1)

        await asyncio.sleep(0.01)
        assert received == [1]

    def test_requires_running_loop(self):
        """Test scheduling outside a loop without an explicit loop fails."""
        with pytest.raises(RuntimeError):
            AsyncioScheduler().call_later(1.0, lambda: None)
