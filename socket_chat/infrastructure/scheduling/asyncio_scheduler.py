"""Asyncio-backed scheduler.

Timers run on the event loop, so every callback executes on the loop thread
and never overlaps another callback.
"""

import asyncio
from typing import Any, Callable, Optional

from ...domain.interfaces import IScheduler, ITimer


class AsyncioScheduler(IScheduler):
    """Scheduler using ``loop.call_later``.

    The returned ``asyncio.TimerHandle`` already provides cancel() and
    cancelled(), so it is registered as an ITimer.

    Example:
        >>> scheduler = AsyncioScheduler()
        >>> timer = scheduler.call_later(2.0, manager.connect)
        >>> timer.cancel()
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize scheduler.

        Args:
            loop: Event loop to use (default: the running loop at call time)
        """
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> ITimer:
        """Schedule a callback on the event loop.

        Raises:
            RuntimeError: If no loop was given and none is running
        """
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay, 0.0), callback, *args)


ITimer.register(asyncio.TimerHandle)
