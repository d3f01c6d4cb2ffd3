"""IScheduler interface for cancellable timers."""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ITimer(ABC):
    """A scheduled callback that can be cancelled before it fires."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the callback. No effect if it already ran."""

    @abstractmethod
    def cancelled(self) -> bool:
        """Check if the timer was cancelled."""


class IScheduler(ABC):
    """Interface for scheduling delayed callbacks.

    Mirrors ``asyncio.AbstractEventLoop.call_later`` so the asyncio loop
    can serve directly, while tests substitute a manual clock.
    """

    @abstractmethod
    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> ITimer:
        """Schedule a callback.

        Args:
            delay: Delay in seconds
            callback: Function to call
            *args: Positional arguments for the callback

        Returns:
            Cancellable timer
        """
