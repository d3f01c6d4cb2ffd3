"""In-process protocol simulator.

Reproduces the capitalizing server's text processing so the client can be
exercised without a live endpoint, including a fixed artificial latency.
"""

import logging
from typing import Any, Callable, TypeVar

from ...const import DEFAULT_SIMULATED_LATENCY_MS
from ...domain.helpers.transformations import capitalize_first
from ...domain.interfaces import IScheduler, ITimer

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ProtocolSimulator:
    """Simulated server.

    The transform is byte-for-byte the server's; the latency is a fixed
    constant, never randomized.

    Example:
        >>> simulator = ProtocolSimulator(scheduler)
        >>> simulator.transform("hello world")
        'Hello world'
        >>> timer = simulator.respond("test", print)  # prints "Test" 100ms later
    """

    def __init__(
        self,
        scheduler: IScheduler,
        latency_ms: int = DEFAULT_SIMULATED_LATENCY_MS,
    ):
        """Initialize simulator.

        Args:
            scheduler: Scheduler delivering delayed results
            latency_ms: Artificial round-trip delay in milliseconds
        """
        if latency_ms < 0:
            raise ValueError(f"latency_ms must not be negative, got {latency_ms}")
        self._scheduler = scheduler
        self._latency_ms = latency_ms

    @property
    def latency_ms(self) -> int:
        """Artificial round-trip delay in milliseconds."""
        return self._latency_ms

    @staticmethod
    def transform(text: str) -> str:
        """Apply the server's transform to a message."""
        return capitalize_first(text)

    def simulate_latency(
        self, computation: Callable[[], T], on_result: Callable[[T], Any]
    ) -> ITimer:
        """Deliver a result after the artificial latency.

        The computation runs immediately; only its observation is delayed.

        Args:
            computation: Function producing the result
            on_result: Callback receiving the result once the delay elapsed

        Returns:
            Timer that cancels delivery when cancelled
        """
        result = computation()
        return self._scheduler.call_later(self._latency_ms / 1000, on_result, result)

    def respond(self, text: str, on_response: Callable[[str], Any]) -> ITimer:
        """Simulate the server's reply to a message.

        Args:
            text: Message sent by the client
            on_response: Callback receiving the transformed reply

        Returns:
            Timer that cancels the reply when cancelled
        """
        _LOGGER.debug("Simulating reply in %dms", self._latency_ms)
        return self.simulate_latency(lambda: self.transform(text), on_response)
