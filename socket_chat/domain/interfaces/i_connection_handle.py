"""IConnectionHandle interface for a single transport connection."""

from abc import ABC, abstractmethod

from ...const import NORMAL_CLOSURE
from ..value_objects.ready_state import ReadyState


class IConnectionHandle(ABC):
    """Interface for one live connection attempt.

    A handle is owned by exactly one connection manager and is discarded
    after it closes. It is never reopened.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Endpoint URL this handle connects to."""

    @property
    @abstractmethod
    def ready_state(self) -> ReadyState:
        """Current readiness of the handle.

        Example:
            >>> handle.ready_state is ReadyState.OPEN
            True
        """

    @abstractmethod
    def send(self, text: str) -> None:
        """Send one text message.

        The payload is sent verbatim as a single unframed UTF-8 message.

        Args:
            text: Message text

        Raises:
            TransportError: If the handle is not OPEN
        """

    @abstractmethod
    def close(self, code: int = NORMAL_CLOSURE, reason: str = "") -> None:
        """Close the connection.

        Idempotent. Closing a handle that is still connecting aborts the
        attempt.

        Args:
            code: WebSocket close code (default: normal closure)
            reason: Close reason sent to the peer
        """
