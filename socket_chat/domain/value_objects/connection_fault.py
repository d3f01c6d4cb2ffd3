"""ConnectionFault value object.

Structured description of the last error the connection manager observed,
alongside the human-readable text the display layer renders.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Error classification.

    Recoverable (drive the retry policy up to max retries):
        CONNECT_TIMEOUT: No open signal within the connect timeout window
        TRANSPORT_ERROR: Low-level failure reported by the transport
        UNCLEAN_CLOSE: Close without the clean/normal flag

    Local preconditions (raised synchronously, never change state):
        NOT_CONNECTED: Send attempted while not connected
        EMPTY_MESSAGE: Send attempted with blank text
    """

    CONNECT_TIMEOUT = "connect_timeout"
    TRANSPORT_ERROR = "transport_error"
    UNCLEAN_CLOSE = "unclean_close"
    NOT_CONNECTED = "not_connected"
    EMPTY_MESSAGE = "empty_message"

    @property
    def is_recoverable(self) -> bool:
        """Check if this kind of error triggers automatic retries."""
        return self in (
            ErrorKind.CONNECT_TIMEOUT,
            ErrorKind.TRANSPORT_ERROR,
            ErrorKind.UNCLEAN_CLOSE,
        )


@dataclass(frozen=True)
class ConnectionFault:
    """Last connection error.

    Attributes:
        kind: Structured error kind
        message: Human-readable description for display
        terminal: True once automatic retries are exhausted; the manager
            then waits for a manual connect()
    """

    kind: ErrorKind
    message: str
    terminal: bool = False
