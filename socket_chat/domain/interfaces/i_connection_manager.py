"""IConnectionManager interface for connection lifecycle management."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..value_objects.connection_fault import ConnectionFault
from ..value_objects.connection_state import ConnectionState
from ..value_objects.event import Event
from ..value_objects.mode import Mode


class IConnectionManager(ABC):
    """Interface for connection lifecycle management.

    The connection manager adds connection policy on top of the basic
    transport interface:
    - Connection state tracking
    - Retry logic with bounded backoff
    - Connect timeout
    - A send gateway that only forwards while connected

    The display layer reads the properties below and triggers behaviour
    only through the methods; it never mutates manager state directly.

    Example:
        >>> manager.connect()
        >>> # ... CONNECTED once the transport opens
        >>> manager.send("hello")
        >>> manager.disconnect()
    """

    @abstractmethod
    def connect(self) -> None:
        """Start a connection attempt. Returns immediately."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection and cancel any pending retry."""

    @abstractmethod
    def send(self, text: str) -> Event:
        """Send a message while connected.

        Returns:
            The appended sent event

        Raises:
            EmptyMessageError: If text is blank
            NotConnectedError: If not connected
        """

    @abstractmethod
    def clear_log(self) -> None:
        """Empty the event log."""

    @abstractmethod
    def set_mode(self, mode: Mode) -> None:
        """Switch between simulated and live mode."""

    @abstractmethod
    def set_url(self, url: str) -> None:
        """Set the server URL used by the next connection attempt."""

    @property
    @abstractmethod
    def state(self) -> ConnectionState:
        """Current connection state."""

    @property
    @abstractmethod
    def retry_count(self) -> int:
        """Retries scheduled since the last successful connect."""

    @property
    @abstractmethod
    def max_retries(self) -> int:
        """Maximum number of automatic retries."""

    @property
    @abstractmethod
    def last_error(self) -> Optional[ConnectionFault]:
        """Last connection error, or None."""

    @property
    @abstractmethod
    def events(self) -> Tuple[Event, ...]:
        """Ordered snapshot of the event log."""
