"""ITransport interface for transport layer implementations."""

from abc import ABC, abstractmethod

from .i_connection_handle import IConnectionHandle
from .i_transport_listener import ITransportListener


class ITransport(ABC):
    """Interface for transport layer implementations.

    A transport creates one connection handle per connection attempt. The
    handle reports progress asynchronously through the listener passed to
    open(); open() itself never blocks.

    Connection lifecycle:
        1. open(url, listener) → handle in CONNECTING state
        2. listener.on_open(handle) → handle is OPEN, send() allowed
        3. listener.on_message(handle, text) → zero or more times
        4. listener.on_close(handle, clean, code, reason) → exactly once

    Example:
        >>> transport = WebSocketTransport()
        >>> handle = transport.open("ws://localhost:8765", listener)
        >>> # ... listener.on_open(handle) fires later
        >>> handle.send("hello")
        >>> handle.close()
    """

    @abstractmethod
    def open(self, url: str, listener: ITransportListener) -> IConnectionHandle:
        """Start a connection attempt.

        Args:
            url: Endpoint URL (e.g. "ws://localhost:8765")
            listener: Receiver of the handle's open/message/close/error signals

        Returns:
            New handle in CONNECTING state

        Raises:
            TransportError: If the URL is invalid or the attempt cannot start
        """
