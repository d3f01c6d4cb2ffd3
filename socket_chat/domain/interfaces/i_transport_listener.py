"""ITransportListener interface for transport signals."""

from abc import ABC, abstractmethod

from .i_connection_handle import IConnectionHandle


class ITransportListener(ABC):
    """Receiver of connection handle signals.

    Every callback receives the handle it originates from so the receiver
    can ignore signals of handles it no longer owns. Callbacks are invoked
    from the event loop and never overlap.
    """

    @abstractmethod
    def on_open(self, handle: IConnectionHandle) -> None:
        """Connection established."""

    @abstractmethod
    def on_message(self, handle: IConnectionHandle, text: str) -> None:
        """Text message received."""

    @abstractmethod
    def on_close(
        self, handle: IConnectionHandle, clean: bool, code: int, reason: str
    ) -> None:
        """Connection closed.

        Args:
            handle: Handle that closed
            clean: True if the transport flagged a normal shutdown
            code: Close code (1006 when the connection dropped)
            reason: Close reason, possibly empty
        """

    @abstractmethod
    def on_error(self, handle: IConnectionHandle, info: str) -> None:
        """Low-level transport failure."""
