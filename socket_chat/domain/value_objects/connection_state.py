"""ConnectionState value object.

Represents the lifecycle state of the client connection.
"""

from enum import Enum


class ConnectionState(Enum):
    """Connection states.

    Exactly one state is active at any time. There is no terminal state:
    every state can eventually lead back to CONNECTING.

    State Transitions:
        DISCONNECTED / CONNECTION_LOST / CONNECTION_ERROR → CONNECTING
        CONNECTING → CONNECTED | CONNECTION_ERROR
        CONNECTED → DISCONNECTED (clean close) | CONNECTION_LOST (unclean close)
        Any state → DISCONNECTED (manual disconnect)
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CONNECTION_LOST = "connection_lost"
    CONNECTION_ERROR = "connection_error"

    @property
    def label(self) -> str:
        """Human-readable label for display.

        Example:
            >>> ConnectionState.CONNECTION_LOST.label
            'Connection Lost'
        """
        return self.value.replace("_", " ").title()
