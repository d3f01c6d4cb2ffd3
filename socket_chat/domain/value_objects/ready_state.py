"""ReadyState value object.

Mirrors the WebSocket readyState values of a single connection handle.
"""

from enum import IntEnum


class ReadyState(IntEnum):
    """Readiness of a connection handle."""

    CONNECTING = 0
    OPEN = 1
    CLOSING = 2
    CLOSED = 3
