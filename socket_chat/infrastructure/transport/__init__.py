"""WebSocket transport implementations.

This module contains the connection manager and the implementations of
the transport layer interfaces for WebSocket communication with the
capitalizing server.
"""

from .connection_manager import ConnectionManager
from .websocket_handle import WebSocketHandle
from .websocket_transport import WebSocketTransport

__all__ = [
    "ConnectionManager",
    "WebSocketHandle",
    "WebSocketTransport",
]
