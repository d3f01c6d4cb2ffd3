"""Socket chat client.

Connection manager for a request/response text protocol over a persistent
WebSocket, with an in-process simulation of the capitalizing server.
"""

from .config_loader import ClientConfig, load_client_config
from .domain.entities import EventLog
from .domain.exceptions import (
    ChatClientError,
    ConfigurationError,
    EmptyMessageError,
    NotConnectedError,
    TransportError,
)
from .domain.value_objects import (
    ConnectionFault,
    ConnectionState,
    ErrorKind,
    Event,
    EventKind,
    Mode,
)
from .infrastructure.protocol import ProtocolSimulator
from .infrastructure.transport import ConnectionManager, WebSocketTransport
from .presentation import create_container

__version__ = "1.0.0"

__all__ = [
    "ChatClientError",
    "ClientConfig",
    "ConfigurationError",
    "ConnectionFault",
    "ConnectionManager",
    "ConnectionState",
    "EmptyMessageError",
    "ErrorKind",
    "Event",
    "EventKind",
    "EventLog",
    "Mode",
    "NotConnectedError",
    "ProtocolSimulator",
    "TransportError",
    "WebSocketTransport",
    "create_container",
    "load_client_config",
]
