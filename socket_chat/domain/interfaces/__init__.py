"""Domain interfaces for the socket chat client.

This module defines the contracts (interfaces) that infrastructure implementations
must fulfill. Using these interfaces enables:
- Dependency Inversion: Connection policy doesn't depend on the socket library
- Testability: Easy to fake transports and timers in tests
- Flexibility: Swap implementations without changing the connection manager
"""

from .i_connection_handle import IConnectionHandle
from .i_transport_listener import ITransportListener
from .i_transport import ITransport
from .i_scheduler import IScheduler, ITimer
from .i_connection_manager import IConnectionManager

__all__ = [
    "IConnectionHandle",
    "ITransportListener",
    "ITransport",
    "IScheduler",
    "ITimer",
    "IConnectionManager",
]
