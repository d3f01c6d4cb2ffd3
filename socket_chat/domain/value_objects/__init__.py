"""Value objects for the socket chat client.

Value objects are immutable (or, for RetryPolicy, self-validating) domain
primitives without identity.
"""

from .connection_state import ConnectionState
from .mode import Mode
from .ready_state import ReadyState
from .event import Event, EventKind
from .connection_fault import ConnectionFault, ErrorKind
from .retry_policy import RetryPolicy

__all__ = [
    "ConnectionState",
    "Mode",
    "ReadyState",
    "Event",
    "EventKind",
    "ConnectionFault",
    "ErrorKind",
    "RetryPolicy",
]
