"""Custom exceptions for the socket chat client.

This module defines domain-specific exceptions for the conditions a caller
of the connection manager can observe synchronously. Recoverable connection
failures (timeouts, transport errors, unclean closes) are not raised; they
are recorded as a ConnectionFault and drive the retry policy instead.
"""

from .value_objects.connection_fault import ErrorKind


class ChatClientError(Exception):
    """Base class for socket chat client errors.

    Attributes:
        kind: Structured error kind for callers that render or branch on it
    """

    kind: ErrorKind = ErrorKind.TRANSPORT_ERROR


class EmptyMessageError(ChatClientError, ValueError):
    """Send attempted with blank text.

    Rejected before reaching the transport. Never changes connection state
    and never appends an event.

    Example:
        >>> manager.send("   ")
        Traceback (most recent call last):
        ...
        EmptyMessageError: Message is empty
    """

    kind = ErrorKind.EMPTY_MESSAGE


class NotConnectedError(ChatClientError):
    """Send attempted while not connected.

    Raised when the manager is not in CONNECTED state, or in live mode when
    the transport handle is not confirmed open at call time. This is a local
    precondition failure, not a connection state transition.
    """

    kind = ErrorKind.NOT_CONNECTED


class TransportError(ChatClientError):
    """Low-level failure reported by the transport.

    Raised by transports for invalid endpoints or writes on a handle that
    is not open.
    """

    kind = ErrorKind.TRANSPORT_ERROR


class ConfigurationError(ValueError):
    """Client configuration is missing or invalid."""
