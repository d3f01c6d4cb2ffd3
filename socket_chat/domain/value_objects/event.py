"""Event value object.

Represents one entry of the event log shown by the display layer.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EventKind(Enum):
    """Event kinds."""

    SENT = "sent"
    RECEIVED = "received"
    SYSTEM = "system"


@dataclass(frozen=True)
class Event:
    """Immutable event record.

    Attributes:
        id: Unique identifier, strictly increasing in generation order
        kind: Whether the event is an outgoing, incoming or system message
        content: Message text
        timestamp: Instant the event was created (UTC)

    Example:
        >>> event = event_log.append(EventKind.SENT, "hello")
        >>> event.kind
        <EventKind.SENT: 'sent'>
        >>> event.content
        'hello'
    """

    id: int
    kind: EventKind
    content: str
    timestamp: datetime
