"""EventLog entity.

Append-only ordered record of sent, received and system events.
"""

import itertools
import logging
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Tuple

from ..value_objects.event import Event, EventKind

_LOGGER = logging.getLogger(__name__)

EventListener = Callable[[Event], None]


class EventLog:
    """Append-only event log.

    The connection manager is the single writer; the display layer reads
    snapshots or subscribes to appends. Events keep invocation order, and
    identifiers keep increasing across clear() so an id is never reused.

    Example:
        >>> log = EventLog()
        >>> log.append(EventKind.SYSTEM, "Connected (simulated)").id
        1
        >>> log.append(EventKind.SENT, "hi").id
        2
        >>> [e.kind.value for e in log.snapshot()]
        ['system', 'sent']
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """Initialize an empty log.

        Args:
            clock: Source of event timestamps (default: current UTC time)
        """
        self._events: List[Event] = []
        self._ids = itertools.count(1)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._listeners: List[EventListener] = []

    def append(self, kind: EventKind, content: str) -> Event:
        """Append a new event to the end of the log.

        Args:
            kind: Event kind
            content: Message text

        Returns:
            The appended event
        """
        event = Event(
            id=next(self._ids),
            kind=kind,
            content=content,
            timestamp=self._clock(),
        )
        self._events.append(event)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as err:
                _LOGGER.error("Error in event listener: %s", err)

        return event

    def clear(self) -> None:
        """Remove every event from the log."""
        _LOGGER.debug("Clearing %d events", len(self._events))
        self._events = []

    def snapshot(self) -> Tuple[Event, ...]:
        """Get an immutable, ordered copy of the log."""
        return tuple(self._events)

    def latest(self, kind: EventKind) -> Optional[Event]:
        """Get the most recent event of a kind.

        Args:
            kind: Event kind to look for

        Returns:
            Latest matching event, or None
        """
        for event in reversed(self._events):
            if event.kind is kind:
                return event
        return None

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a callback invoked after every append.

        Args:
            listener: Function receiving the appended event

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"EventLog(events={len(self._events)})"
