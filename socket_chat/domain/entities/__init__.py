"""Domain entities for the socket chat client."""

from .event_log import EventLog

__all__ = ["EventLog"]
