"""Connection precondition decorators."""

import inspect
import logging
from functools import wraps
from typing import Callable

from ...domain.exceptions import EmptyMessageError, NotConnectedError

_LOGGER = logging.getLogger(__name__)


def _bind_argument(func: Callable, param: str, args: tuple, kwargs: dict):
    """Find a parameter value in a call to a method."""
    if param in kwargs:
        return kwargs[param]

    params = list(inspect.signature(func).parameters.keys())
    if param in params:
        idx = params.index(param) - 1  # -1 for self
        if idx < len(args):
            return args[idx]

    raise TypeError(f"{func.__qualname__}() missing argument '{param}'")


def require_message_text(text_param: str = "text"):
    """Decorator to reject blank messages before any other check.

    Args:
        text_param: Name of parameter containing the message text

    Example:
        @require_message_text()
        def send(self, text: str) -> Event:
            # Text is guaranteed to be non-blank
            pass
    """

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            text = _bind_argument(func, text_param, args, kwargs)
            if not text or not text.strip():
                _LOGGER.debug("Rejected empty message")
                raise EmptyMessageError("Message is empty")
            return func(self, *args, **kwargs)

        return wrapper

    return decorator


def require_connection(connected_attr: str = "is_connected"):
    """Decorator to ensure the owner is connected before an operation.

    Args:
        connected_attr: Name of the owner's boolean connected property

    Example:
        @require_connection()
        def send(self, text: str) -> Event:
            # Connection is guaranteed - just do work
            pass
    """

    def decorator(func: Callable):
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(self, *args, **kwargs):
                _ensure_connected(self, connected_attr)
                return await func(self, *args, **kwargs)

            return async_wrapper

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            _ensure_connected(self, connected_attr)
            return func(self, *args, **kwargs)

        return wrapper

    return decorator


def _ensure_connected(owner, connected_attr: str) -> None:
    if not getattr(owner, connected_attr):
        state = getattr(owner, "connection_state", "unknown")
        _LOGGER.debug("Rejected operation in state: %s", state)
        raise NotConnectedError(
            f"Not connected to server (state: {state}). Please connect first."
        )
