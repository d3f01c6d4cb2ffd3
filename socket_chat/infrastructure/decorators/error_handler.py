"""Error handling decorators for standardized exception handling."""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Optional

from websockets.exceptions import WebSocketException

from ...domain.exceptions import ChatClientError


def handle_transport_errors(
    operation_name: str,
    logger: Optional[logging.Logger] = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Decorator for standardized transport error handling.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to function's module logger)
        reraise: Whether to re-raise exception after logging
        default_return: Value to return on error if not re-raising

    Example:
        @handle_transport_errors("WebSocket connect", reraise=True)
        async def _establish(self):
            # Clean implementation without try/except
            return await connect(self._url, open_timeout=None)
    """

    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except ChatClientError as err:
                # Expected client error - log without stack trace
                log.error("%s client error: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except WebSocketException as err:
                log.error("%s WebSocket error: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except OSError as err:
                log.error("%s network error: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except Exception as err:
                log.error(
                    "%s unexpected error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except ChatClientError as err:
                log.error("%s client error: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except Exception as err:
                log.error(
                    "%s error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
