"""WebSocket transport implementation.

This module implements the ITransport interface on top of the websockets
asyncio client.
"""

import logging

from websockets.exceptions import InvalidURI
from websockets.uri import parse_uri

from ...domain.exceptions import TransportError
from ...domain.interfaces import ITransport, ITransportListener
from .websocket_handle import WebSocketHandle

_LOGGER = logging.getLogger(__name__)


class WebSocketTransport(ITransport):
    """WebSocket transport.

    Payloads are unframed UTF-8 text: one logical message per WebSocket
    message, no length prefix and no envelope.

    Example:
        >>> transport = WebSocketTransport()
        >>> handle = transport.open("ws://localhost:8765", listener)
    """

    def open(self, url: str, listener: ITransportListener) -> WebSocketHandle:
        """Start a connection attempt.

        Args:
            url: ws:// or wss:// URL
            listener: Receiver of the handle's signals

        Returns:
            Handle in CONNECTING state

        Raises:
            TransportError: If the URL is invalid or no event loop is running
        """
        try:
            parse_uri(url)
        except InvalidURI as err:
            raise TransportError(f"Invalid server URL: {url}") from err

        handle = WebSocketHandle(url, listener)
        try:
            handle.start()
        except RuntimeError as err:
            raise TransportError(f"Cannot open {url}: {err}") from err

        _LOGGER.debug("Opening WebSocket connection to %s", url)
        return handle
