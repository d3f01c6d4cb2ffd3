"""Capitalizing WebSocket server.

The remote party of the chat client: every text message is answered with
the same message, first letter upper-cased.
"""

import logging
from typing import Optional

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.exceptions import ConnectionClosedError

from ...const import DEFAULT_SERVER_HOST, DEFAULT_SERVER_PORT
from ...domain.helpers.transformations import capitalize_first

_LOGGER = logging.getLogger(__name__)


class CapitalizeServer:
    """WebSocket server applying the capitalize-first transform.

    Attributes:
        _host: Interface to bind
        _port: Port to bind (0 picks a free port)
        _server: Running websockets server, if started

    Example:
        >>> async with CapitalizeServer(port=0) as server:
        ...     url = server.url
        ...     # connect a client to url
    """

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_SERVER_PORT):
        """Initialize server.

        Args:
            host: Interface to bind
            port: Port to bind (0 picks a free port)
        """
        self._host = host
        self._port = port
        self._server: Optional[Server] = None

    @property
    def port(self) -> int:
        """Bound port once started, otherwise the configured one."""
        if self._server is not None and self._server.sockets:
            return self._server.sockets[0].getsockname()[1]
        return self._port

    @property
    def url(self) -> str:
        """WebSocket URL clients connect to."""
        return f"ws://{self._host}:{self.port}"

    @property
    def is_serving(self) -> bool:
        """Check if the server is accepting connections."""
        return self._server is not None and self._server.is_serving()

    async def start(self) -> None:
        """Bind and start accepting connections."""
        if self._server is not None:
            return
        self._server = await serve(self._handle_connection, self._host, self._port)
        _LOGGER.info("Capitalize server listening on %s", self.url)

    async def stop(self) -> None:
        """Close all connections and stop listening."""
        if self._server is None:
            return
        self._server.close()
        await self._server.wait_closed()
        self._server = None
        _LOGGER.info("Capitalize server stopped")

    async def serve_forever(self) -> None:
        """Start if needed and serve until cancelled."""
        await self.start()
        await self._server.serve_forever()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        peer = websocket.remote_address
        _LOGGER.info("Client connected: %s", peer)
        try:
            async for message in websocket:
                if isinstance(message, bytes):
                    message = message.decode("utf-8", errors="replace")
                reply = capitalize_first(message)
                _LOGGER.debug("Received %r, replying %r", message, reply)
                await websocket.send(reply)
        except ConnectionClosedError as err:
            _LOGGER.warning("Client %s dropped: %s", peer, err)
        else:
            _LOGGER.info("Client disconnected: %s", peer)

    async def __aenter__(self) -> "CapitalizeServer":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
