"""WebSocket connection handle.

One handle represents one connection attempt. It runs a single asyncio task
that connects, pumps incoming messages to the listener and reports the
close exactly once.
"""

import asyncio
import logging
from typing import Optional

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedError

from ...const import ABNORMAL_CLOSURE, NORMAL_CLOSURE
from ...domain.exceptions import TransportError
from ...domain.interfaces import IConnectionHandle, ITransportListener
from ...domain.value_objects.ready_state import ReadyState
from ..decorators import handle_transport_errors

_LOGGER = logging.getLogger(__name__)


class WebSocketHandle(IConnectionHandle):
    """WebSocket handle built on the websockets asyncio client.

    Signals, in order:
        on_open → on_message* → on_close            (normal life)
        on_error → on_close(clean=False, 1006)      (attempt failed)

    Attributes:
        _url: Endpoint URL
        _listener: Receiver of signals
        _ready_state: Current readiness
        _ws: Underlying websockets connection once open
        _outbox: Messages waiting for the writer loop

    Example:
        >>> handle = WebSocketHandle("ws://localhost:8765", listener)
        >>> handle.start()
        >>> # ... listener.on_open(handle)
        >>> handle.send("hello")
        >>> handle.close()
    """

    def __init__(self, url: str, listener: ITransportListener):
        """Initialize handle.

        Args:
            url: Endpoint URL
            listener: Receiver of open/message/close/error signals
        """
        self._url = url
        self._listener = listener
        self._ready_state = ReadyState.CONNECTING
        self._ws: Optional[ClientConnection] = None
        self._outbox: asyncio.Queue[str] = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None
        self._close_task: Optional[asyncio.Task] = None
        self._close_signalled = False

    @property
    def url(self) -> str:
        """Endpoint URL."""
        return self._url

    @property
    def ready_state(self) -> ReadyState:
        """Current readiness."""
        return self._ready_state

    def start(self) -> None:
        """Start the connection task on the running event loop.

        Raises:
            RuntimeError: If no event loop is running
        """
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"websocket-handle {self._url}"
        )

    def send(self, text: str) -> None:
        """Queue one text message for sending.

        Raises:
            TransportError: If the handle is not OPEN
        """
        if self._ready_state is not ReadyState.OPEN:
            raise TransportError(
                f"WebSocket is not open (state: {self._ready_state.name})"
            )
        self._outbox.put_nowait(text)

    def close(self, code: int = NORMAL_CLOSURE, reason: str = "") -> None:
        """Close the connection.

        When open, performs the closing handshake with the given code. When
        still connecting, aborts the attempt.
        """
        if self._ready_state in (ReadyState.CLOSING, ReadyState.CLOSED):
            return

        if self._ready_state is ReadyState.CONNECTING or self._ws is None:
            _LOGGER.debug("Aborting connection attempt to %s", self._url)
            self._ready_state = ReadyState.CLOSING
            if self._task is not None:
                self._task.cancel()
            # A task cancelled before its first step never reaches _run
            self._signal_close(False, ABNORMAL_CLOSURE, "connection attempt aborted")
            return

        _LOGGER.debug("Closing connection to %s (code %d)", self._url, code)
        self._ready_state = ReadyState.CLOSING
        self._close_task = asyncio.get_running_loop().create_task(
            self._ws.close(code, reason)
        )
        self._close_task.add_done_callback(self._on_close_done)

    async def wait_closed(self) -> None:
        """Wait until the connection and closing handshake tasks have finished."""
        tasks = [task for task in (self._task, self._close_task) if task is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _on_close_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        err = task.exception()
        if err is not None:
            _LOGGER.warning("Closing handshake with %s failed: %s", self._url, err)

    @handle_transport_errors("WebSocket connect", reraise=True)
    async def _establish(self) -> ClientConnection:
        # The connection manager owns the connect timeout
        return await connect(self._url, open_timeout=None)

    async def _run(self) -> None:
        try:
            self._ws = await self._establish()
        except asyncio.CancelledError:
            self._signal_close(False, ABNORMAL_CLOSURE, "connection attempt aborted")
            raise
        except Exception as err:
            self._ready_state = ReadyState.CLOSED
            self._listener.on_error(self, str(err) or type(err).__name__)
            self._signal_close(False, ABNORMAL_CLOSURE, str(err))
            return

        if self._ready_state is ReadyState.CLOSING:
            # close() raced with the handshake
            await self._ws.close(NORMAL_CLOSURE)
            self._signal_close(False, ABNORMAL_CLOSURE, "connection attempt aborted")
            return

        self._ready_state = ReadyState.OPEN
        self._listener.on_open(self)

        writer = asyncio.get_running_loop().create_task(self._write_loop())
        clean = True
        try:
            async for message in self._ws:
                if isinstance(message, bytes):
                    message = message.decode("utf-8", errors="replace")
                self._listener.on_message(self, message)
        except ConnectionClosedError as err:
            _LOGGER.debug("Connection to %s closed with error: %s", self._url, err)
            clean = False
        finally:
            writer.cancel()

        self._signal_close(
            clean,
            self._ws.close_code or ABNORMAL_CLOSURE,
            self._ws.close_reason or "",
        )

    async def _write_loop(self) -> None:
        while True:
            text = await self._outbox.get()
            try:
                await self._ws.send(text)
            except ConnectionClosed:
                _LOGGER.debug("Dropped outgoing message, connection closed")
                return

    def _signal_close(self, clean: bool, code: int, reason: str) -> None:
        self._ready_state = ReadyState.CLOSED
        if self._close_signalled:
            return
        self._close_signalled = True
        self._listener.on_close(self, clean, code, reason)

    def __repr__(self) -> str:
        return f"WebSocketHandle(url={self._url!r}, state={self._ready_state.name})"
