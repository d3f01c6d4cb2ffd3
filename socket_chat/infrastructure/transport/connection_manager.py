"""Connection manager for the chat connection lifecycle.

This module implements connection lifecycle management with:
- Explicit state machine (connect, clean/unclean close, errors)
- Bounded linear backoff retries
- Connect timeout
- A send gateway that only forwards while connected
- Simulated mode routed through the protocol simulator

All state is mutated from event loop callbacks (transport signals and
timers), which never overlap.
"""

import itertools
import logging
from functools import partial
from typing import Dict, Optional, Tuple

from ...const import (
    MSG_CONNECT_TIMEOUT,
    MSG_CONNECTED,
    MSG_CONNECTED_SIMULATED,
    MSG_CONNECTION_CLOSED,
    MSG_DISCONNECTED,
    MSG_FAILED_AFTER_ATTEMPTS,
    MSG_RETRYING,
    MSG_TRANSPORT_ERROR,
    NORMAL_CLOSURE,
    RETRY_REASONS,
    USER_CLOSE_REASON,
)
from ...config_loader import ClientConfig
from ...domain.entities.event_log import EventLog
from ...domain.exceptions import NotConnectedError, TransportError
from ...domain.interfaces import (
    IConnectionHandle,
    IConnectionManager,
    IScheduler,
    ITimer,
    ITransport,
    ITransportListener,
)
from ...domain.value_objects import (
    ConnectionFault,
    ConnectionState,
    ErrorKind,
    Event,
    EventKind,
    Mode,
    ReadyState,
    RetryPolicy,
)
from ..decorators import handle_transport_errors, require_connection, require_message_text
from ..protocol.protocol_simulator import ProtocolSimulator
from ..state_machines import ConnectionEvent, ConnectionStateMachine

_LOGGER = logging.getLogger(__name__)


class ConnectionManager(IConnectionManager, ITransportListener):
    """Manages the chat connection lifecycle with retry logic.

    This implementation:
    - Owns at most one transport handle at a time
    - Retries unclean closes, transport errors and timeouts with linear backoff
    - Cancels stale timers instead of ignoring them
    - Ignores signals from handles it no longer owns

    Attributes:
        _transport: Transport creating connection handles
        _scheduler: Scheduler for retry, timeout and latency timers
        _event_log: Log receiving sent/received/system events
        _simulator: Protocol simulator used in simulated mode
        _retry_policy: Retry counter and backoff
        _handle: Current transport handle, if any
        _retry_timer: Pending automatic retry, if any
        _connect_timer: Pending connect timeout, if any
        _pending_replies: Simulated replies still in their latency window
        _last_error: Last connection fault, if any

    Example:
        >>> manager = ConnectionManager(transport, scheduler, EventLog(), simulator)
        >>> manager.set_mode(Mode.LIVE)
        >>> manager.connect()
        >>> # ... transport opens
        >>> manager.send("hello")
    """

    def __init__(
        self,
        transport: ITransport,
        scheduler: IScheduler,
        event_log: EventLog,
        simulator: ProtocolSimulator,
        config: Optional[ClientConfig] = None,
    ):
        """Initialize connection manager.

        Args:
            transport: Transport to open live connections with
            scheduler: Scheduler for timers
            event_log: Event log to append to
            simulator: Simulator for simulated mode
            config: Client configuration (default: built-in defaults)
        """
        config = config or ClientConfig()

        self._transport = transport
        self._scheduler = scheduler
        self._event_log = event_log
        self._simulator = simulator

        self._server_url = config.server_url
        self._mode = Mode(config.mode)
        self._connect_timeout_ms = config.connect_timeout_ms
        self._retry_policy = RetryPolicy(
            max_retries=config.max_retries,
            backoff_base_ms=config.backoff_base_ms,
        )

        self._state_machine = ConnectionStateMachine()
        self._handle: Optional[IConnectionHandle] = None
        self._retry_timer: Optional[ITimer] = None
        self._connect_timer: Optional[ITimer] = None
        self._pending_replies: Dict[int, ITimer] = {}
        self._reply_ids = itertools.count(1)
        self._last_error: Optional[ConnectionFault] = None

        # Register state callbacks for logging
        self._state_machine.on_state(ConnectionState.CONNECTED, self._on_connected)
        self._state_machine.on_state(
            ConnectionState.CONNECTION_ERROR, self._on_failed
        )

    def _on_connected(self):
        """Callback when connection established."""
        _LOGGER.info("Connection established successfully (%s)", self._mode.value)

    def _on_failed(self):
        """Callback when connection attempt failed."""
        _LOGGER.warning("Connection attempt failed")

    # ------------------------------------------------------------------
    # Caller operations
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Start a connection attempt.

        No-op while already connecting or connected. Otherwise cancels any
        pending retry and supersedes the previous handle before starting.
        Returns immediately; the outcome arrives through transport signals.
        """
        if not self._state_machine.can_connect:
            _LOGGER.debug(
                "Ignoring connect() in state: %s", self._state_machine.state.name
            )
            return

        self._cancel_retry_timer()
        self._cancel_connect_timer()
        self._release_handle()

        self._state_machine.transition(ConnectionEvent.CONNECT)
        self._last_error = None

        if self._mode is Mode.SIMULATED:
            self._state_machine.transition(ConnectionEvent.CONNECT_SUCCESS)
            self._retry_policy.reset()
            self._log_system(MSG_CONNECTED_SIMULATED)
            return

        _LOGGER.debug(
            "Attempting connection to %s (retry %d/%d)",
            self._server_url,
            self._retry_policy.retry_count,
            self._retry_policy.max_retries,
        )
        try:
            handle = self._open_handle()
        except TransportError as err:
            self._fail_attempt(
                ConnectionEvent.CONNECT_FAILED,
                ErrorKind.TRANSPORT_ERROR,
                f"Failed to establish connection: {err}",
            )
            return

        self._handle = handle
        self._connect_timer = self._scheduler.call_later(
            self._connect_timeout_ms / 1000, self._on_connect_timeout, handle
        )

    def disconnect(self) -> None:
        """Close the connection.

        Cancels any pending retry, connect timeout and simulated reply,
        closes the handle with a normal closure and resets the retry count.
        """
        was_active = (
            self._state_machine.state is not ConnectionState.DISCONNECTED
            or self._handle is not None
        )

        self._cancel_all_timers()
        self._release_handle(NORMAL_CLOSURE, USER_CLOSE_REASON)

        self._state_machine.transition(ConnectionEvent.DISCONNECT)
        self._retry_policy.reset()
        self._last_error = None

        if was_active:
            _LOGGER.info("Disconnected by user")
            self._log_system(MSG_DISCONNECTED)

    @require_message_text()
    @require_connection()
    def send(self, text: str) -> Event:
        """Send a message.

        In simulated mode the transformed reply is appended after the
        simulator's latency. In live mode the text is forwarded verbatim.

        Args:
            text: Message text

        Returns:
            The appended sent event

        Raises:
            EmptyMessageError: If text is blank
            NotConnectedError: If not connected, or the live handle is not open
        """
        if self._mode is Mode.SIMULATED:
            event = self._event_log.append(EventKind.SENT, text)
            reply_id = next(self._reply_ids)
            self._pending_replies[reply_id] = self._simulator.respond(
                text, partial(self._deliver_simulated_reply, reply_id)
            )
            return event

        handle = self._handle
        if handle is None or handle.ready_state is not ReadyState.OPEN:
            raise NotConnectedError("Not connected to server. Please connect first.")

        try:
            handle.send(text)
        except TransportError as err:
            raise NotConnectedError(str(err)) from err

        return self._event_log.append(EventKind.SENT, text)

    def clear_log(self) -> None:
        """Empty the event log. Does not touch the connection."""
        self._event_log.clear()

    def set_mode(self, mode: Mode) -> None:
        """Switch operating mode.

        Anything active (connection, attempt or pending retry) is
        disconnected first.

        Args:
            mode: New mode
        """
        mode = Mode(mode)
        if mode is self._mode:
            return

        if self._is_active():
            self.disconnect()

        _LOGGER.info("Switching mode: %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        self._retry_policy.reset()
        self._last_error = None

    def set_url(self, url: str) -> None:
        """Set the server URL used by the next connection attempt.

        Args:
            url: Endpoint URL

        Raises:
            ValueError: If url is blank
        """
        url = (url or "").strip()
        if not url:
            raise ValueError("Server URL must not be empty")
        self._server_url = url

    def shutdown(self) -> None:
        """Release every resource without emitting events.

        Called on teardown so no timer fires into a discarded manager.
        """
        self._cancel_all_timers()
        self._release_handle()
        self._state_machine.reset()
        _LOGGER.debug("Connection manager shut down")

    # ------------------------------------------------------------------
    # Transport signals
    # ------------------------------------------------------------------

    def on_open(self, handle: IConnectionHandle) -> None:
        """Handle transport open signal."""
        if not self._owns(handle, "open"):
            return

        self._cancel_connect_timer()
        if not self._state_machine.transition(ConnectionEvent.CONNECT_SUCCESS):
            return

        self._retry_policy.reset()
        self._last_error = None
        self._log_system(MSG_CONNECTED.format(url=handle.url))

    def on_message(self, handle: IConnectionHandle, text: str) -> None:
        """Handle transport message signal."""
        if not self._owns(handle, "message"):
            return

        if not self._state_machine.is_connected:
            _LOGGER.debug("Dropping message received while %s", self.connection_state)
            return

        self._event_log.append(EventKind.RECEIVED, text)

    def on_error(self, handle: IConnectionHandle, info: str) -> None:
        """Handle transport error signal.

        During a connection attempt the handle is given up and the retry
        policy applies. Once connected, the close signal that follows the
        error decides what happens next.
        """
        if not self._owns(handle, "error"):
            return

        _LOGGER.error("Transport error on %s: %s", handle.url, info)

        if self._state_machine.is_connecting:
            self._fail_attempt(
                ConnectionEvent.CONNECT_FAILED,
                ErrorKind.TRANSPORT_ERROR,
                MSG_TRANSPORT_ERROR.format(url=handle.url),
            )

    def on_close(
        self, handle: IConnectionHandle, clean: bool, code: int, reason: str
    ) -> None:
        """Handle transport close signal."""
        if not self._owns(handle, "close"):
            return

        self._handle = None
        _LOGGER.debug(
            "Connection closed (clean=%s, code=%s, reason=%r)", clean, code, reason
        )

        if self._state_machine.is_connecting:
            # Closed before ever opening
            self._fail_attempt(
                ConnectionEvent.CONNECT_FAILED,
                ErrorKind.TRANSPORT_ERROR if clean else ErrorKind.UNCLEAN_CLOSE,
                MSG_TRANSPORT_ERROR.format(url=handle.url),
            )
            return

        if not self._state_machine.is_connected:
            return

        if clean:
            self._state_machine.transition(ConnectionEvent.CLOSED_CLEAN)
            self._retry_policy.reset()
            _LOGGER.info("Connection closed cleanly (code %s)", code)
            self._log_system(MSG_CONNECTION_CLOSED)
            return

        _LOGGER.warning(
            "Connection lost to %s (code %s, retries %d/%d)",
            handle.url,
            code,
            self._retry_policy.retry_count,
            self._retry_policy.max_retries,
        )
        self._state_machine.transition(ConnectionEvent.CONNECTION_LOST)
        self._apply_retry_policy(ErrorKind.UNCLEAN_CLOSE)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _on_connect_timeout(self, handle: IConnectionHandle) -> None:
        self._connect_timer = None
        if handle is not self._handle or not self._state_machine.is_connecting:
            return

        _LOGGER.warning(
            "Connection to %s timed out after %dms",
            handle.url,
            self._connect_timeout_ms,
        )
        self._fail_attempt(
            ConnectionEvent.CONNECT_TIMEOUT,
            ErrorKind.CONNECT_TIMEOUT,
            MSG_CONNECT_TIMEOUT,
        )

    def _on_retry_timer(self) -> None:
        self._retry_timer = None
        if self._state_machine.state not in (
            ConnectionState.CONNECTION_LOST,
            ConnectionState.CONNECTION_ERROR,
        ):
            return

        _LOGGER.info(
            "Retrying connection (%d/%d)",
            self._retry_policy.retry_count,
            self._retry_policy.max_retries,
        )
        self.connect()

    def _deliver_simulated_reply(self, reply_id: int, reply: str) -> None:
        if self._pending_replies.pop(reply_id, None) is None:
            return
        if not self._state_machine.is_connected or self._mode is not Mode.SIMULATED:
            return
        self._event_log.append(EventKind.RECEIVED, reply)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @handle_transport_errors("Open connection", reraise=True)
    def _open_handle(self) -> IConnectionHandle:
        return self._transport.open(self._server_url, self)

    def _fail_attempt(
        self, event: ConnectionEvent, kind: ErrorKind, message: str
    ) -> None:
        """Give up the current attempt and apply the retry policy."""
        self._cancel_connect_timer()
        self._release_handle()
        self._state_machine.transition(event)
        self._log_system(message)
        self._apply_retry_policy(kind)

    def _apply_retry_policy(self, kind: ErrorKind) -> None:
        """Schedule the next retry, or record a terminal fault."""
        policy = self._retry_policy

        if policy.is_exhausted:
            message = MSG_FAILED_AFTER_ATTEMPTS.format(attempts=policy.retry_count)
            _LOGGER.error(
                "Giving up after %d attempts, waiting for manual connect",
                policy.retry_count,
            )
            self._last_error = ConnectionFault(kind, message, terminal=True)
            self._log_system(message)
            return

        attempt = policy.register_retry()
        delay_ms = policy.delay_ms(attempt)

        message = MSG_RETRYING.format(
            reason=RETRY_REASONS[kind.value],
            attempt=attempt,
            max_retries=policy.max_retries,
            delay=delay_ms / 1000,
        )

        _LOGGER.debug(
            "Scheduling retry %d/%d in %dms", attempt, policy.max_retries, delay_ms
        )
        self._last_error = ConnectionFault(kind, message)
        self._log_system(message)
        self._retry_timer = self._scheduler.call_later(
            delay_ms / 1000, self._on_retry_timer
        )

    def _owns(self, handle: IConnectionHandle, signal: str) -> bool:
        if handle is self._handle:
            return True
        _LOGGER.debug("Ignoring %s signal from stale handle %r", signal, handle)
        return False

    def _release_handle(self, code: Optional[int] = None, reason: str = "") -> None:
        """Detach the current handle, then close it."""
        handle, self._handle = self._handle, None
        if handle is None:
            return
        if code is None:
            handle.close()
        else:
            handle.close(code, reason)

    def _cancel_retry_timer(self) -> None:
        if self._retry_timer is not None:
            self._retry_timer.cancel()
            self._retry_timer = None

    def _cancel_connect_timer(self) -> None:
        if self._connect_timer is not None:
            self._connect_timer.cancel()
            self._connect_timer = None

    def _cancel_all_timers(self) -> None:
        self._cancel_retry_timer()
        self._cancel_connect_timer()
        for timer in self._pending_replies.values():
            timer.cancel()
        self._pending_replies.clear()

    def _is_active(self) -> bool:
        return (
            self._state_machine.state is not ConnectionState.DISCONNECTED
            or self._handle is not None
            or self._retry_timer is not None
        )

    def _log_system(self, message: str) -> None:
        self._event_log.append(EventKind.SYSTEM, message)

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state_machine.state

    @property
    def connection_state(self) -> str:
        """Get current connection state.

        Returns:
            State: "disconnected", "connecting", "connected",
                   "connection_lost", "connection_error"
        """
        return self._state_machine.state.value

    @property
    def is_connected(self) -> bool:
        """Check if connected.

        Returns:
            True if in CONNECTED state
        """
        return self._state_machine.is_connected

    @property
    def retry_count(self) -> int:
        """Retries scheduled since the last successful connect."""
        return self._retry_policy.retry_count

    @property
    def max_retries(self) -> int:
        """Maximum number of automatic retries."""
        return self._retry_policy.max_retries

    @property
    def retry_pending(self) -> bool:
        """Check if an automatic retry is scheduled."""
        return self._retry_timer is not None

    @property
    def last_error(self) -> Optional[ConnectionFault]:
        """Last connection fault, or None."""
        return self._last_error

    @property
    def error_message(self) -> Optional[str]:
        """Human-readable last error, or None."""
        return self._last_error.message if self._last_error else None

    @property
    def mode(self) -> Mode:
        """Current operating mode."""
        return self._mode

    @property
    def server_url(self) -> str:
        """Server URL used by the next connection attempt."""
        return self._server_url

    @property
    def events(self) -> Tuple[Event, ...]:
        """Ordered snapshot of the event log."""
        return self._event_log.snapshot()

    def get_failure_info(self) -> dict:
        """Get current failure tracking info.

        Returns:
            Dictionary with retry statistics

        Example:
            >>> info = manager.get_failure_info()
            >>> print(f"Retries: {info['retry_count']}/{info['max_retries']}")
        """
        return {
            "retry_count": self._retry_policy.retry_count,
            "max_retries": self._retry_policy.max_retries,
            "retry_pending": self.retry_pending,
            "state": self.connection_state,
            "last_error": self.error_message,
            "terminal": bool(self._last_error and self._last_error.terminal),
        }
