"""Constants for the socket chat client.

This file contains the protocol constants and configuration defaults.
Durations are in milliseconds unless the name says otherwise.
"""

from __future__ import annotations

# Package identity
DEFAULT_NAME = "Socket Chat Client"

# Server endpoint
DEFAULT_SERVER_HOST = "localhost"
DEFAULT_SERVER_PORT = 8765
DEFAULT_SERVER_URL = f"ws://{DEFAULT_SERVER_HOST}:{DEFAULT_SERVER_PORT}"

# Connection lifecycle
DEFAULT_MAX_RETRIES = 3
DEFAULT_CONNECT_TIMEOUT_MS = 5000
DEFAULT_BACKOFF_BASE_MS = 2000
DEFAULT_SIMULATED_LATENCY_MS = 100
DEFAULT_MODE = "simulated"
DEFAULT_LOG_LEVEL = "INFO"

# WebSocket close codes (RFC 6455)
NORMAL_CLOSURE = 1000
ABNORMAL_CLOSURE = 1006
USER_CLOSE_REASON = "User closed connection"

# Protocol
EMPTY_MESSAGE_RESPONSE = "Empty message received"

# System event texts
MSG_CONNECTED = "Connected to {url}"
MSG_CONNECTED_SIMULATED = "Connected (simulated)"
MSG_DISCONNECTED = "Disconnected"
MSG_CONNECTION_CLOSED = "Disconnected (connection closed by server)"
MSG_RETRYING = "{reason}, retrying ({attempt}/{max_retries}) in {delay:.1f}s"
MSG_FAILED_AFTER_ATTEMPTS = (
    "Connection failed after {attempts} attempts. "
    "Use simulated mode or check that the server is running."
)
MSG_TRANSPORT_ERROR = (
    "Failed to connect to server. Make sure the server is running on {url}"
)
MSG_CONNECT_TIMEOUT = "Connection timeout. Server may not be running."

# Reason shown before "retrying (n/max)", keyed by error kind value
RETRY_REASONS = {
    "unclean_close": "Connection lost unexpectedly",
    "connect_timeout": "Connection timeout",
    "transport_error": "Connection failed",
}
