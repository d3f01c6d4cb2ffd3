"""Tests for connection value objects."""

import dataclasses

import pytest

from socket_chat.domain.exceptions import (
    ChatClientError,
    EmptyMessageError,
    NotConnectedError,
    TransportError,
)
from socket_chat.domain.value_objects import (
    ConnectionFault,
    ConnectionState,
    ErrorKind,
    Mode,
    ReadyState,
)


class TestConnectionState:
    """Test ConnectionState."""

    def test_values(self):
        """Test the five states and their wire values."""
        assert [s.value for s in ConnectionState] == [
            "disconnected",
            "connecting",
            "connected",
            "connection_lost",
            "connection_error",
        ]

    def test_label(self):
        """Test display labels."""
        assert ConnectionState.CONNECTED.label == "Connected"
        assert ConnectionState.CONNECTION_ERROR.label == "Connection Error"


class TestErrorKind:
    """Test ErrorKind classification."""

    @pytest.mark.parametrize(
        "kind",
        [ErrorKind.CONNECT_TIMEOUT, ErrorKind.TRANSPORT_ERROR, ErrorKind.UNCLEAN_CLOSE],
    )
    def test_recoverable(self, kind):
        """Test connection failures drive retries."""
        assert kind.is_recoverable

    @pytest.mark.parametrize("kind", [ErrorKind.NOT_CONNECTED, ErrorKind.EMPTY_MESSAGE])
    def test_local_preconditions_not_recoverable(self, kind):
        """Test local precondition failures do not drive retries."""
        assert not kind.is_recoverable

    def test_exceptions_carry_kind(self):
        """Test raised exceptions map to error kinds."""
        assert EmptyMessageError.kind is ErrorKind.EMPTY_MESSAGE
        assert NotConnectedError.kind is ErrorKind.NOT_CONNECTED
        assert TransportError.kind is ErrorKind.TRANSPORT_ERROR
        assert issubclass(EmptyMessageError, ChatClientError)
        assert issubclass(EmptyMessageError, ValueError)


class TestConnectionFault:
    """Test ConnectionFault."""

    def test_not_terminal_by_default(self):
        """Test a new fault is recoverable."""
        fault = ConnectionFault(ErrorKind.CONNECT_TIMEOUT, "Connection timeout")
        assert fault.terminal is False

    def test_immutable(self):
        """Test faults are frozen."""
        fault = ConnectionFault(ErrorKind.UNCLEAN_CLOSE, "lost")
        with pytest.raises(dataclasses.FrozenInstanceError):
            fault.message = "changed"


class TestModeAndReadyState:
    """Test Mode and ReadyState."""

    def test_mode_from_string(self):
        """Test modes parse from configuration strings."""
        assert Mode("simulated") is Mode.SIMULATED
        assert Mode("live") is Mode.LIVE

    def test_ready_state_numbering(self):
        """Test ready states follow the WebSocket numbering."""
        assert [int(s) for s in ReadyState] == [0, 1, 2, 3]
