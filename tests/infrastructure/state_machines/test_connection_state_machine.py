"""Tests for connection state machine."""

import pytest

from socket_chat.infrastructure.state_machines import (
    ConnectionEvent,
    ConnectionState,
    ConnectionStateMachine,
)


@pytest.fixture
def state_machine():
    """Create a state machine in DISCONNECTED state."""
    return ConnectionStateMachine()


def _machine_in(state: ConnectionState) -> ConnectionStateMachine:
    sm = ConnectionStateMachine()
    sm.force_state(state)
    return sm


class TestConnectionStateMachineInitialization:
    """Test state machine initialization."""

    def test_initial_state(self, state_machine):
        """Test initial state is DISCONNECTED."""
        assert state_machine.state == ConnectionState.DISCONNECTED
        assert state_machine.previous_state is None
        assert not state_machine.is_connected
        assert not state_machine.is_connecting
        assert state_machine.can_connect


class TestValidTransitions:
    """Test the transition table."""

    @pytest.mark.parametrize(
        "start,event,end",
        [
            (ConnectionState.DISCONNECTED, ConnectionEvent.CONNECT, ConnectionState.CONNECTING),
            (ConnectionState.CONNECTION_LOST, ConnectionEvent.CONNECT, ConnectionState.CONNECTING),
            (ConnectionState.CONNECTION_ERROR, ConnectionEvent.CONNECT, ConnectionState.CONNECTING),
            (ConnectionState.CONNECTING, ConnectionEvent.CONNECT_SUCCESS, ConnectionState.CONNECTED),
            (ConnectionState.CONNECTING, ConnectionEvent.CONNECT_FAILED, ConnectionState.CONNECTION_ERROR),
            (ConnectionState.CONNECTING, ConnectionEvent.CONNECT_TIMEOUT, ConnectionState.CONNECTION_ERROR),
            (ConnectionState.CONNECTED, ConnectionEvent.CLOSED_CLEAN, ConnectionState.DISCONNECTED),
            (ConnectionState.CONNECTED, ConnectionEvent.CONNECTION_LOST, ConnectionState.CONNECTION_LOST),
        ],
    )
    def test_transition(self, start, event, end):
        """Test each documented transition."""
        sm = _machine_in(start)
        assert sm.transition(event) is True
        assert sm.state == end
        assert sm.previous_state == start

    @pytest.mark.parametrize("start", list(ConnectionState))
    def test_disconnect_from_any_state(self, start):
        """Test manual disconnect is accepted everywhere."""
        sm = _machine_in(start)
        assert sm.transition(ConnectionEvent.DISCONNECT) is True
        assert sm.state == ConnectionState.DISCONNECTED


class TestInvalidTransitions:
    """Test rejected transitions leave the state unchanged."""

    @pytest.mark.parametrize(
        "start,event",
        [
            (ConnectionState.DISCONNECTED, ConnectionEvent.CONNECT_SUCCESS),
            (ConnectionState.CONNECTING, ConnectionEvent.CONNECT),
            (ConnectionState.CONNECTED, ConnectionEvent.CONNECT),
            (ConnectionState.CONNECTED, ConnectionEvent.CONNECT_TIMEOUT),
            (ConnectionState.CONNECTION_LOST, ConnectionEvent.CLOSED_CLEAN),
            (ConnectionState.CONNECTION_ERROR, ConnectionEvent.CONNECT_SUCCESS),
        ],
    )
    def test_rejected(self, start, event):
        """Test invalid transitions return False."""
        sm = _machine_in(start)
        assert sm.transition(event) is False
        assert sm.state == start

    def test_can_connect_only_when_idle_or_failed(self):
        """Test can_connect follows the table."""
        assert not _machine_in(ConnectionState.CONNECTING).can_connect
        assert not _machine_in(ConnectionState.CONNECTED).can_connect
        assert _machine_in(ConnectionState.CONNECTION_LOST).can_connect
        assert _machine_in(ConnectionState.CONNECTION_ERROR).can_connect


class TestStateCallbacks:
    """Test state entry callbacks."""

    def test_callback_on_entry(self, state_machine):
        """Test callback runs when the state is entered."""
        entered = []
        state_machine.on_state(ConnectionState.CONNECTING, lambda: entered.append(1))

        state_machine.transition(ConnectionEvent.CONNECT)
        assert entered == [1]

    def test_callback_error_is_contained(self, state_machine):
        """Test a failing callback does not block the transition."""

        def broken():
            raise RuntimeError("boom")

        state_machine.on_state(ConnectionState.CONNECTING, broken)
        assert state_machine.transition(ConnectionEvent.CONNECT) is True
        assert state_machine.is_connecting


class TestReset:
    """Test reset and representations."""

    def test_reset(self, state_machine):
        """Test reset returns to DISCONNECTED."""
        state_machine.transition(ConnectionEvent.CONNECT)
        state_machine.reset()

        assert state_machine.state == ConnectionState.DISCONNECTED
        assert state_machine.previous_state is None

    def test_str(self, state_machine):
        """Test string representation names the state."""
        assert "DISCONNECTED" in str(state_machine)
