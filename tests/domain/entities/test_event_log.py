"""Tests for EventLog entity."""

from datetime import datetime, timezone

import pytest

from socket_chat.domain.entities import EventLog
from socket_chat.domain.value_objects import EventKind


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed instant."""
    instant = datetime(2024, 2, 3, 12, 0, tzinfo=timezone.utc)
    return lambda: instant


class TestEventLogAppend:
    """Test appending events."""

    def test_append_returns_event(self, fixed_clock):
        """Test append builds a complete event."""
        log = EventLog(clock=fixed_clock)
        event = log.append(EventKind.SENT, "hello")

        assert event.id == 1
        assert event.kind is EventKind.SENT
        assert event.content == "hello"
        assert event.timestamp == fixed_clock()

    def test_order_preserved(self):
        """Test events keep invocation order."""
        log = EventLog()
        log.append(EventKind.SYSTEM, "Connected (simulated)")
        log.append(EventKind.SENT, "hi")
        log.append(EventKind.RECEIVED, "Hi")

        assert [e.content for e in log] == ["Connected (simulated)", "hi", "Hi"]
        assert len(log) == 3

    def test_ids_strictly_increase(self):
        """Test identifiers are unique and increasing."""
        log = EventLog()
        ids = [log.append(EventKind.SENT, str(i)).id for i in range(5)]
        assert ids == sorted(set(ids))

    def test_default_timestamp_is_utc(self):
        """Test default clock is timezone aware."""
        event = EventLog().append(EventKind.SYSTEM, "x")
        assert event.timestamp.tzinfo is not None


class TestEventLogClear:
    """Test clearing the log."""

    def test_clear_empties_log(self):
        """Test clear removes everything."""
        log = EventLog()
        log.append(EventKind.SENT, "a")
        log.clear()

        assert len(log) == 0
        assert log.snapshot() == ()

    def test_ids_not_reused_after_clear(self):
        """Test identifiers keep increasing across clear."""
        log = EventLog()
        first = log.append(EventKind.SENT, "a")
        log.clear()
        second = log.append(EventKind.SENT, "b")

        assert second.id > first.id


class TestEventLogQueries:
    """Test snapshot and latest."""

    def test_snapshot_is_immutable_copy(self):
        """Test snapshots do not change after later appends."""
        log = EventLog()
        log.append(EventKind.SENT, "a")
        snapshot = log.snapshot()
        log.append(EventKind.SENT, "b")

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1

    def test_latest_by_kind(self):
        """Test latest returns the newest event of a kind."""
        log = EventLog()
        log.append(EventKind.SYSTEM, "first")
        log.append(EventKind.SENT, "msg")
        log.append(EventKind.SYSTEM, "second")

        assert log.latest(EventKind.SYSTEM).content == "second"
        assert log.latest(EventKind.RECEIVED) is None


class TestEventLogSubscribe:
    """Test listeners."""

    def test_listener_receives_appends(self):
        """Test subscribers see every appended event."""
        log = EventLog()
        seen = []
        log.subscribe(seen.append)

        event = log.append(EventKind.SENT, "hello")
        assert seen == [event]

    def test_unsubscribe(self):
        """Test unsubscribe stops notifications."""
        log = EventLog()
        seen = []
        unsubscribe = log.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        log.append(EventKind.SENT, "hello")
        assert seen == []

    def test_failing_listener_does_not_break_append(self, caplog):
        """Test a listener error is logged, not raised."""
        log = EventLog()

        def broken(event):
            raise RuntimeError("display crashed")

        log.subscribe(broken)
        event = log.append(EventKind.SENT, "hello")

        assert log.snapshot() == (event,)
        assert "display crashed" in caplog.text
