"""Tests for ProtocolSimulator."""

import pytest

from socket_chat.infrastructure.protocol import ProtocolSimulator
from tests.doubles import FakeScheduler


@pytest.fixture
def simulator(fake_scheduler):
    """Create simulator with the default latency."""
    return ProtocolSimulator(fake_scheduler)


class TestTransform:
    """Test the simulated server transform."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", "Empty message received"),
            ("a", "A"),
            ("A", "A"),
            ("Z", "Z"),
            ("hello world", "Hello world"),
        ],
    )
    def test_transform(self, text, expected):
        """Test documented examples."""
        assert ProtocolSimulator.transform(text) == expected

    @pytest.mark.parametrize("text", ["ab", "xYZ", "  spaced", "über", "9lives"])
    def test_only_first_character_changes(self, text):
        """Test first char upper-cased and remainder unchanged."""
        result = ProtocolSimulator.transform(text)
        assert result[0] == text[0].upper()
        assert result[1:] == text[1:]


class TestLatency:
    """Test delayed delivery."""

    def test_default_latency(self, simulator):
        """Test default latency is 100ms."""
        assert simulator.latency_ms == 100

    def test_negative_latency_rejected(self, fake_scheduler):
        """Test negative latency is invalid."""
        with pytest.raises(ValueError):
            ProtocolSimulator(fake_scheduler, latency_ms=-1)

    def test_respond_after_latency(self, simulator, fake_scheduler):
        """Test the reply is delivered only once the latency elapsed."""
        replies = []
        simulator.respond("test", replies.append)

        fake_scheduler.advance(0.05)
        assert replies == []

        fake_scheduler.advance(0.05)
        assert replies == ["Test"]

    def test_cancelled_reply_never_delivered(self, simulator, fake_scheduler):
        """Test cancelling the returned timer suppresses the reply."""
        replies = []
        timer = simulator.respond("test", replies.append)
        timer.cancel()

        fake_scheduler.advance(1.0)
        assert replies == []
        assert timer.cancelled()

    def test_computation_runs_immediately(self, simulator):
        """Test only the observation is delayed."""
        calls = []

        def compute():
            calls.append(1)
            return 42

        simulator.simulate_latency(compute, lambda result: None)
        assert calls == [1]

    def test_zero_latency(self):
        """Test zero latency delivers on the next tick."""
        scheduler = FakeScheduler()
        results = []
        ProtocolSimulator(scheduler, latency_ms=0).respond("x", results.append)

        scheduler.advance(0)
        assert results == ["X"]
