"""Pytest configuration and fixtures for socket chat client tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import socket_chat
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from socket_chat.config_loader import ClientConfig
from socket_chat.domain.entities import EventLog
from socket_chat.infrastructure.protocol import ProtocolSimulator
from socket_chat.infrastructure.transport import ConnectionManager
from tests.doubles import FakeScheduler, FakeTransport


@pytest.fixture
def fake_scheduler():
    """Create a manually advanced scheduler."""
    return FakeScheduler()


@pytest.fixture
def fake_transport():
    """Create a fake transport recording opened handles."""
    return FakeTransport()


@pytest.fixture
def event_log():
    """Create an empty event log."""
    return EventLog()


@pytest.fixture
def live_config():
    """Live mode configuration with the default timings."""
    return ClientConfig(mode="live", server_url="ws://test.invalid:8765")


@pytest.fixture
def simulated_config():
    """Simulated mode configuration with the default timings."""
    return ClientConfig(mode="simulated")


def _build_manager(config, fake_transport, fake_scheduler, event_log):
    return ConnectionManager(
        transport=fake_transport,
        scheduler=fake_scheduler,
        event_log=event_log,
        simulator=ProtocolSimulator(
            fake_scheduler, latency_ms=config.simulated_latency_ms
        ),
        config=config,
    )


@pytest.fixture
def manager(live_config, fake_transport, fake_scheduler, event_log):
    """Create a live mode connection manager wired to fakes."""
    return _build_manager(live_config, fake_transport, fake_scheduler, event_log)


@pytest.fixture
def simulated_manager(simulated_config, fake_transport, fake_scheduler, event_log):
    """Create a simulated mode connection manager wired to fakes."""
    return _build_manager(simulated_config, fake_transport, fake_scheduler, event_log)
