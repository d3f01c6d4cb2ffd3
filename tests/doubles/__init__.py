"""Test doubles for socket chat client tests."""

from .fake_scheduler import FakeScheduler, FakeTimer
from .fake_transport import FakeHandle, FakeTransport

__all__ = ["FakeHandle", "FakeScheduler", "FakeTimer", "FakeTransport"]
