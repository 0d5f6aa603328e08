"""Exports for test fakes."""

from .alerts import RecordingAlertSink
from .clock import FakeClock
from .transport import FakeTransport

__all__ = [
    "FakeClock",
    "FakeTransport",
    "RecordingAlertSink",
]
