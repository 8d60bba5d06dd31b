"""Mock implementations for testing."""

from tests.mocks.collaborators import (
    EventRecorder,
    FakeFetcher,
    RecordingHistory,
    RecordingSink,
)

__all__ = ["EventRecorder", "FakeFetcher", "RecordingHistory", "RecordingSink"]
