"""Testing helpers for applications that use accesslog."""
from accesslog.testing.fakes import EmittedEvent, RecordingEmitter

__all__ = ["EmittedEvent", "RecordingEmitter"]
