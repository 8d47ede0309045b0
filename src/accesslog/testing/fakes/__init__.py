"""Testing fakes."""
from accesslog.testing.fakes.emitter import EmittedEvent, RecordingEmitter

__all__ = ["EmittedEvent", "RecordingEmitter"]
