"""Testing fakes – RecordingEmitter."""
from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from typing import Any

from accesslog.observability.events import Severity


@dataclasses.dataclass(frozen=True)
class EmittedEvent:
    fields: dict[str, Any]
    severity: Severity
    message: str

    @property
    def type(self) -> str | None:
        return self.fields.get("type")


class RecordingEmitter:
    """Emitter that keeps every event in memory."""

    def __init__(self) -> None:
        self._events: list[EmittedEvent] = []
        self._lock = threading.Lock()

    def emit(self, fields: Mapping[str, Any], severity: Severity, message: str) -> None:
        with self._lock:
            self._events.append(EmittedEvent(dict(fields), Severity(severity), message))

    @property
    def events(self) -> list[EmittedEvent]:
        with self._lock:
            return list(self._events)

    @property
    def last(self) -> EmittedEvent:
        with self._lock:
            if not self._events:
                raise AssertionError("no event was emitted")
            return self._events[-1]

    def of_type(self, event_type: str) -> list[EmittedEvent]:
        return [e for e in self.events if e.type == event_type]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


__all__ = ["EmittedEvent", "RecordingEmitter"]
