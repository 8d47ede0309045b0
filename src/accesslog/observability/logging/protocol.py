"""Observability – Emitter protocol."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from accesslog.observability.events import Severity


class Emitter(Protocol):
    """Port: sink for built events.

    Implementations must not raise; a failing sink may drop the event but
    never interrupts request handling.
    """

    def emit(self, fields: Mapping[str, Any], severity: Severity, message: str) -> None: ...


__all__ = ["Emitter"]
