"""Observability – Severity and LogEvent."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity of an emitted event, named like the structlog methods."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def severity_for_status(status: int) -> Severity:
    """2xx/3xx are info, 4xx warning, everything else error."""
    if 200 <= status <= 399:
        return Severity.INFO
    if 400 <= status <= 499:
        return Severity.WARNING
    return Severity.ERROR


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """Fields, severity and message of one event, ready for an emitter."""
    fields: dict[str, Any]
    severity: Severity
    message: str


__all__ = ["LogEvent", "Severity", "severity_for_status"]
