"""Observability – StructlogEmitter."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import structlog

from accesslog.observability.events import Severity
from accesslog.observability.logging.factory import EVENT_FIELD_CARRIER, ensure_logging_configured

_internal = logging.getLogger("accesslog")


class StructlogEmitter:
    """Emit events through a structlog logger.

    The fields are bound on the logger and the method named by the severity
    is called with the message.  Use :func:`configure_logging` to choose the
    output style and threshold; without it the first event applies the
    defaults (info, JSON on stdout).  An injected *logger* is used as is.
    """

    def __init__(self, name: str = "accesslog", logger: Any = None) -> None:
        self._configure = logger is None
        self._logger = logger if logger is not None else structlog.get_logger(name)

    def emit(self, fields: Mapping[str, Any], severity: Severity, message: str) -> None:
        values = dict(fields)
        if "event" in values:
            values[EVENT_FIELD_CARRIER] = values.pop("event")
        try:
            if self._configure:
                ensure_logging_configured()
            log_method = getattr(self._logger.bind(**values), Severity(severity).value)
            log_method(message)
        except Exception:  # noqa: BLE001 - the sink must never break the caller
            _internal.exception("dropping %s event: %s", values.get("type", "unknown"), message)


__all__ = ["EVENT_FIELD_CARRIER", "StructlogEmitter"]
