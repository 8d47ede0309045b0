"""Observability – structlog configuration."""
from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

from accesslog.config.validation import InvalidSettingValueError

# Field that would collide with structlog's own "event" key; the emitter moves
# it here and EventRenamer puts it back once the message is under "message".
EVENT_FIELD_CARRIER = "_event"

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(level: str) -> int:
    """Map a level name to its :mod:`logging` number.

    Raises
    ------
    InvalidSettingValueError
        For anything that is not a known level name.
    """
    try:
        return _LEVELS[level.strip().lower()]
    except (KeyError, AttributeError) as exc:
        raise InvalidSettingValueError(
            "level", level, f"expected one of {sorted(_LEVELS)}"
        ) from exc


def configure_logging(
    level: str = "info",
    text_logging: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog for the events of this package.

    Parameters
    ----------
    level:
        Minimum severity; events below it are dropped.
    text_logging:
        ``True`` renders human-readable ``key=value`` lines, ``False``
        (default) one JSON object per line.
    stream:
        Destination, ``sys.stdout`` by default.
    """
    min_level = parse_level(level)

    renderer: Any
    if text_logging:
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["time", "level", "message"], drop_missing=True
        )
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="time"),
            structlog.processors.EventRenamer("message", replace_by=EVENT_FIELD_CARRIER),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )


def ensure_logging_configured() -> None:
    """Apply the defaults of :func:`configure_logging` unless structlog is set up.

    Info-level JSON on stdout, so events are well-formed even when the host
    never configured anything.
    """
    if not structlog.is_configured():
        configure_logging()


__all__ = ["EVENT_FIELD_CARRIER", "configure_logging", "ensure_logging_configured", "parse_level"]
