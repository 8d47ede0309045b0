"""Observability – emitters, structlog configuration and the EventLog facade."""
from accesslog.observability.logging.emitter import StructlogEmitter
from accesslog.observability.logging.event_log import EventContext, EventLog, get_event_log, set_event_log
from accesslog.observability.logging.factory import configure_logging, ensure_logging_configured, parse_level
from accesslog.observability.logging.protocol import Emitter

__all__ = [
    "Emitter",
    "EventContext",
    "EventLog",
    "StructlogEmitter",
    "configure_logging",
    "ensure_logging_configured",
    "get_event_log",
    "parse_level",
    "set_event_log",
]
