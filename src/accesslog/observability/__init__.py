"""Observability – correlation, redaction, event building and emission."""

from accesslog.observability.correlation import CorrelationContext, CorrelationHeaders, RequestContext
from accesslog.observability.events import EventBuilder, LogEvent, RequestView, Severity
from accesslog.observability.logging import (
    Emitter,
    EventContext,
    EventLog,
    StructlogEmitter,
    configure_logging,
    get_event_log,
    set_event_log,
)
from accesslog.observability.redaction import RedactionPolicy, RedactionPolicyHolder, default_policy

__all__ = [
    "CorrelationContext",
    "CorrelationHeaders",
    "Emitter",
    "EventBuilder",
    "EventContext",
    "EventLog",
    "LogEvent",
    "RedactionPolicy",
    "RedactionPolicyHolder",
    "RequestContext",
    "RequestView",
    "Severity",
    "StructlogEmitter",
    "configure_logging",
    "default_policy",
    "get_event_log",
    "set_event_log",
]
