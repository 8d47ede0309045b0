"""Observability – log event model and builder."""
from accesslog.observability.events.builder import EventBuilder
from accesslog.observability.events.event import LogEvent, Severity, severity_for_status
from accesslog.observability.events.paths import build_full_url, build_redacted_path, get_remote_ip
from accesslog.observability.events.request import RequestView

__all__ = [
    "EventBuilder",
    "LogEvent",
    "RequestView",
    "Severity",
    "build_full_url",
    "build_redacted_path",
    "get_remote_ip",
    "severity_for_status",
]
