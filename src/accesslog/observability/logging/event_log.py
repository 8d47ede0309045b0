"""Observability – EventLog facade.

Pairs an :class:`EventBuilder` with an :class:`Emitter`; this is what the
middleware, the outbound reporter and application code talk to.
"""
from __future__ import annotations

import signal as signal_module
from collections.abc import Mapping
from typing import IO, Any

from accesslog.config.settings.base import LoggingSettings
from accesslog.kernel.time import Timing
from accesslog.observability.correlation import CorrelationHeaders
from accesslog.observability.events import EventBuilder, LogEvent, RequestView, Severity
from accesslog.observability.events.builder import ResponseLike
from accesslog.observability.logging.emitter import StructlogEmitter
from accesslog.observability.logging.factory import configure_logging
from accesslog.observability.logging.protocol import Emitter
from accesslog.observability.redaction import RedactionPolicy, RedactionPolicyHolder, default_policy


class EventContext:
    """Pre-populated fields to log application events against.

    Returned by :meth:`EventLog.application`; carries ``type=application``
    and the correlation ids of the request it was created from.
    """

    def __init__(self, emitter: Emitter, fields: Mapping[str, Any]) -> None:
        self._emitter = emitter
        self._fields = dict(fields)

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._fields)

    def bind(self, **extra: Any) -> "EventContext":
        return EventContext(self._emitter, {**self._fields, **extra})

    def log(self, severity: Severity, message: str, **extra: Any) -> None:
        self._emitter.emit({**self._fields, **extra}, severity, message)

    def debug(self, message: str, **extra: Any) -> None:
        self.log(Severity.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self.log(Severity.INFO, message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        self.log(Severity.WARNING, message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self.log(Severity.ERROR, message, **extra)


class EventLog:
    """Build and emit access, call, cacheinfo, application and lifecycle events."""

    def __init__(
        self,
        emitter: Emitter | None = None,
        builder: EventBuilder | None = None,
    ) -> None:
        self.emitter: Emitter = emitter if emitter is not None else StructlogEmitter()
        self.builder = builder if builder is not None else EventBuilder()

    @classmethod
    def from_settings(
        cls,
        settings: LoggingSettings,
        *,
        emitter: Emitter | None = None,
        policy: RedactionPolicyHolder = default_policy,
        stream: IO[str] | None = None,
    ) -> "EventLog":
        """Apply *settings*: configure structlog, swap in the redaction lists.

        The new lists replace the ones in *policy* atomically; every builder
        reading that holder sees them from its next event on.
        """
        configure_logging(settings.level, settings.text_logging, stream=stream)
        policy.replace(
            RedactionPolicy.of(settings.cookie_blacklist, settings.anonymized_query_params)
        )
        builder = EventBuilder(
            headers=CorrelationHeaders(
                request=settings.correlation_header,
                user=settings.user_correlation_header,
            ),
            policy=policy,
            lifecycle_env_vars=settings.lifecycle_env_vars,
        )
        return cls(emitter=emitter, builder=builder)

    @property
    def headers(self) -> CorrelationHeaders:
        return self.builder.headers

    def emit(self, event: LogEvent) -> None:
        self.emitter.emit(event.fields, event.severity, event.message)

    def access(self, request: RequestView, timing: Timing, status: int) -> None:
        self.emit(self.builder.access(request, timing, status))

    def access_error(self, request: RequestView, timing: Timing, error: BaseException | str) -> None:
        self.emit(self.builder.access_error(request, timing, error))

    def call(
        self,
        request: RequestView,
        response: ResponseLike | None,
        timing: Timing,
        error: BaseException | str | None = None,
    ) -> None:
        self.emit(self.builder.call(request, response, timing, error))

    def cacheinfo(self, url: str, hit: bool) -> None:
        self.emit(self.builder.cacheinfo(url, hit))

    def application(self, headers: Mapping[str, str]) -> EventContext:
        return EventContext(self.emitter, self.builder.application(headers))

    def lifecycle_start(self, app_name: str, config: Any = None) -> None:
        self.emit(self.builder.lifecycle_start(app_name, config))

    def lifecycle_stop(
        self,
        app_name: str,
        signal: signal_module.Signals | str | int | None = None,
        error: BaseException | str | None = None,
    ) -> None:
        self.emit(self.builder.lifecycle_stop(app_name, signal, error))


_default: EventLog | None = None


def get_event_log() -> EventLog:
    """Return the process-wide :class:`EventLog`, creating it on first use."""
    global _default
    if _default is None:
        _default = EventLog()
    return _default


def set_event_log(event_log: EventLog | None) -> None:
    """Replace the process-wide :class:`EventLog` (``None`` resets it)."""
    global _default
    _default = event_log


__all__ = ["EventContext", "EventLog", "get_event_log", "set_event_log"]
