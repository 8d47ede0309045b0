"""Observability – EventBuilder.

Turns a request, an optional response or error and a :class:`Timing` into
the :class:`LogEvent` of each event type:

* ``access``      inbound request handled by the middleware
* ``call``        outbound HTTP call
* ``cacheinfo``   cache hit / miss
* ``application`` base fields for free-form application logs
* ``lifecycle``   application start and stop

The builder never emits anything itself; :class:`EventLog` pairs it with an
emitter.
"""
from __future__ import annotations

import dataclasses
import json
import os
import signal as signal_module
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any, Protocol

from accesslog.config.settings.base import DEFAULT_LIFECYCLE_ENV_VARS
from accesslog.kernel.time import Timing
from accesslog.observability.correlation import (
    DEFAULT_HEADERS,
    CorrelationHeaders,
    get_correlation_id,
    get_header,
    get_user_correlation_id,
)
from accesslog.observability.events.event import LogEvent, Severity, severity_for_status
from accesslog.observability.events.paths import build_full_url, build_redacted_path, get_remote_ip
from accesslog.observability.events.request import RequestView
from accesslog.observability.redaction import RedactionPolicy, RedactionPolicyHolder, default_policy


class ResponseLike(Protocol):
    """The part of an HTTP response a call event reads (httpx, starlette, …)."""

    status_code: int
    headers: Mapping[str, str]


def _to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "__dict__"):
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def flatten_config(config: Any) -> dict[str, Any]:
    """Round-trip *config* through JSON into top-level log fields.

    A failure never propagates: the result is ``{"parse_error": <reason>}``.
    """
    if config is None:
        return {}
    try:
        decoded = json.loads(json.dumps(config, default=_to_jsonable))
    except (TypeError, ValueError) as exc:
        return {"parse_error": str(exc)}
    if not isinstance(decoded, dict):
        return {"parse_error": f"cannot flatten a JSON {type(decoded).__name__} into fields"}
    return decoded


def _error_text(error: BaseException | str) -> str:
    return str(error) or type(error).__name__


def _signal_name(sig: signal_module.Signals | str | int | None) -> str | None:
    if sig is None:
        return None
    if isinstance(sig, signal_module.Signals):
        return sig.name
    if isinstance(sig, int):
        try:
            return signal_module.Signals(sig).name
        except ValueError:
            return str(sig)
    return str(sig)


class EventBuilder:
    """Build the field mappings of every event type.

    Parameters
    ----------
    headers:
        Names of the correlation headers.
    policy:
        A fixed :class:`RedactionPolicy`, or a :class:`RedactionPolicyHolder`
        read once per event.  Defaults to the process-wide holder.
    lifecycle_env_vars:
        Environment variables copied (lower-cased) onto the start event.
    environ:
        Environment to read them from; :data:`os.environ` when ``None``.
    """

    def __init__(
        self,
        headers: CorrelationHeaders = DEFAULT_HEADERS,
        policy: RedactionPolicy | RedactionPolicyHolder | None = None,
        lifecycle_env_vars: Sequence[str] = DEFAULT_LIFECYCLE_ENV_VARS,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.headers = headers
        self._policy = policy if policy is not None else default_policy
        self._lifecycle_env_vars = tuple(lifecycle_env_vars)
        self._environ = environ

    @property
    def policy(self) -> RedactionPolicy:
        if isinstance(self._policy, RedactionPolicyHolder):
            return self._policy.get()
        return self._policy

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    # ------------------------------------------------------------------
    # correlation
    # ------------------------------------------------------------------

    def correlation_fields(self, headers: Mapping[str, str]) -> dict[str, str]:
        fields: dict[str, str] = {}
        correlation_id = get_correlation_id(headers, self.headers.request)
        if correlation_id:
            fields["correlation_id"] = correlation_id
        user_correlation_id = get_user_correlation_id(headers, self.headers.user)
        if user_correlation_id:
            fields["user_correlation_id"] = user_correlation_id
        return fields

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------

    def access(self, request: RequestView, timing: Timing, status: int) -> LogEvent:
        fields = self._access_fields(request, timing, status=status)
        if request.query:
            message = f"{status} ->{request.method} {request.path}?..."
        else:
            message = f"{status} ->{request.method} {request.path}"
        return LogEvent(fields, severity_for_status(status), message)

    def access_error(
        self, request: RequestView, timing: Timing, error: BaseException | str
    ) -> LogEvent:
        fields = self._access_fields(request, timing, error=error)
        return LogEvent(fields, Severity.ERROR, f"ERROR ->{request.method} {request.path}")

    def _access_fields(
        self,
        request: RequestView,
        timing: Timing,
        *,
        status: int = 0,
        error: BaseException | str | None = None,
    ) -> dict[str, Any]:
        policy = self.policy
        fields: dict[str, Any] = {
            "type": "access",
            "@timestamp": timing.started_at.isoformat(),
            "remote_ip": get_remote_ip(request.headers, request.peer),
            "host": request.host,
            "url": build_redacted_path(request.path, request.query, policy),
            "method": request.method,
            "proto": request.proto,
            "duration": timing.elapsed_ms(),
            "User_Agent": get_header(request.headers, "User-Agent") or "",
        }
        if status:
            fields["response_status"] = status
        if error is not None:
            fields["error"] = str(error)
        fields.update(self.correlation_fields(request.headers))

        cookies = {
            name: value
            for name, value in request.cookies.items()
            if not policy.is_cookie_blacklisted(name)
        }
        if cookies:
            fields["cookies"] = cookies
        return fields

    # ------------------------------------------------------------------
    # call
    # ------------------------------------------------------------------

    def call(
        self,
        request: RequestView,
        response: ResponseLike | None,
        timing: Timing,
        error: BaseException | str | None = None,
    ) -> LogEvent:
        policy = self.policy
        full_url = build_full_url(
            request.scheme, request.hostname, request.port, request.path, request.query, policy
        )
        fields: dict[str, Any] = {
            "type": "call",
            "@timestamp": timing.started_at.isoformat(),
            "host": request.host,
            "url": build_redacted_path(request.path, request.query, policy),
            "full_url": full_url,
            "method": request.method,
            "duration": timing.elapsed_ms(),
        }
        fields.update(self.correlation_fields(request.headers))

        if error is not None:
            text = _error_text(error)
            fields["error"] = text
            return LogEvent(fields, Severity.ERROR, text)

        if response is not None:
            fields["response_status"] = response.status_code
            fields["content_type"] = get_header(response.headers, "Content-Type") or ""
            message = f"{response.status_code} {request.method}-> {full_url}"
            return LogEvent(fields, severity_for_status(response.status_code), message)

        return LogEvent(fields, Severity.WARNING, "call, but no response given")

    # ------------------------------------------------------------------
    # cacheinfo / application
    # ------------------------------------------------------------------

    def cacheinfo(self, url: str, hit: bool) -> LogEvent:
        message = f"cache hit: {url}" if hit else f"cache miss: {url}"
        return LogEvent({"type": "cacheinfo", "url": url, "hit": hit}, Severity.DEBUG, message)

    def application(self, headers: Mapping[str, str]) -> dict[str, Any]:
        return {"type": "application", **self.correlation_fields(headers)}

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def lifecycle_start(self, app_name: str, config: Any = None) -> LogEvent:
        fields = flatten_config(config)
        fields["type"] = "lifecycle"
        fields["event"] = "start"
        environ = self.environ
        for name in self._lifecycle_env_vars:
            value = environ.get(name)
            if value:
                fields[name.lower()] = value
        return LogEvent(fields, Severity.INFO, f"starting application: {app_name}")

    def lifecycle_stop(
        self,
        app_name: str,
        signal: signal_module.Signals | str | int | None = None,
        error: BaseException | str | None = None,
    ) -> LogEvent:
        fields: dict[str, Any] = {"type": "lifecycle", "event": "stop"}
        signal_name = _signal_name(signal)
        if signal_name is not None:
            fields["signal"] = signal_name
        build_number = self.environ.get("BUILD_NUMBER")
        if build_number:
            fields["build_number"] = build_number

        if error is not None:
            fields["error"] = str(error)
            return LogEvent(fields, Severity.ERROR, f"stopping application: {app_name} ({error})")
        return LogEvent(fields, Severity.INFO, f"stopping application: {app_name} ({signal_name})")


__all__ = ["EventBuilder", "ResponseLike", "flatten_config"]
