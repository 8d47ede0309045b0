"""HTTP adapter – report outbound calls as ``call`` events."""
from __future__ import annotations

import logging

import httpx

from accesslog.kernel.time import Timing
from accesslog.observability.events import RequestView
from accesslog.observability.events.builder import ResponseLike
from accesslog.observability.logging import EventLog, get_event_log

_internal = logging.getLogger("accesslog")


def request_view_from_httpx(request: httpx.Request) -> RequestView:
    url = request.url
    return RequestView(
        method=request.method,
        path=url.path,
        query=url.query.decode("ascii"),
        scheme=url.scheme,
        host=request.headers.get("host") or url.host,
        hostname=url.host,
        port=url.port,
        headers=request.headers,
    )


def report_call(
    request: httpx.Request | RequestView,
    response: ResponseLike | None,
    timing: Timing,
    error: BaseException | str | None = None,
    *,
    event_log: EventLog | None = None,
) -> None:
    """Emit one ``call`` event for an outgoing request.

    *response* is ``None`` when nothing was received; *error* is the failure
    that prevented a response.  Never raises and never retries.
    """
    try:
        view = request if isinstance(request, RequestView) else request_view_from_httpx(request)
        (event_log or get_event_log()).call(view, response, timing, error)
    except Exception:  # noqa: BLE001 - reporting must not fail the call
        _internal.exception("failed to report outbound call")


__all__ = ["report_call", "request_view_from_httpx"]
