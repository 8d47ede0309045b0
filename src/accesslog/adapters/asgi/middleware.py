"""ASGI adapter – AccessLogMiddleware.

Every HTTP request goes ``START → HANDLING → COMPLETED | PANICKED``:

* COMPLETED: the app returned; one access event with the status of the
  first ``http.response.start`` message (200 if it never sent one).
* PANICKED: the app raised; the exception is recovered here and becomes a
  single access-error event ``PANIC (<origin>): <error>``.  With a
  ``panic_status`` configured and no response started yet, an empty
  response with that status is sent.  Nothing is re-raised.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from accesslog.adapters.asgi.origin import identify_origin
from accesslog.adapters.asgi.request import request_view_from_scope
from accesslog.config.settings.base import LoggingSettings
from accesslog.kernel.errors import HandlerFault
from accesslog.kernel.time import Timing
from accesslog.observability.correlation import (
    CorrelationContext,
    RequestContext,
    ensure_correlation_id,
    get_correlation_id,
    get_user_correlation_id,
)
from accesslog.observability.logging import EventLog, get_event_log

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class _ResponseCapture:
    """Status code written by the app, 200 until it says otherwise."""

    __slots__ = ("status", "started")

    def __init__(self) -> None:
        self.status = 200
        self.started = False

    def observe(self, message: "Message") -> None:
        if message["type"] == "http.response.start" and not self.started:
            self.started = True
            self.status = message.get("status", 200)


class AccessLogMiddleware:
    """Log one access event per HTTP request and recover handler faults.

    Parameters
    ----------
    app:
        The inner ASGI application.
    event_log:
        Where events go.  Defaults to :func:`get_event_log` at request time.
    panic_status:
        Status sent when the app raises before starting a response.
        ``0`` (default) leaves the response untouched.
    mint_correlation_id:
        Generate a correlation id for requests that arrive without one.
    settings:
        Takes ``panic_status`` and ``mint_correlation_id`` from
        :class:`LoggingSettings` instead of the keyword arguments.
    """

    def __init__(
        self,
        app: "ASGIApp",
        *,
        event_log: EventLog | None = None,
        panic_status: int = 0,
        mint_correlation_id: bool = False,
        settings: LoggingSettings | None = None,
    ) -> None:
        self.app = app
        self._event_log = event_log
        if settings is not None:
            panic_status = settings.panic_status
            mint_correlation_id = settings.mint_correlation_id
        self._panic_status = panic_status
        self._mint = mint_correlation_id

    @property
    def event_log(self) -> EventLog:
        return self._event_log if self._event_log is not None else get_event_log()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        event_log = self.event_log
        headers = event_log.headers
        ensure_correlation_id(scope, header_name=headers.request, mint=self._mint)
        timing = Timing.start()
        request = request_view_from_scope(scope)
        capture = _ResponseCapture()

        token = CorrelationContext.set(
            RequestContext(
                correlation_id=get_correlation_id(request.headers, headers.request),
                user_correlation_id=get_user_correlation_id(request.headers, headers.user),
            )
        )

        async def send_capturing(message: Any) -> None:
            capture.observe(message)
            await send(message)

        try:
            await self.app(scope, receive, send_capturing)
        except Exception as exc:  # noqa: BLE001 - recovered and logged as a handler fault
            fault = HandlerFault(exc, identify_origin(exc))
            event_log.access_error(request, timing, fault)
            if self._panic_status and not capture.started:
                await _send_empty(send, self._panic_status)
            return
        finally:
            CorrelationContext.reset(token)

        event_log.access(request, timing, capture.status)


async def _send_empty(send: "Send", status: int) -> None:
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [(b"content-length", b"0")],
    })
    await send({"type": "http.response.body", "body": b""})


__all__ = ["AccessLogMiddleware"]
