"""HTTP adapter – LoggingHttpClient."""
from __future__ import annotations

from typing import Any

import httpx

from accesslog.adapters.http.reporter import report_call
from accesslog.kernel.time import Timing
from accesslog.observability.correlation import CorrelationContext
from accesslog.observability.logging import EventLog, get_event_log

_SEND_OPTIONS = ("auth", "follow_redirects")


class LoggingHttpClient:
    """Thin async httpx wrapper that logs every call.

    The correlation ids of the request being handled (see
    :class:`CorrelationContext`) are forwarded unless the caller set the
    headers already.  Each request produces one ``call`` event; transport
    errors, httpx or not, are reported and then re-raised unchanged.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        *,
        event_log: EventLog | None = None,
        **kwargs: Any,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)
        self._event_log = event_log

    @property
    def event_log(self) -> EventLog:
        return self._event_log if self._event_log is not None else get_event_log()

    async def __aenter__(self) -> "LoggingHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        event_log = self.event_log
        send_options = {k: kwargs.pop(k) for k in _SEND_OPTIONS if k in kwargs}
        headers = httpx.Headers(kwargs.pop("headers", None))
        ctx = CorrelationContext.get()
        if ctx is not None:
            names = event_log.headers
            for name, value in ctx.as_headers(names.request, names.user).items():
                headers.setdefault(name, value)

        request = self._client.build_request(method, url, headers=headers, **kwargs)
        timing = Timing.start()
        try:
            response = await self._client.send(request, **send_options)
        except Exception as exc:
            report_call(request, None, timing, exc, event_log=event_log)
            raise
        report_call(request, response, timing, event_log=event_log)
        return response


__all__ = ["LoggingHttpClient"]
