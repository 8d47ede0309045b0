"""Observability – framework-neutral view of an HTTP request."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping


@dataclasses.dataclass(frozen=True)
class RequestView:
    """What the event builder needs to know about a request.

    Adapters fill it from their framework's request model, see
    :func:`accesslog.adapters.asgi.request_view_from_scope` and
    :func:`accesslog.adapters.http.request_view_from_httpx`.

    ``host`` is the ``Host`` header as sent; ``hostname`` and ``port`` come
    from the URL and build ``full_url``.  ``query`` is the raw query string
    without the leading ``?``.  ``peer`` is the remote address, optionally
    suffixed by ``:port``.
    """

    method: str
    path: str
    query: str = ""
    scheme: str = "http"
    host: str = ""
    hostname: str = ""
    port: int | None = None
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    cookies: Mapping[str, str] = dataclasses.field(default_factory=dict)
    proto: str = "HTTP/1.1"
    peer: str | None = None


__all__ = ["RequestView"]
