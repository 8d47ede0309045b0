"""ASGI adapter – RequestView from an ASGI scope."""
from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import Request

from accesslog.observability.events import RequestView

if TYPE_CHECKING:
    from starlette.types import Scope


def request_view_from_scope(scope: "Scope") -> RequestView:
    """Snapshot the parts of an HTTP *scope* the event builder reads."""
    request = Request(scope)
    url = request.url
    client = scope.get("client")
    return RequestView(
        method=request.method,
        path=scope.get("path", ""),
        query=scope.get("query_string", b"").decode("latin-1"),
        scheme=url.scheme,
        host=request.headers.get("host") or url.netloc,
        hostname=url.hostname or "",
        port=url.port,
        headers=request.headers,
        cookies=request.cookies,
        proto=f"HTTP/{scope.get('http_version', '1.1')}",
        peer=client[0] if client else None,
    )


__all__ = ["request_view_from_scope"]
