"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar, Token
from typing import Any


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Correlation identifiers of the request currently being handled."""
    correlation_id: str | None = None
    user_correlation_id: str | None = None

    def as_headers(self, correlation_header: str, user_header: str) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.correlation_id:
            headers[correlation_header] = self.correlation_id
        if self.user_correlation_id:
            headers[user_header] = self.user_correlation_id
        return headers


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_accesslog_request_ctx", default=None)


class CorrelationContext:
    """Ambient correlation context stored in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> Token[Any]:
        return _CTX_VAR.set(ctx)

    @staticmethod
    def reset(token: Token[Any]) -> None:
        _CTX_VAR.reset(token)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)


__all__ = ["CorrelationContext", "RequestContext"]
