"""Observability – correlation identifiers."""
from accesslog.observability.correlation.context import CorrelationContext, RequestContext
from accesslog.observability.correlation.headers import (
    DEFAULT_HEADERS,
    CorrelationHeaders,
    ensure_correlation_id,
    get_correlation_id,
    get_header,
    get_user_correlation_id,
    mint_correlation_id,
)

__all__ = [
    "DEFAULT_HEADERS",
    "CorrelationContext",
    "CorrelationHeaders",
    "RequestContext",
    "ensure_correlation_id",
    "get_correlation_id",
    "get_header",
    "get_user_correlation_id",
    "mint_correlation_id",
]
