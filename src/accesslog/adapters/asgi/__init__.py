"""ASGI adapter – access-log middleware, panic origin, request views."""
from accesslog.adapters.asgi.middleware import AccessLogMiddleware
from accesslog.adapters.asgi.origin import identify_origin
from accesslog.adapters.asgi.request import request_view_from_scope

__all__ = ["AccessLogMiddleware", "identify_origin", "request_view_from_scope"]
