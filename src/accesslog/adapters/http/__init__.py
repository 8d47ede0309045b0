"""HTTP adapter – outbound call reporting for httpx."""
from accesslog.adapters.http.client import LoggingHttpClient
from accesslog.adapters.http.reporter import report_call, request_view_from_httpx

__all__ = ["LoggingHttpClient", "report_call", "request_view_from_httpx"]
