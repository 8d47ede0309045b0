"""
accesslog – request observability for HTTP services.

Import path convention::

    from accesslog.adapters.asgi import AccessLogMiddleware
    from accesslog.adapters.http import LoggingHttpClient, report_call
    from accesslog.observability.logging import EventLog, configure_logging
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
