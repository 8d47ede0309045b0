"""Unit tests – outbound call reporting (report_call, LoggingHttpClient)."""
from __future__ import annotations

import asyncio
import logging
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from accesslog.adapters.http import LoggingHttpClient, report_call, request_view_from_httpx
from accesslog.kernel.time import Timing
from accesslog.observability.correlation import CorrelationContext, CorrelationHeaders, RequestContext
from accesslog.observability.events import EventBuilder, RequestView, Severity
from accesslog.observability.logging import EventLog, set_event_log
from accesslog.observability.redaction import RedactionPolicy
from accesslog.testing import RecordingEmitter


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _event_log(emitter: RecordingEmitter, **builder_kwargs) -> EventLog:
    builder_kwargs.setdefault("policy", RedactionPolicy())
    builder_kwargs.setdefault("environ", {})
    return EventLog(emitter=emitter, builder=EventBuilder(**builder_kwargs))


# ---------------------------------------------------------------------------
# report_call
# ---------------------------------------------------------------------------

class TestReportCall:
    def teardown_method(self) -> None:
        set_event_log(None)

    def test_with_httpx_objects(self) -> None:
        emitter = RecordingEmitter()
        request = httpx.Request("GET", "http://www.example.org:8080/foo?q=bar")
        response = httpx.Response(200, headers={"Content-Type": "application/json"})

        report_call(request, response, Timing.started_ago(1.0), event_log=_event_log(emitter))

        event = emitter.last
        assert event.type == "call"
        assert event.severity is Severity.INFO
        assert event.fields["full_url"] == "http://www.example.org:8080/foo?q=bar"
        assert event.fields["content_type"] == "application/json"
        assert event.fields["duration"] >= 1000
        assert event.message == "200 GET-> http://www.example.org:8080/foo?q=bar"

    def test_with_request_view(self) -> None:
        emitter = RecordingEmitter()
        view = RequestView(method="DELETE", path="/items/1", scheme="https", host="api", hostname="api")

        report_call(view, httpx.Response(503), Timing.start(), event_log=_event_log(emitter))

        assert emitter.last.severity is Severity.ERROR
        assert emitter.last.fields["full_url"] == "https://api/items/1"

    def test_with_error(self) -> None:
        emitter = RecordingEmitter()
        request = httpx.Request("GET", "http://svc/down")

        report_call(request, None, Timing.start(), httpx.ConnectError("refused"), event_log=_event_log(emitter))

        assert emitter.last.severity is Severity.ERROR
        assert emitter.last.message == "refused"
        assert "response_status" not in emitter.last.fields

    def test_anonymized_params(self) -> None:
        emitter = RecordingEmitter()
        event_log = _event_log(emitter, policy=RedactionPolicy.of((), ["token"]))
        request = httpx.Request("GET", "http://svc/auth?token=abc&user=bob")

        report_call(request, httpx.Response(200), Timing.start(), event_log=event_log)

        assert emitter.last.fields["url"] == "/auth?token=*****&user=bob"

    def test_uses_default_event_log(self) -> None:
        emitter = RecordingEmitter()
        set_event_log(_event_log(emitter))

        report_call(httpx.Request("GET", "http://svc/"), httpx.Response(204), Timing.start())

        assert emitter.last.fields["response_status"] == 204

    def test_never_raises(self, caplog: pytest.LogCaptureFixture) -> None:
        event_log = MagicMock()
        event_log.call.side_effect = RuntimeError("emitter gone")

        with caplog.at_level(logging.ERROR, logger="accesslog"):
            report_call(httpx.Request("GET", "http://svc/"), None, Timing.start(), event_log=event_log)

        assert "failed to report outbound call" in caplog.text

    def test_request_view_from_httpx(self) -> None:
        view = request_view_from_httpx(
            httpx.Request("PUT", "https://api.local/v1/items?id=3", headers={"X-Correlation-Id": "c"})
        )
        assert view.method == "PUT"
        assert view.scheme == "https"
        assert view.hostname == "api.local"
        assert view.port is None
        assert view.path == "/v1/items"
        assert view.query == "id=3"
        assert view.headers["x-correlation-id"] == "c"


# ---------------------------------------------------------------------------
# LoggingHttpClient
# ---------------------------------------------------------------------------

class TestLoggingHttpClient:
    def teardown_method(self) -> None:
        CorrelationContext.clear()

    @respx.mock
    def test_success_is_reported(self) -> None:
        respx.get("http://svc/ok").mock(return_value=httpx.Response(200, text="ok"))
        emitter = RecordingEmitter()

        async def run() -> None:
            async with LoggingHttpClient(event_log=_event_log(emitter)) as client:
                resp = await client.get("http://svc/ok")
            assert resp.status_code == 200

        asyncio.run(run())
        assert len(emitter.events) == 1
        assert emitter.last.message == "200 GET-> http://svc/ok"

    @respx.mock
    def test_base_url_and_methods(self) -> None:
        respx.post(host="svc", path="/items").mock(return_value=httpx.Response(201))
        respx.delete(host="svc", path="/items/1").mock(return_value=httpx.Response(404))
        emitter = RecordingEmitter()

        async def run() -> None:
            async with LoggingHttpClient("http://svc", event_log=_event_log(emitter)) as client:
                await client.post("/items", json={"name": "x"})
                await client.delete("/items/1")

        asyncio.run(run())
        post, delete = emitter.events
        assert post.fields["method"] == "POST"
        assert post.severity is Severity.INFO
        assert delete.fields["response_status"] == 404
        assert delete.severity is Severity.WARNING

    @respx.mock
    def test_transport_error_reported_and_reraised(self) -> None:
        respx.get("http://svc/down").mock(side_effect=httpx.ConnectError("refused"))
        emitter = RecordingEmitter()

        async def run() -> None:
            async with LoggingHttpClient(event_log=_event_log(emitter)) as client:
                await client.get("http://svc/down")

        with pytest.raises(httpx.ConnectError):
            asyncio.run(run())
        assert len(emitter.events) == 1
        assert emitter.last.severity is Severity.ERROR
        assert emitter.last.fields["error"] == "refused"

    @respx.mock
    def test_forwards_ambient_correlation_ids(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))
        emitter = RecordingEmitter()

        async def run() -> None:
            CorrelationContext.set(RequestContext(correlation_id="cid-1", user_correlation_id="uid-1"))
            async with LoggingHttpClient(event_log=_event_log(emitter)) as client:
                await client.get("http://svc/ok")

        asyncio.run(run())
        sent = route.calls.last.request
        assert sent.headers["x-correlation-id"] == "cid-1"
        assert sent.headers["x-user-correlation-id"] == "uid-1"
        assert emitter.last.fields["correlation_id"] == "cid-1"
        assert emitter.last.fields["user_correlation_id"] == "uid-1"

    @respx.mock
    def test_explicit_header_wins(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))

        async def run() -> None:
            CorrelationContext.set(RequestContext(correlation_id="ambient"))
            async with LoggingHttpClient(event_log=_event_log(RecordingEmitter())) as client:
                await client.get("http://svc/ok", headers={"X-Correlation-Id": "explicit"})

        asyncio.run(run())
        assert route.calls.last.request.headers["x-correlation-id"] == "explicit"

    @respx.mock
    def test_custom_header_names(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))
        event_log = _event_log(RecordingEmitter(), headers=CorrelationHeaders("X-Request-Id", "X-User"))

        async def run() -> None:
            CorrelationContext.set(RequestContext(correlation_id="r-1"))
            async with LoggingHttpClient(event_log=event_log) as client:
                await client.get("http://svc/ok")

        asyncio.run(run())
        sent = route.calls.last.request
        assert sent.headers["x-request-id"] == "r-1"
        assert "x-correlation-id" not in sent.headers

    @respx.mock
    def test_no_context_no_headers(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))

        async def run() -> None:
            async with LoggingHttpClient(event_log=_event_log(RecordingEmitter())) as client:
                await client.get("http://svc/ok")

        asyncio.run(run())
        assert "x-correlation-id" not in route.calls.last.request.headers

    def test_non_httpx_error_reported_and_reraised(self) -> None:
        emitter = RecordingEmitter()

        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("socket exploded")

        async def run() -> None:
            async with LoggingHttpClient(
                event_log=_event_log(emitter), transport=httpx.MockTransport(handler)
            ) as client:
                await client.get("http://svc/boom")

        with pytest.raises(RuntimeError, match="socket exploded"):
            asyncio.run(run())
        assert [e.type for e in emitter.events] == ["call"]
        assert emitter.last.severity is Severity.ERROR
        assert emitter.last.fields["error"] == "socket exploded"
        assert emitter.last.fields["full_url"] == "http://svc/boom"
