"""
Tests for logging context helpers and request middleware.
"""

from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from backend.app.middleware.request_id import RequestIDMiddleware
from devconnector.logging import (
    RequestLoggingMiddleware,
    bind_context,
    clear_context,
    get_context_value,
)


def test_context_round_trip():
    clear_context()
    bind_context(user_id="abc")
    assert get_context_value("user_id") == "abc"

    clear_context()
    assert get_context_value("user_id") == "-"
    assert get_context_value("user_id", None) is None


class TestRequestMiddleware:
    def _app(self, seen: list):
        async def endpoint(request):
            seen.append(get_context_value("request_id", None))
            return JSONResponse({"status": "ok"})

        app = Starlette(routes=[Route("/test", endpoint)])
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(RequestIDMiddleware)
        return app

    def test_request_id_bound_for_handler(self):
        seen: list = []
        client = TestClient(self._app(seen))

        response = client.get("/test", headers={"X-Request-ID": "trace-1"})

        assert response.status_code == 200
        assert response.headers["x-request-id"] == "trace-1"
        assert seen == ["trace-1"]

    def test_request_id_generated_when_absent(self):
        seen: list = []
        client = TestClient(self._app(seen))

        response = client.get("/test")

        assert seen[0]
        assert response.headers["x-request-id"] == seen[0]


def test_secrets_are_masked():
    from devconnector.logging import REDACTED, _redact_secrets

    event = _redact_secrets(
        None,
        "info",
        {"event": "github_call", "client_secret": "abc", "Authorization": "Bearer x", "username": "octocat"},
    )
    assert event["client_secret"] == REDACTED
    assert event["Authorization"] == REDACTED
    assert event["username"] == "octocat"


def test_unsafe_request_id_is_replaced():
    seen: list = []
    client = TestClient(TestRequestMiddleware()._app(seen))

    response = client.get("/test", headers={"X-Request-ID": "bad id\twith spaces"})

    assert response.headers["x-request-id"] != "bad id\twith spaces"
    assert response.headers["x-request-id"] == seen[0]
