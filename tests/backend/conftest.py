from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.app.auth.jwt import create_access_token
from backend.app.main import create_app


def _no_network(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected outbound request to {request.url}")


@pytest.fixture
def make_client(test_settings, test_db) -> Iterator[Callable[..., TestClient]]:
    """Build a TestClient around the test database; callers may swap settings or transport."""
    clients: list[TestClient] = []

    def factory(
        settings=None,
        github_transport: httpx.BaseTransport | None = None,
        raise_server_exceptions: bool = True,
    ) -> TestClient:
        app = create_app(
            settings=settings or test_settings,
            database=test_db,
            github_transport=github_transport or httpx.MockTransport(_no_network),
        )
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def auth_headers(test_settings) -> Callable[..., dict[str, str]]:
    """Credential header for a given user."""

    def build(user) -> dict[str, str]:
        return {"x-auth-token": create_access_token(user.id, settings=test_settings)}

    return build
