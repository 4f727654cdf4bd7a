"""Shared test fixtures for alisms tests."""

import os

import httpx
import pytest


@pytest.fixture(autouse=True)
def _isolate_alisms_env(monkeypatch):
    """Strip ALISMS_* variables so a developer's real credentials never leak in."""
    for name in list(os.environ):
        if name.startswith("ALISMS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _clear_singleton_caches():
    """Reset the cached Settings between tests."""
    yield
    from alisms.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def sent_requests():
    """Requests captured by the ``mock_http`` transport, in order."""
    return []


@pytest.fixture
def mock_http(sent_requests):
    """Factory for an httpx.AsyncClient that answers every request with *payload*.

    Usage::

        http = mock_http({"Code": "OK", "BizId": "b1"})
        client = AliSMSClient("id", "secret", http_client=http)
    """

    def _factory(payload=None, *, status_code=200, text=None, exc=None):
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=payload)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory
