"""Tests for the authenticated HTTP client and credential handling."""

import httpx
import pytest

from keywordsai_node.client import KeywordsAIClient, path_segment
from keywordsai_node.config import reload_settings
from keywordsai_node.credentials import KeywordsAICredentials
from keywordsai_node.exceptions import (
    APIConnectionError,
    AuthenticationError,
    InvalidRequestError,
    RateLimitError,
    ServerError,
)


@pytest.fixture
def fast_retries(monkeypatch):
    """Allow three attempts without waiting between them."""
    monkeypatch.setenv("KEYWORDSAI_RETRY_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("KEYWORDSAI_RETRY_MIN_WAIT", "0")
    monkeypatch.setenv("KEYWORDSAI_RETRY_MAX_WAIT", "0")
    reload_settings()


class TestCredentials:
    def test_auth_headers(self):
        credentials = KeywordsAICredentials(api_key="sk-123")
        assert credentials.auth_headers() == {"Authorization": "Bearer sk-123"}

    def test_key_hidden_in_repr(self):
        assert "sk-123" not in repr(KeywordsAICredentials(api_key="sk-123"))

    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("KEYWORDSAI_API_KEY", "sk-env")
        reload_settings()

        assert KeywordsAICredentials.from_settings().api_key.get_secret_value() == "sk-env"

    def test_from_settings_without_key(self, monkeypatch):
        monkeypatch.delenv("KEYWORDSAI_API_KEY", raising=False)
        reload_settings()

        with pytest.raises(ValueError, match="KEYWORDSAI_API_KEY"):
            KeywordsAICredentials.from_settings()


class TestPathSegment:
    def test_quotes_reserved_characters(self):
        assert path_segment("a/b c") == "a%2Fb%20c"

    def test_numbers(self):
        assert path_segment(3) == "3"


@pytest.mark.asyncio
class TestRequests:
    async def test_base_url_and_auth(self, api):
        api.add("GET", "/models", {"data": []})

        async with api.client() as client:
            assert await client.test_credentials() is True

        request = api.requests[0]
        assert str(request.url) == "https://api.keywordsai.co/api/models"
        assert request.headers["Authorization"] == "Bearer test-key"

    async def test_custom_base_url(self, api):
        api.add("GET", "/models", {})

        async with api.client(base_url="https://gateway.example.com/api") as client:
            await client.get("/models")

        assert api.requests[0].url.host == "gateway.example.com"

    async def test_post_sends_json(self, api):
        api.add("POST", "/chat/completions", {"ok": True})

        async with api.client() as client:
            assert await client.post("/chat/completions", json={"model": "m"}) == {"ok": True}

        assert api.json_body(0) == {"model": "m"}

    async def test_empty_and_text_bodies(self, api):
        api.add("GET", "/empty", httpx.Response(204))
        api.add("GET", "/text", httpx.Response(200, text="plain"))

        async with api.client() as client:
            assert await client.get("/empty") is None
            assert await client.get("/text") == "plain"

    @pytest.mark.parametrize(
        "status, error_type",
        [
            (400, InvalidRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (429, RateLimitError),
            (503, ServerError),
        ],
    )
    async def test_status_classification(self, api, status, error_type):
        api.add("GET", "/models", {"detail": "nope"}, status=status)

        async with api.client() as client:
            with pytest.raises(error_type) as exc_info:
                await client.get("/models")

        assert exc_info.value.status_code == status
        assert exc_info.value.body == {"detail": "nope"}

    async def test_bad_key_fails_credential_test(self, api):
        api.add("GET", "/models", {"detail": "Invalid API key"}, status=401)

        async with api.client() as client:
            with pytest.raises(AuthenticationError, match="Invalid API key"):
                await client.test_credentials()

    async def test_transport_error(self, api):
        api.add("GET", "/models", httpx.ConnectError("connection refused"))

        async with api.client() as client:
            with pytest.raises(APIConnectionError):
                await client.get("/models")

    async def test_no_retry_by_default(self, api):
        api.add("GET", "/models", {"detail": "slow down"}, status=429)

        async with api.client() as client:
            with pytest.raises(RateLimitError):
                await client.get("/models")

        assert len(api.requests) == 1


@pytest.mark.asyncio
class TestRetry:
    async def test_transient_errors_are_retried(self, api, fast_retries):
        api.add(
            "GET",
            "/models",
            httpx.Response(429, json={"detail": "slow down"}),
            httpx.ConnectError("reset"),
            httpx.Response(200, json={"data": []}),
        )

        async with api.client() as client:
            assert await client.get("/models") == {"data": []}

        assert len(api.requests) == 3

    async def test_gives_up_after_max_attempts(self, api, fast_retries):
        api.add("GET", "/models", {"detail": "down"}, status=503)

        async with api.client() as client:
            with pytest.raises(ServerError):
                await client.get("/models")

        assert len(api.requests) == 3

    async def test_client_errors_are_not_retried(self, api, fast_retries):
        api.add("GET", "/models", {"detail": "bad key"}, status=401)

        async with api.client() as client:
            with pytest.raises(AuthenticationError):
                await client.get("/models")

        assert len(api.requests) == 1


def test_client_requires_a_key(monkeypatch):
    monkeypatch.delenv("KEYWORDSAI_API_KEY", raising=False)
    reload_settings()

    with pytest.raises(ValueError):
        KeywordsAIClient()
