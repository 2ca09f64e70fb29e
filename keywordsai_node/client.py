"""Authenticated HTTP transport for the Keywords AI API.

This is the authenticated-request helper the node runs on: it owns the
base URL, timeout, connection pool and optional retry of transient
failures, and turns httpx errors into the node's exception types.

Example:
    >>> async with KeywordsAIClient(api_key="sk-...") as client:
    ...     prompts = await client.get("/prompts/")
"""

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from keywordsai_node import config
from keywordsai_node.credentials import TEST_REQUEST_METHOD, TEST_REQUEST_PATH, BearerAuth, KeywordsAICredentials
from keywordsai_node.exceptions import classify_http_error, should_retry_error
from keywordsai_node.logging_config import get_logger

logger = get_logger(__name__)


def path_segment(value: str | int) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(str(value), safe="")


class KeywordsAIClient:
    """Async client for the Keywords AI REST API.

    Args:
        credentials: Credential record; built from api_key or settings when omitted
        api_key: Convenience alternative to credentials
        base_url: API base URL (defaults to settings.base_url)
        timeout: Request timeout in seconds (defaults to settings.request_timeout)
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
    """

    def __init__(
        self,
        credentials: KeywordsAICredentials | None = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = config.get_settings()
        if credentials is None:
            credentials = KeywordsAICredentials(api_key=api_key) if api_key else KeywordsAICredentials.from_settings()

        self.base_url = base_url or settings.base_url
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=BearerAuth(credentials),
            timeout=timeout or settings.request_timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "KeywordsAIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _retrying(self) -> AsyncRetrying:
        settings = config.get_settings()
        return AsyncRetrying(
            retry=retry_if_exception(should_retry_error),
            stop=stop_after_attempt(settings.retry_max_attempts),
            wait=wait_exponential(
                multiplier=settings.retry_multiplier, min=settings.retry_min_wait, max=settings.retry_max_wait
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def request(self, method: str, url: str, *, json: Any = None) -> Any:
        """Send a request and return the decoded response body.

        Retries only transient failures, and only when settings allow more
        than one attempt.

        Raises:
            KeywordsAIError: Classified HTTP or transport failure
        """
        async for attempt in self._retrying():
            with attempt:
                return await self._send(method, url, json)

    async def _send(self, method: str, url: str, json: Any) -> Any:
        start_time = time.time()
        logger.debug(f"Sending {method} {url}")
        try:
            response = await self._client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPError as e:
            classified = classify_http_error(e)
            logger.error(
                f"{method} {url} failed after {time.time() - start_time:.3f}s: "
                f"error_type={type(classified).__name__}, error={classified}"
            )
            raise classified from e

        logger.debug(f"{method} {url} -> {response.status_code} in {time.time() - start_time:.3f}s")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, url: str) -> Any:
        return await self.request("GET", url)

    async def post(self, url: str, json: Any) -> Any:
        return await self.request("POST", url, json=json)

    async def test_credentials(self) -> bool:
        """Issue the credential test request; any non-error response passes.

        Raises:
            KeywordsAIError: If the request fails (AuthenticationError for a bad key)
        """
        await self.request(TEST_REQUEST_METHOD, TEST_REQUEST_PATH)
        logger.info("Keywords AI credentials verified")
        return True
