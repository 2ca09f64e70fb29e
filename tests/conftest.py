"""Pytest configuration for Keywords AI node tests."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from keywordsai_node.client import KeywordsAIClient

API_PREFIX = "/api"


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset global settings after each test to ensure test isolation."""
    yield
    from keywordsai_node.config import reload_settings

    reload_settings()


class FakeKeywordsAI:
    """In-memory stand-in for the Keywords AI API behind httpx.MockTransport.

    Routes map (method, path) to a queue of responses; the last response in a
    queue repeats. Unrouted requests get a 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[httpx.Response | Callable | Exception]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses: Any, status: int = 200) -> None:
        queue = []
        for response in responses:
            if isinstance(response, (httpx.Response, Exception)) or callable(response):
                queue.append(response)
            else:
                queue.append(httpx.Response(status, json=response))
        self.routes[(method, path)] = queue

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        queue = self.routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"detail": "Not found."})

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if callable(response) and not isinstance(response, httpx.Response):
            return response(request)
        return response

    def client(self, **kwargs) -> KeywordsAIClient:
        return KeywordsAIClient(api_key="test-key", transport=httpx.MockTransport(self.handler), **kwargs)

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path.removeprefix(API_PREFIX)) for r in self.requests]

    def json_body(self, index: int) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def api() -> FakeKeywordsAI:
    return FakeKeywordsAI()
