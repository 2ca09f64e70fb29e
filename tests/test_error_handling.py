"""
Test error classification and retry selection for the Keywords AI node.
"""

import httpx
import pytest

from keywordsai_node.exceptions import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    InvalidRequestError,
    ItemExecutionError,
    KeywordsAIError,
    NotFoundError,
    PayloadParseError,
    RateLimitError,
    ServerError,
    classify_http_error,
    should_retry_error,
)

URL = "https://api.keywordsai.co/api/chat/completions"


def _status_error(status: int, **response_kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", URL)
    response = httpx.Response(status, request=request, **response_kwargs)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


class TestErrorClassification:
    """Test error classification logic."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, InvalidRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (422, InvalidRequestError),
            (429, RateLimitError),
            (500, ServerError),
            (502, ServerError),
        ],
    )
    def test_status_codes(self, status, expected):
        classified = classify_http_error(_status_error(status, json={"detail": "boom"}))

        assert type(classified) is expected
        assert classified.status_code == status

    def test_message_includes_remote_detail(self):
        classified = classify_http_error(_status_error(401, json={"detail": "Invalid API key"}))

        assert "Invalid API key" in str(classified)
        assert classified.body == {"detail": "Invalid API key"}

    def test_message_field_fallback(self):
        classified = classify_http_error(_status_error(400, json={"message": "model not supported"}))

        assert "model not supported" in str(classified)

    def test_text_body(self):
        classified = classify_http_error(_status_error(502, text="Bad Gateway"))

        assert classified.body == "Bad Gateway"
        assert "Bad Gateway" in str(classified)

    def test_transport_errors(self):
        request = httpx.Request("GET", URL)
        for error in (httpx.ConnectError("refused", request=request), httpx.ReadTimeout("slow", request=request)):
            assert isinstance(classify_http_error(error), APIConnectionError)

    def test_node_errors_pass_through(self):
        error = PayloadParseError("metadata", "{", "Expecting property name")
        assert classify_http_error(error) is error

    def test_unknown_errors_wrapped(self):
        classified = classify_http_error(RuntimeError("unexpected"))

        assert type(classified) is KeywordsAIError
        assert "unexpected" in str(classified)


class TestRetrySelection:
    @pytest.mark.parametrize(
        "error",
        [
            RateLimitError("slow down", 429),
            ServerError("down", 503),
            APIConnectionError("reset"),
        ],
    )
    def test_transient_errors_retry(self, error):
        assert should_retry_error(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            AuthenticationError("bad key", 401),
            NotFoundError("missing", 404),
            InvalidRequestError("bad", 400),
            PayloadParseError("metadata", "{", "bad"),
            ValueError("other"),
        ],
    )
    def test_final_errors_do_not_retry(self, error):
        assert should_retry_error(error) is False


class TestExceptionHierarchy:
    def test_api_errors_share_base(self):
        for cls in (InvalidRequestError, AuthenticationError, NotFoundError, RateLimitError, ServerError):
            assert issubclass(cls, APIError)
            assert issubclass(cls, KeywordsAIError)

    def test_payload_parse_error_message(self):
        error = PayloadParseError("overrideParamsJson", "{bad", "Expecting property name")

        assert str(error) == "Invalid JSON in 'overrideParamsJson': Expecting property name"
        assert error.field_name == "overrideParamsJson"
        assert error.raw_value == "{bad"

    def test_item_execution_error(self):
        partial = [{"json": {"id": "1"}}]
        error = ItemExecutionError(1, ValueError("boom"), partial)

        assert str(error) == "Item 1 failed: boom"
        assert error.item_index == 1
        assert error.partial_results is partial
