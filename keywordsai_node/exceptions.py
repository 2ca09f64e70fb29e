"""Exception hierarchy for the Keywords AI node.

Exception Hierarchy:
    - KeywordsAIError (base)
        - PayloadParseError: a JSON-bearing parameter failed to parse
        - APIConnectionError: transport failure or timeout
        - APIError: remote returned a non-2xx status
            - InvalidRequestError: other 4xx
            - AuthenticationError: 401 / 403
            - NotFoundError: 404
            - RateLimitError: 429
            - ServerError: 5xx
        - ItemExecutionError: an item failed and the batch was aborted
"""

from typing import Any

import httpx


class KeywordsAIError(Exception):
    """Base exception for Keywords AI node errors."""

    pass


class PayloadParseError(KeywordsAIError):
    """Raised when a JSON-bearing parameter is not valid JSON.

    Attributes:
        field_name: Parameter that failed to parse (e.g. "overrideParamsJson")
        raw_value: The raw string that was supplied
    """

    def __init__(self, field_name: str, raw_value: str, reason: str):
        self.field_name = field_name
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(f"Invalid JSON in '{field_name}': {reason}")


class APIConnectionError(KeywordsAIError):
    """Raised when the remote API cannot be reached or the request times out."""

    pass


class APIError(KeywordsAIError):
    """Raised when the remote API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response
        body: Decoded response body (JSON when possible, else text)
    """

    def __init__(self, message: str, status_code: int, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class InvalidRequestError(APIError):
    """Raised for 4xx responses without a more specific class."""

    pass


class AuthenticationError(APIError):
    """Raised when the API key is missing, invalid, or lacks permission."""

    pass


class NotFoundError(APIError):
    """Raised when the requested prompt or version does not exist."""

    pass


class RateLimitError(APIError):
    """Raised when the remote rate limit is hit."""

    pass


class ServerError(APIError):
    """Raised for 5xx responses."""

    pass


class ItemExecutionError(KeywordsAIError):
    """Raised when an item fails and continue-on-fail is disabled.

    The original error is chained as ``__cause__``.

    Attributes:
        item_index: Zero-based index of the failing input item
        partial_results: Outputs of the items completed before the failure
    """

    def __init__(self, item_index: int, error: Exception, partial_results: list[dict[str, Any]]):
        self.item_index = item_index
        self.partial_results = partial_results
        super().__init__(f"Item {item_index} failed: {error}")


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_detail(body: Any) -> str:
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if body.get(key):
                return str(body[key])
    return str(body)[:400]


def classify_http_error(error: Exception) -> KeywordsAIError:
    """Map an httpx exception onto the node's exception types.

    Status errors are classified by status code; transport and timeout
    errors become APIConnectionError. Anything else is wrapped in the base
    KeywordsAIError.
    """
    if isinstance(error, KeywordsAIError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        status = response.status_code
        body = _response_body(response)
        message = f"{status} {response.reason_phrase} from {error.request.url}: {_error_detail(body)}"

        if status in (401, 403):
            return AuthenticationError(f"Authentication failed: {message}", status, body)
        if status == 404:
            return NotFoundError(f"Not found: {message}", status, body)
        if status == 429:
            return RateLimitError(f"Rate limit hit: {message}", status, body)
        if status >= 500:
            return ServerError(f"Server error: {message}", status, body)
        return InvalidRequestError(f"Invalid request: {message}", status, body)

    if isinstance(error, httpx.TransportError):
        return APIConnectionError(f"API connection error ({type(error).__name__}): {error}")

    return KeywordsAIError(f"Keywords AI error ({type(error).__name__}): {error}")


def should_retry_error(error: Exception) -> bool:
    """Return True for errors worth retrying at the transport layer.

    Retryable: RateLimitError, ServerError, APIConnectionError.
    Everything else (auth, not found, bad request, payload errors) is final.
    """
    return isinstance(error, (RateLimitError, ServerError, APIConnectionError))
