"""Keywords AI workflow node.

Calls the Keywords AI chat-completion gateway from a workflow host, either
directly with a model and messages or through a managed, versioned prompt.

Quick Start:
    >>> import asyncio
    >>> from keywordsai_node import KeywordsAINode
    >>>
    >>> async def main():
    ...     async with KeywordsAINode(api_key="sk-...") as node:
    ...         outputs = await node.execute(
    ...             [
    ...                 {
    ...                     "resource": "gateway",
    ...                     "model": "gpt-4o-mini",
    ...                     "messages": {"messageValues": [{"role": "user", "content": "Hi!"}]},
    ...                 }
    ...             ],
    ...             continue_on_fail=True,
    ...         )
    ...         print(outputs[0]["json"])
    >>>
    >>> asyncio.run(main())

Main Components:
    - KeywordsAINode: Host-facing node (options, execute, credential test)
    - KeywordsAIClient: Authenticated async HTTP client
    - build_request_body: Parameters to request body
    - list_prompts / list_versions / list_variables: Option loaders
    - GatewayExecutor: Ordered per-item processing

Exceptions:
    - KeywordsAIError: Base exception
    - PayloadParseError: Malformed JSON parameter
    - APIError / AuthenticationError / NotFoundError / RateLimitError / ServerError / InvalidRequestError
    - APIConnectionError: Network or timeout failure
    - ItemExecutionError: Batch aborted on a failing item
"""

from keywordsai_node.config import KeywordsAISettings, get_settings, reload_settings, settings
from keywordsai_node.logging_config import setup_logging

# Initialize logging on package import, before submodules create their loggers
_setup_logging_called = False


def _initialize_logging() -> None:
    """Initialize logging configuration from settings."""
    global _setup_logging_called
    if not _setup_logging_called:
        setup_logging(
            log_level=settings.log_level,
            log_file_level=settings.log_file_level,
            log_dir=settings.log_dir,
            log_file_name=settings.log_file_name,
            log_json_format=settings.log_json_format,
            log_max_bytes=settings.log_max_bytes,
            log_backup_count=settings.log_backup_count,
        )
        _setup_logging_called = True


_initialize_logging()

from keywordsai_node.builder import build_request_body  # noqa: E402
from keywordsai_node.client import KeywordsAIClient  # noqa: E402
from keywordsai_node.credentials import KeywordsAICredentials  # noqa: E402
from keywordsai_node.events import ProcessEvent  # noqa: E402
from keywordsai_node.exceptions import (  # noqa: E402
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
)
from keywordsai_node.executors import GatewayExecutor  # noqa: E402
from keywordsai_node.models import (  # noqa: E402
    LATEST_VERSION,
    GatewayRequestBody,
    NodeParameters,
    OptionEntry,
    PromptRequestBody,
    ResourceSelection,
)
from keywordsai_node.node import KeywordsAINode  # noqa: E402
from keywordsai_node.options import list_prompts, list_variables, list_versions  # noqa: E402

__all__ = [
    # Node
    "KeywordsAINode",
    "GatewayExecutor",
    "KeywordsAIClient",
    "KeywordsAICredentials",
    "build_request_body",
    "list_prompts",
    "list_versions",
    "list_variables",
    "ProcessEvent",
    # Exceptions
    "KeywordsAIError",
    "PayloadParseError",
    "APIError",
    "APIConnectionError",
    "AuthenticationError",
    "InvalidRequestError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ItemExecutionError",
    # Models
    "LATEST_VERSION",
    "GatewayRequestBody",
    "NodeParameters",
    "OptionEntry",
    "PromptRequestBody",
    "ResourceSelection",
    # Configuration
    "KeywordsAISettings",
    "settings",
    "get_settings",
    "reload_settings",
]

__version__ = "0.1.0"
