"""Request body models for ``POST /chat/completions``.

The two body shapes are a discriminated union: a direct gateway call
carries ``model`` and ``messages``; a managed-prompt call carries ``prompt``.
Both carry the same optional top-level observability fields, which are
serialized only when they were explicitly set.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from keywordsai_node.models.conversation import ConversationMessage
from keywordsai_node.models.prompt import PromptReference


class ResourceSelection(str, Enum):
    GATEWAY = "gateway"
    GATEWAY_PROMPT = "gatewayPrompt"


_TOP_LEVEL_FIELDS = (
    "stream",
    "metadata",
    "custom_identifier",
    "customer_identifier",
    "customer_params",
    "request_breakdown",
)


class _RequestBodyBase(BaseModel):
    stream: Annotated[bool | None, Field(default=None, description="Stream partial progress")]
    metadata: Annotated[Any, Field(default=None, description="Reference key-value pairs")]
    custom_identifier: Annotated[str | None, Field(default=None, description="Indexed tag for filtering logs")]
    customer_identifier: Annotated[str | None, Field(default=None, description="User associated with the call")]
    customer_params: Annotated[Any, Field(default=None, description="Customer name, email, budget, ...")]
    request_breakdown: Annotated[bool | None, Field(default=None, description="Return detailed metrics")]

    def _top_level_payload(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in _TOP_LEVEL_FIELDS if name in self.model_fields_set}

    def to_payload(self) -> dict[str, Any]:
        raise NotImplementedError


class GatewayRequestBody(_RequestBodyBase):
    kind: Literal["gateway"] = "gateway"
    model: Annotated[str, Field(description="Model to call, e.g. gpt-4o-mini")]
    messages: Annotated[list[ConversationMessage], Field(min_length=1, description="System message first")]
    override_params: Annotated[
        dict[str, Any] | None, Field(default=None, description="Merged into the top level of the body")
    ]

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_payload() for message in self.messages],
        }
        if self.override_params:
            payload.update(self.override_params)
        payload.update(self._top_level_payload())
        return payload


class PromptRequestBody(_RequestBodyBase):
    kind: Literal["gatewayPrompt"] = "gatewayPrompt"
    prompt: PromptReference

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"prompt": self.prompt.to_payload()}
        payload.update(self._top_level_payload())
        return payload


RequestBody = Annotated[GatewayRequestBody | PromptRequestBody, Field(discriminator="kind")]
