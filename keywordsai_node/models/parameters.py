"""Node parameters for a single input item.

Field aliases follow the host's parameter names (``systemMessage``,
``promptId``, ``additionalFields`` ...) so parameter dictionaries produced by
the host validate directly. Collections declared with multiple values arrive
wrapped (``{"messageValues": [...]}``); both the wrapped and the bare list
forms are accepted.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from keywordsai_node import config
from keywordsai_node.models.conversation import DeclaredMessage
from keywordsai_node.models.request import ResourceSelection


def _unwrap_collection(value: Any, key: str) -> Any:
    if value is None:
        return []
    if isinstance(value, dict):
        return value.get(key) or []
    return value


class VariableAssignment(BaseModel):
    name: Annotated[str, Field(default="", description="Variable name from the prompt template")]
    value: Annotated[str, Field(default="", description="The value for this variable")]


class AdditionalFields(BaseModel):
    """Optional request fields shared by both resources.

    JSON-bearing fields stay raw strings here; they are parsed when the
    request body is built.
    """

    model_config = ConfigDict(populate_by_name=True)

    override_params_json: Annotated[str | None, Field(default=None, alias="overrideParamsJson")]
    stream: bool | None = None
    metadata: str | None = None
    custom_identifier: Annotated[str | None, Field(default=None, alias="customIdentifier")]
    customer_identifier: Annotated[str | None, Field(default=None, alias="customerIdentifier")]
    customer_params: Annotated[str | None, Field(default=None, alias="customerParams")]
    request_breakdown: Annotated[bool | None, Field(default=None, alias="requestBreakdown")]


class NodeParameters(BaseModel):
    """Resolved parameter values for one item."""

    model_config = ConfigDict(populate_by_name=True)

    resource: ResourceSelection = ResourceSelection.GATEWAY_PROMPT

    # gateway
    model: Annotated[str, Field(default_factory=lambda: config.get_settings().default_model)]
    system_message: Annotated[
        str, Field(default_factory=lambda: config.get_settings().default_system_message, alias="systemMessage")
    ]
    messages: Annotated[list[DeclaredMessage], Field(default_factory=list)]

    # gatewayPrompt
    prompt_id: Annotated[str, Field(default="", alias="promptId")]
    version: str | int = ""
    variables: Annotated[list[VariableAssignment], Field(default_factory=list)]
    override: bool = False

    additional_fields: Annotated[AdditionalFields, Field(default_factory=AdditionalFields, alias="additionalFields")]

    @field_validator("messages", mode="before")
    @classmethod
    def _unwrap_messages(cls, value: Any) -> Any:
        return _unwrap_collection(value, "messageValues")

    @field_validator("variables", mode="before")
    @classmethod
    def _unwrap_variables(cls, value: Any) -> Any:
        return _unwrap_collection(value, "variableValues")

    @model_validator(mode="after")
    def _check_required(self) -> "NodeParameters":
        if self.resource is ResourceSelection.GATEWAY and not self.model:
            raise ValueError("'model' is required for the gateway resource")
        if self.resource is ResourceSelection.GATEWAY_PROMPT and not self.prompt_id:
            raise ValueError("'promptId' is required for the gatewayPrompt resource")
        return self
