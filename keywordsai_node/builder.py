"""Build the ``POST /chat/completions`` body for one item.

The resource selection decides the body shape; additional fields are then
applied in a fixed order, each only when present:

    1. overrideParamsJson  -> prompt.override_params, or merged into the top level
    2. stream              -> stream (explicit false included)
    3. metadata            -> metadata
    4. customIdentifier    -> custom_identifier
    5. customerIdentifier  -> customer_identifier
    6. customerParams      -> customer_params
    7. requestBreakdown    -> request_breakdown (explicit false included)

The "latest" version alias is passed through unresolved; the chat endpoint
understands it.
"""

import json
from typing import Any

from keywordsai_node.exceptions import PayloadParseError
from keywordsai_node.models.conversation import ConversationMessage, Role
from keywordsai_node.models.parameters import AdditionalFields, NodeParameters
from keywordsai_node.models.prompt import PromptReference
from keywordsai_node.models.request import GatewayRequestBody, PromptRequestBody, RequestBody, ResourceSelection


def parse_json_field(field_name: str, raw_value: str) -> Any:
    """Parse a JSON-bearing parameter.

    Raises:
        PayloadParseError: If raw_value is not valid JSON
    """
    try:
        return json.loads(raw_value)
    except json.JSONDecodeError as e:
        raise PayloadParseError(field_name, raw_value, str(e)) from e


def build_messages(system_message: str, declared: list) -> list[ConversationMessage]:
    """System message first (even when blank), then declared turns in order."""
    messages = [ConversationMessage(role=Role.SYSTEM, content=system_message)]
    messages.extend(ConversationMessage(role=m.role, content=m.content) for m in declared)
    return messages


def build_variables(assignments: list) -> dict[str, str]:
    """Collect name/value pairs; a repeated name keeps its last value."""
    variables: dict[str, str] = {}
    for assignment in assignments:
        variables[assignment.name] = assignment.value
    return variables


def _gateway_override(raw_value: str) -> dict[str, Any] | None:
    params = parse_json_field("overrideParamsJson", raw_value)
    # Only an object has keys to merge; null, arrays and scalars add nothing.
    if not isinstance(params, dict):
        return None
    if "prompt" in params:
        raise PayloadParseError("overrideParamsJson", raw_value, "a gateway request may not set 'prompt'")
    return params


def _additional_body_fields(fields: AdditionalFields) -> dict[str, Any]:
    # Only keys collected here are marked as set on the body model.
    extra: dict[str, Any] = {}
    if fields.stream is not None:
        extra["stream"] = fields.stream
    if fields.metadata:
        extra["metadata"] = parse_json_field("metadata", fields.metadata)
    if fields.custom_identifier:
        extra["custom_identifier"] = fields.custom_identifier
    if fields.customer_identifier:
        extra["customer_identifier"] = fields.customer_identifier
    if fields.customer_params:
        extra["customer_params"] = parse_json_field("customerParams", fields.customer_params)
    if fields.request_breakdown is not None:
        extra["request_breakdown"] = fields.request_breakdown
    return extra


def build_request_body(params: NodeParameters) -> RequestBody:
    """Turn one item's parameters into a request body.

    Raises:
        PayloadParseError: If any JSON-bearing additional field is malformed
    """
    fields = params.additional_fields
    raw_override = fields.override_params_json

    if params.resource is ResourceSelection.GATEWAY:
        override = _gateway_override(raw_override) if raw_override else None
        return GatewayRequestBody(
            model=params.model,
            messages=build_messages(params.system_message, params.messages),
            override_params=override,
            **_additional_body_fields(fields),
        )

    prompt_fields: dict[str, Any] = {
        "prompt_id": params.prompt_id,
        "variables": build_variables(params.variables),
        "override": params.override,
    }
    if params.version not in (None, ""):
        prompt_fields["version"] = params.version
    if raw_override:
        prompt_fields["override_params"] = parse_json_field("overrideParamsJson", raw_override)

    return PromptRequestBody(prompt=PromptReference(**prompt_fields), **_additional_body_fields(fields))
