"""Executors that run Keywords AI gateway calls over a batch of items."""

from collections.abc import Mapping
from typing import Any

from keywordsai_node.builder import build_request_body
from keywordsai_node.client import KeywordsAIClient
from keywordsai_node.events import ProcessEvent, StatusCallback, emit_status
from keywordsai_node.executors._base import Executor
from keywordsai_node.logging_config import get_logger
from keywordsai_node.models.parameters import NodeParameters

logger = get_logger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"


class GatewayExecutor(Executor[NodeParameters | Mapping[str, Any]]):
    """Build a request body per item and POST it to the chat completions endpoint.

    Items may be NodeParameters or raw parameter mappings using the host's
    parameter names; mappings are validated per item, so a missing required
    parameter fails only that item.
    """

    def __init__(
        self,
        client: KeywordsAIClient,
        continue_on_fail: bool = False,
        on_status: StatusCallback | None = None,
    ):
        super().__init__(continue_on_fail=continue_on_fail, on_status=on_status)
        self.client = client

    async def _execute_item(self, index: int, item: NodeParameters | Mapping[str, Any]) -> Any:
        params = item if isinstance(item, NodeParameters) else NodeParameters.model_validate(item)
        body = build_request_body(params)

        logger.debug(f"Item {index}: sending {params.resource.value} request")
        await emit_status(
            ProcessEvent(kind="request_sent", item_index=index, resource=params.resource.value), self.on_status
        )
        return await self.client.post(CHAT_COMPLETIONS_PATH, json=body.to_payload())


__all__ = ["CHAT_COMPLETIONS_PATH", "Executor", "GatewayExecutor"]
