"""Keywords AI workflow node.

KeywordsAINode is what a workflow host binds to: it describes the node,
serves the dynamic option lists under the host's method names, and runs
items through the gateway.

Example:
    >>> import asyncio
    >>> from keywordsai_node import KeywordsAINode
    >>>
    >>> async def main():
    ...     async with KeywordsAINode(api_key="sk-...") as node:
    ...         prompts = await node.get_prompts()
    ...         outputs = await node.execute(
    ...             [{"resource": "gatewayPrompt", "promptId": prompts[0].value, "version": "latest"}]
    ...         )
    ...         print(outputs[0]["json"])
    >>>
    >>> asyncio.run(main())
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from keywordsai_node import config
from keywordsai_node.client import KeywordsAIClient
from keywordsai_node.credentials import CREDENTIAL_NAME
from keywordsai_node.events import StatusCallback
from keywordsai_node.executors import GatewayExecutor
from keywordsai_node.models.options import OptionEntry
from keywordsai_node.models.parameters import NodeParameters
from keywordsai_node.models.request import ResourceSelection
from keywordsai_node.options import list_prompts, list_variables, list_versions


class NodeDescription(BaseModel):
    """Static description a host uses to register the node."""

    display_name: str = "Keywords AI"
    name: str = "keywordsAi"
    group: list[str] = Field(default_factory=lambda: ["transform"])
    version: int = 1
    description: str = "Keywords AI API integration"
    credentials: list[str] = Field(default_factory=lambda: [CREDENTIAL_NAME])
    resources: list[ResourceSelection] = Field(default_factory=lambda: list(ResourceSelection))
    default_resource: ResourceSelection = ResourceSelection.GATEWAY_PROMPT
    # parameter name -> (load-options method, parameters it depends on)
    load_options: dict[str, tuple[str, list[str]]] = Field(
        default_factory=lambda: {
            "promptId": ("getPrompts", []),
            "version": ("getVersions", ["promptId"]),
            "variables.name": ("getVariables", ["promptId", "version"]),
        }
    )
    usable_as_tool: bool = True


class KeywordsAINode:
    """Host-facing node object.

    Args:
        client: Pre-built client, left open on exit; one is created (and closed
            on exit) from api_key/settings when omitted
        api_key: API key used when no client is given
    """

    description = NodeDescription()

    def __init__(self, client: KeywordsAIClient | None = None, *, api_key: str | None = None):
        self._owns_client = client is None
        self.client = client or KeywordsAIClient(api_key=api_key)

    async def __aenter__(self) -> "KeywordsAINode":
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._owns_client:
            await self.client.aclose()

    @property
    def load_options_methods(self) -> dict[str, Callable[..., Awaitable[list[OptionEntry]]]]:
        """Load-options methods keyed by the names used in the node description."""
        return {
            "getPrompts": self.get_prompts,
            "getVersions": self.get_versions,
            "getVariables": self.get_variables,
        }

    async def get_prompts(self) -> list[OptionEntry]:
        return await list_prompts(self.client)

    async def get_versions(self, prompt_id: str | None) -> list[OptionEntry]:
        return await list_versions(self.client, prompt_id)

    async def get_variables(self, prompt_id: str | None, version: str | int | None) -> list[OptionEntry]:
        return await list_variables(self.client, prompt_id, version)

    async def test_credentials(self) -> bool:
        return await self.client.test_credentials()

    async def execute(
        self,
        items: Sequence[NodeParameters | Mapping[str, Any]],
        continue_on_fail: bool | None = None,
        on_status: StatusCallback | None = None,
    ) -> list[dict[str, Any]]:
        """Run one gateway call per item and return the outputs in input order.

        Args:
            items: Per-item parameters (NodeParameters or host parameter mappings)
            continue_on_fail: Defaults to settings.continue_on_fail
            on_status: Optional progress callback

        Raises:
            ItemExecutionError: If an item fails and continue_on_fail is off
        """
        if continue_on_fail is None:
            continue_on_fail = config.get_settings().continue_on_fail
        executor = GatewayExecutor(self.client, continue_on_fail=continue_on_fail, on_status=on_status)
        return await executor.execute(items)
