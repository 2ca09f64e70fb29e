from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

# Version alias shown in the UI and accepted by the chat endpoint. The
# version-detail endpoint does not understand it.
LATEST_VERSION = "latest"


class PromptReference(BaseModel):
    """The ``prompt`` object of a managed-prompt gateway call."""

    prompt_id: Annotated[str, Field(min_length=1, description="Identifier of the managed prompt")]
    variables: Annotated[
        dict[str, str], Field(default_factory=dict, description="Values substituted into the prompt template")
    ]
    override: Annotated[bool, Field(default=False, description="Whether the call overrides the stored prompt config")]
    version: Annotated[
        str | int | None,
        Field(default=None, description="Concrete version number or the 'latest' alias; omitted when None"),
    ]
    override_params: Annotated[
        Any, Field(default=None, description="Parameters taking precedence over the stored prompt config")
    ]

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "prompt_id": self.prompt_id,
            "variables": dict(self.variables),
            "override": self.override,
        }
        if self.version not in (None, ""):
            payload["version"] = self.version
        if "override_params" in self.model_fields_set:
            payload["override_params"] = self.override_params
        return payload


class PromptRecord(BaseModel):
    """A prompt as listed by ``GET /prompts/``."""

    model_config = ConfigDict(extra="allow")

    prompt_id: str
    name: str | None = None


class PromptVersionRecord(BaseModel):
    """A prompt version as listed by ``GET /prompts/{id}/versions/``."""

    model_config = ConfigDict(extra="allow")

    version: int
    readonly: bool = False
    variables: dict[str, Any] | None = None
