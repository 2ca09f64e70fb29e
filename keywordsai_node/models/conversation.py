from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ConversationMessage(BaseModel):
    role: Annotated[Role, Field(description="The role of the message author")]
    content: Annotated[str, Field(description="The content of the message")]

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class DeclaredMessage(ConversationMessage):
    """A conversation turn declared on the node: user or assistant only."""

    role: Annotated[Role, Field(default=Role.USER, description="Either user or assistant")]

    @field_validator("role")
    @classmethod
    def _reject_system_role(cls, value: Role) -> Role:
        if value is Role.SYSTEM:
            raise ValueError("declared messages may not use the system role")
        return value
