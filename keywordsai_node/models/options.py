from typing import Annotated

from pydantic import BaseModel, Field


class OptionEntry(BaseModel):
    """One selectable value for a dynamic dropdown, in the host's option shape."""

    name: Annotated[str, Field(description="Display label")]
    value: Annotated[str | int, Field(description="Value stored in the node parameter")]
