"""Status events emitted while a batch of items is processed.

Callers observe progress by passing an ``on_status`` callback (sync or
async) to the executor.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Literal

from pydantic import BaseModel, Field

ProcessEventKind = Literal[
    "item_start",
    "request_sent",
    "item_success",
    "item_error",
    "complete",
]


class ProcessEvent(BaseModel):
    """A status event; ``kind`` discriminates which optional fields are set."""

    kind: ProcessEventKind = Field(description="Event type discriminator")
    timestamp: float | None = Field(default=None, description="Event time (time.time())")

    # item_* / request_sent
    item_index: int | None = Field(default=None, description="Zero-based index of the input item")
    resource: str | None = Field(default=None, description="Resource selected for the item")
    duration_seconds: float | None = Field(default=None, description="Time spent on the item")
    error: str | None = Field(default=None, description="Error message if the item failed")

    # complete
    item_count: int | None = Field(default=None, description="Number of input items")
    error_count: int | None = Field(default=None, description="Items converted to error records")

    model_config = {"extra": "allow"}


StatusCallback = Callable[[ProcessEvent], None] | Callable[[ProcessEvent], Awaitable[None]]


async def emit_status(event: ProcessEvent, on_status: StatusCallback | None) -> None:
    """Invoke on_status with the event if set; supports sync and async callbacks.

    No-op when on_status is None. Exceptions from the callback are not caught.
    """
    if on_status is None:
        return
    result = on_status(event)
    if inspect.iscoroutine(result):
        await result
