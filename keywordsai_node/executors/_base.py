"""Base item executor.

An executor runs one unit of work per input item, strictly in input order,
and collects one output record per item. Per-item failures either become
``{"error": message}`` records (continue-on-fail) or abort the batch with
an ItemExecutionError that keeps the outputs completed so far.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from keywordsai_node.events import ProcessEvent, StatusCallback, emit_status
from keywordsai_node.exceptions import ItemExecutionError
from keywordsai_node.logging_config import get_logger

logger = get_logger(__name__)

ItemT = TypeVar("ItemT")


class Executor(ABC, Generic[ItemT]):
    """Abstract base class for item executors.

    Subclasses implement _execute_item to process a single item.

    Example:
        >>> class EchoExecutor(Executor[dict]):
        ...     async def _execute_item(self, index: int, item: dict) -> dict:
        ...         return item
    """

    def __init__(self, continue_on_fail: bool = False, on_status: StatusCallback | None = None):
        """Initialize an Executor.

        Args:
            continue_on_fail: Turn item failures into error records instead of aborting
            on_status: Optional callback receiving ProcessEvent updates
        """
        self.continue_on_fail = continue_on_fail
        self.on_status = on_status

    async def execute(self, items: Sequence[ItemT]) -> list[dict[str, Any]]:
        """Process every item and return one output record per item.

        Each record has the form ``{"json": <response or {"error": message}>}``.
        An on_status error raised for ``item_start`` or ``item_success`` fails
        that item like any other error; one raised for ``item_error`` or
        ``complete`` propagates unchanged.

        Raises:
            ItemExecutionError: If an item fails and continue_on_fail is False
        """
        results: list[dict[str, Any]] = []
        error_count = 0

        for index, item in enumerate(items):
            start_time = time.time()
            try:
                await emit_status(
                    ProcessEvent(kind="item_start", item_index=index, timestamp=start_time), self.on_status
                )
                output = await self._execute_item(index, item)
                await emit_status(
                    ProcessEvent(
                        kind="item_success",
                        item_index=index,
                        duration_seconds=time.time() - start_time,
                        timestamp=time.time(),
                    ),
                    self.on_status,
                )
            except Exception as e:
                duration = time.time() - start_time
                await emit_status(
                    ProcessEvent(
                        kind="item_error",
                        item_index=index,
                        error=str(e),
                        duration_seconds=duration,
                        timestamp=time.time(),
                    ),
                    self.on_status,
                )
                if not self.continue_on_fail:
                    logger.error(f"Item {index} failed, aborting batch after {len(results)} completed: {e}")
                    raise ItemExecutionError(index, e, results) from e

                logger.warning(f"Item {index} failed, continuing: {e}")
                error_count += 1
                results.append({"json": {"error": str(e)}})
                continue

            results.append({"json": output})

        logger.info(f"Processed {len(items)} items ({error_count} failed)")
        await emit_status(
            ProcessEvent(kind="complete", item_count=len(items), error_count=error_count, timestamp=time.time()),
            self.on_status,
        )
        return results

    @abstractmethod
    async def _execute_item(self, index: int, item: ItemT) -> Any:
        """Process one item and return its output payload.

        Args:
            index: Zero-based position of the item in the batch
            item: The item to process

        Returns:
            The JSON payload stored as the item's output
        """
        pass
