"""Writing agent results back onto records."""

import inspect
from typing import TYPE_CHECKING, Any

from panel_ai_action.logging import get_pipeline_logger

if TYPE_CHECKING:
    from panel_ai_action.agents.base import AgentResult

__all__ = ["persist_result", "record_key"]

logger = get_pipeline_logger(__name__)


async def persist_result(result: "AgentResult", record: Any, column: str) -> None:
    """Store the result on record.column and save the record.

    Text results are stored as a plain string, structured results as JSON.
    save() is optional and may be sync or async.
    """
    setattr(record, column, result.to_storage_value())

    save = getattr(record, "save", None)
    if callable(save):
        saved = save()
        if inspect.isawaitable(saved):
            await saved

    logger.debug(f"Persisted agent result to {type(record).__name__}.{column}")


def record_key(record: Any) -> Any:
    """Primary key of a record: get_key(), then pk, then id."""
    if record is None:
        return None
    get_key = getattr(record, "get_key", None)
    if callable(get_key):
        return get_key()
    for attr in ("pk", "id"):
        if hasattr(record, attr):
            return getattr(record, attr)
    return None
