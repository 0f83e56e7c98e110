"""Queued agent execution job."""

from dataclasses import dataclass, field
from typing import Any

from panel_ai_action.logging import get_pipeline_logger
from panel_ai_action.persistence import persist_result

from .base import AgentAction, AgentContext, AgentResult
from .runner import RunAgentAction

__all__ = ["RunAgentJob"]

logger = get_pipeline_logger(__name__)


@dataclass
class RunAgentJob:
    """One agent run deferred onto a job queue.

    Attributes:
        agent: The agent to execute (already wrapped with any provider override).
        context: The fully built context, including enrichment.
        queue: Name of the queue the job is dispatched onto.
        persist_column: Column to store the result in, or None.
        record: Record the result is persisted onto.
    """

    agent: AgentAction
    context: AgentContext
    queue: str = "default"
    persist_column: str | None = None
    record: Any = field(default=None, repr=False)

    async def handle(self) -> AgentResult:
        """Execute the agent and persist the result when configured."""
        logger.info(f"Handling queued run of '{self.agent.agent_class().__name__}' from queue '{self.queue}'")
        result = await RunAgentAction().execute(self.agent, self.context)

        if self.persist_column is not None and self.record is not None:
            await persist_result(result, self.record, self.persist_column)

        return result
