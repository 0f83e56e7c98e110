"""Agent configuration and execution for panel actions.

Mix HasAgentConfiguration into any Action or BulkAction to get the fluent
API for choosing the agent, streaming, the user instruction input, result
persistence, queued dispatch, provider/model overrides and context
enrichment.
"""

import importlib
from collections.abc import Callable
from typing import Any, Self

from panel_ai_action.agents import (
    ActionMode,
    AgentAction,
    AgentContext,
    AgentResult,
    ProviderOverrideAgent,
    RunAgentAction,
    RunAgentJob,
    dispatch,
)
from panel_ai_action.exceptions import AgentNotConfiguredError, AgentResolutionError
from panel_ai_action.logging import get_pipeline_logger
from panel_ai_action.persistence import persist_result
from panel_ai_action.settings import settings

__all__ = ["ContextCallback", "HasAgentConfiguration", "agent_path", "resolve_agent", "resolve_agent_class"]

logger = get_pipeline_logger(__name__)

ContextCallback = Callable[[AgentContext, Any], AgentContext]

USER_INSTRUCTION_FIELD = "user_instruction"


def resolve_agent_class(agent_class: type[AgentAction] | str) -> type[AgentAction]:
    """Resolve a class or a "package.module.ClassName" path to an agent class.

    Raises:
        AgentResolutionError: If the path cannot be imported or is not an agent
    """
    if isinstance(agent_class, str):
        module_path, _, class_name = agent_class.rpartition(".")
        if not module_path:
            raise AgentResolutionError(f"Agent reference '{agent_class}' must be a dotted path like 'app.agents.SummaryAgent'")
        try:
            module = importlib.import_module(module_path)
            resolved = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise AgentResolutionError(f"Failed to import agent '{agent_class}': {e}") from e
    else:
        resolved = agent_class

    if not (isinstance(resolved, type) and issubclass(resolved, AgentAction)):
        raise AgentResolutionError(f"Agent '{agent_class}' must be an AgentAction subclass, got {resolved!r}")
    return resolved


def resolve_agent(agent_class: type[AgentAction] | str | None) -> AgentAction:
    """Instantiate the configured agent.

    Raises:
        AgentNotConfiguredError: If no agent is configured
        AgentResolutionError: If the agent cannot be resolved or instantiated
    """
    if not agent_class:
        raise AgentNotConfiguredError("No agent configured. Call agent() with an AgentAction subclass first.")

    cls = resolve_agent_class(agent_class)
    try:
        return cls()
    except TypeError as e:
        raise AgentResolutionError(f"Failed to instantiate agent {cls.__name__}: {e}") from e


def agent_path(agent_class: type[AgentAction] | str | None) -> str | None:
    """Dotted path of an agent class, for views and serialized props."""
    if agent_class is None or isinstance(agent_class, str):
        return agent_class
    return f"{agent_class.__module__}.{agent_class.__qualname__}"


class HasAgentConfiguration:
    """Fluent agent configuration plus the run_agent() execution loop.

    Expects the host class to provide get_record() (single-record actions)
    or get_records() (bulk actions), and get_mounted_action_data().
    """

    agent_class: type[AgentAction] | str | None = None
    show_user_instruction: bool = False
    user_instruction_placeholder: str = ""
    streaming: bool = False
    persist_column: str | None = None
    mode: ActionMode = ActionMode.SYNC
    queue: str = "default"
    provider_override: str | None = None
    model_override: str | None = None
    context_callback: ContextCallback | None = None

    def agent(self, agent_class: type[AgentAction] | str) -> Self:
        """Set the agent class (or its dotted import path) to run."""
        self.agent_class = agent_class
        return self

    def with_user_instruction(self, placeholder: str = "") -> Self:
        """Show a free-text instruction input in the modal before running."""
        self.show_user_instruction = True
        self.user_instruction_placeholder = placeholder
        return self

    def stream(self, condition: bool = True) -> Self:
        self.streaming = condition
        return self

    def persist_result_to(self, column: str) -> Self:
        """Write the result to record.column after a successful run.

        Text results are stored as a plain string, structured results are
        JSON-encoded.
        """
        self.persist_column = column
        return self

    def queued(self, queue: str | None = None) -> Self:
        """Dispatch one background job per record instead of running inline."""
        self.mode = ActionMode.QUEUED
        self.queue = queue or settings.default_queue
        return self

    def using_provider(self, provider: str, model: str) -> Self:
        """Override the provider and model for this action only."""
        self.provider_override = provider
        self.model_override = model
        return self

    def with_context(self, callback: ContextCallback) -> Self:
        """Register a callback(context, record) -> context run before execution."""
        self.context_callback = callback
        return self

    def is_queued(self) -> bool:
        return self.mode is ActionMode.QUEUED

    async def run_agent(self) -> list[AgentResult]:
        """Run the configured agent for every resolved record.

        Queued mode dispatches one RunAgentJob per record and returns an
        empty list. Sync mode executes in record order, persisting each
        result when a column is configured.

        Raises:
            AgentNotConfiguredError: If no agent is configured
            AgentResolutionError: If the agent cannot be resolved
        """
        agent = self.apply_provider_override(resolve_agent(self.agent_class))

        records = self.resolve_records()
        runner = RunAgentAction()
        results: list[AgentResult] = []

        for record in records:
            context = self.build_context(record, records)

            if self.is_queued():
                dispatch(
                    RunAgentJob(
                        agent=agent,
                        context=context,
                        queue=self.queue,
                        persist_column=self.persist_column,
                        record=record,
                    )
                )
                continue

            result = await runner.execute(agent, context)

            if self.persist_column is not None:
                await self.persist_result(result, record)

            results.append(result)

        if self.is_queued():
            logger.info(f"Dispatched {len(records)} job(s) for '{agent.agent_class().__name__}' onto queue '{self.queue}'")

        return results

    async def persist_result(self, result: AgentResult, record: Any) -> None:
        if self.persist_column is None:
            return
        await persist_result(result, record, self.persist_column)

    def resolve_records(self) -> list[Any]:
        """Records of this invocation, as a list for single and bulk actions alike."""
        get_records = getattr(self, "get_records", None)
        if callable(get_records):
            return list(get_records())

        return [self.get_record()]  # type: ignore[attr-defined]

    def build_context(self, record: Any, records: list[Any] | None = None) -> AgentContext:
        """Build the context for one record, then apply user instruction and enrichment."""
        records = records if records is not None else self.resolve_records()

        context = AgentContext.from_records(records) if len(records) > 1 else AgentContext.from_record(record)

        if self.show_user_instruction:
            data = self.get_mounted_action_data()  # type: ignore[attr-defined]
            context = context.with_meta("userInstruction", data.get(USER_INSTRUCTION_FIELD) or "")

        if self.context_callback is not None:
            context = self.context_callback(context, record)

        return context

    def apply_provider_override(self, agent: AgentAction) -> AgentAction:
        """Wrap agent with the provider/model override; unchanged unless both are set."""
        if self.provider_override is None or self.model_override is None:
            return agent
        return ProviderOverrideAgent(agent, self.provider_override, self.model_override)
