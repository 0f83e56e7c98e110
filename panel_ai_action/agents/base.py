"""Agent execution contracts.

This module defines the contracts the panel components talk to:
AgentAction (what to run), AgentContext (what it runs against),
AgentResult (what comes back) and AgentBackend (who actually runs it).
panel-ai-action does not implement any concrete backend; install a
backend package and register it to run agents.

Usage: See tests/agents/ for usage patterns.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

from panel_ai_action.settings import settings

__all__ = [
    "ActionMode",
    "AgentAction",
    "AgentBackend",
    "AgentContext",
    "AgentResult",
]

_USER_INSTRUCTION_KEYS = frozenset({"userInstruction", "user_instruction"})


class ActionMode(StrEnum):
    """How a configured action executes its agent."""

    SYNC = "sync"
    QUEUED = "queued"


class AgentContext(BaseModel):
    """Immutable input handed to an agent.

    Every modifier returns a new context; the original is never changed.

    Attributes:
        record: The primary record (first record for bulk invocations).
        records: All records of the invocation, in selection order.
        meta: Free-form metadata added by the caller or enrichment callbacks.
        user_instruction: Free-text instruction typed by the panel user.
        panel_id: Identifier of the panel the invocation came from.
        resource_class: Dotted path of the resource the record belongs to.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    record: Any = None
    records: tuple[Any, ...] = ()
    meta: dict[str, Any] = Field(default_factory=dict)
    user_instruction: str | None = None
    panel_id: str | None = None
    resource_class: str | None = None

    @classmethod
    def empty(cls) -> "AgentContext":
        """Context with no record, used when a component has nothing to bind."""
        return cls()

    @classmethod
    def from_record(cls, record: Any) -> "AgentContext":
        """Context for a single-record invocation."""
        return cls(record=record, records=(record,))

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "AgentContext":
        """Context for a bulk invocation; the first record becomes the primary one."""
        items = tuple(records)
        return cls(record=items[0] if items else None, records=items)

    def with_meta(self, key: str, value: Any) -> "AgentContext":
        """Return a copy with one metadata entry added or replaced.

        The user instruction keys also populate user_instruction so agents
        can read it either way.
        """
        update: dict[str, Any] = {"meta": {**self.meta, key: value}}
        if key in _USER_INSTRUCTION_KEYS:
            update["user_instruction"] = None if value is None else str(value)
        return self.model_copy(update=update)

    def with_user_instruction(self, instruction: str | None) -> "AgentContext":
        return self.model_copy(update={"user_instruction": instruction})

    def get_meta(self, key: str, default: Any = None) -> Any:
        return self.meta.get(key, default)


@dataclass(frozen=True)
class AgentResult:
    """Result of one agent run.

    Attributes:
        text: Raw text produced by the agent (markdown or plain text).
        structured: Decoded structured output, or None for text results.
                    Key order is preserved for rendering.
        input_tokens: Prompt tokens consumed.
        output_tokens: Completion tokens generated.
        provider: Provider that served the run, when known.
        model: Model that served the run, when known.
        duration_seconds: Wall time of the run, when measured.
    """

    text: str = ""
    structured: dict[str, Any] | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    provider: str | None = None
    model: str | None = None
    duration_seconds: float | None = None

    def is_structured(self) -> bool:
        return isinstance(self.structured, dict)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_storage_value(self) -> str:
        """Value written to a persistence column.

        Structured results are JSON-encoded; text results are stored as-is.
        """
        if self.is_structured():
            return json.dumps(self.structured, ensure_ascii=False, separators=(",", ":"))
        return self.text


class AgentAction(ABC):
    """Contract every agent run from a panel component implements.

    Subclasses provide the system instructions and the user prompt for a
    context. Provider and model come from the provider_name/model_name
    class attributes, falling back to the configured defaults.

    Example:
        >>> class SummaryAgent(AgentAction):
        ...     provider_name = "anthropic"
        ...     model_name = "claude-sonnet"
        ...
        ...     def instructions(self, context):
        ...         return "Summarise the record."
        ...
        ...     def prompt(self, context):
        ...         return f"Please summarise: {context.record.body}"
    """

    provider_name: str = ""
    model_name: str = ""

    @abstractmethod
    def instructions(self, context: AgentContext) -> str:
        """System instructions for the run."""

    @abstractmethod
    def prompt(self, context: AgentContext) -> str:
        """User prompt for the run."""

    def provider(self) -> str:
        return self.provider_name or settings.default_provider

    def model(self) -> str:
        return self.model_name or settings.default_model

    async def handle(self, context: AgentContext) -> AgentResult:
        """Execute this agent through the runner.

        Override to customise how the agent runs; the default delegates to
        RunAgentAction so fakes and the registered backend apply.
        """
        from .runner import RunAgentAction

        return await RunAgentAction().execute(self, context)

    def agent_class(self) -> type["AgentAction"]:
        """Class that identifies this agent for fakes and logging."""
        return type(self)


class AgentBackend(ABC):
    """Abstract base class for agent execution backends.

    Implementations own prompt construction details, provider dispatch,
    token accounting and structured-output detection. panel-ai-action
    only interacts through this interface.
    """

    @abstractmethod
    async def run(
        self,
        agent: AgentAction,
        context: AgentContext,
        *,
        instructions: str,
        prompt: str,
        provider: str,
        model: str,
    ) -> AgentResult:
        """Execute an agent and return its result.

        Args:
            agent: The agent being executed.
            context: The context the agent runs against.
            instructions: System instructions built by the agent.
            prompt: User prompt built by the agent.
            provider: Provider key to dispatch to (e.g. "anthropic").
            model: Model identifier.

        Returns:
            AgentResult with text, optional structured data and token usage.
        """

    async def validate(self) -> None:
        """Validate backend configuration.

        Called lazily on the first run to fail fast with clear errors.
        Default implementation accepts any configuration.
        """
