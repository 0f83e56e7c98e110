"""Reactive component rendering an agent response inside an action modal.

Lifecycle: mount() stores the locked props and runs the agent. Without
streaming the result is applied in one step. With streaming the final
text is pushed to listeners in fixed-size chunks, left to right, and the
complete result is applied afterwards.
"""

import importlib
import inspect
from collections.abc import AsyncIterator, Callable
from typing import TYPE_CHECKING, Any

from panel_ai_action.agents import AgentAction, AgentContext, AgentResult, RunAgentAction
from panel_ai_action.concerns import resolve_agent
from panel_ai_action.concerns.agent_configuration import USER_INSTRUCTION_FIELD
from panel_ai_action.exceptions import LockedPropertyError, RecordNotFoundError
from panel_ai_action.logging import get_pipeline_logger
from panel_ai_action.rendering import render_view
from panel_ai_action.settings import settings

if TYPE_CHECKING:
    from panel_ai_action.actions import AiAction

__all__ = ["AiResponseModal", "split_chunks"]

logger = get_pipeline_logger(__name__)

ChunkListener = Callable[[str], Any]


def split_chunks(text: str, size: int) -> list[str]:
    """Split text left to right into chunks of at most size characters."""
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [text[offset : offset + size] for offset in range(0, len(text), size)]


class AiResponseModal:
    """Drives one agent call and holds the state the modal view renders.

    Reactive state:
        response: Text shown so far (accumulated chunks while streaming,
                  the full text once complete).
        loading: True until the result has been applied.
        complete: True once the agent has finished producing output.
        input_tokens / output_tokens: Usage reported by the result.
        is_structured / structured_data: Structured output, when returned.

    Locked props (written once by mount(), read-only afterwards):
        agent_class, record_id, record_class, streaming,
        show_user_instruction, user_instruction_placeholder.
    """

    LOCKED = frozenset(
        {
            "agent_class",
            "record_id",
            "record_class",
            "streaming",
            "show_user_instruction",
            "user_instruction_placeholder",
        }
    )

    def __init__(self, action: "AiAction | None" = None):
        object.__setattr__(self, "_mounted", False)
        self.action = action

        self.response = ""
        self.loading = True
        self.complete = False
        self.input_tokens = 0
        self.output_tokens = 0
        self.is_structured = False
        self.structured_data: dict[str, Any] | None = None

        self.agent_class: type[AgentAction] | str | None = None
        self.record_id: Any = None
        self.record_class: type[Any] | str | None = None
        self.streaming = False
        self.show_user_instruction = False
        self.user_instruction_placeholder = ""

        self._record: Any = None
        self._user_instruction: str | None = None
        self._listeners: list[ChunkListener] = []

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.LOCKED and self._mounted:
            raise LockedPropertyError(f"Cannot update locked property '{name}' after mount")
        super().__setattr__(name, value)

    def on_chunk(self, listener: ChunkListener) -> "AiResponseModal":
        """Register a listener receiving every streamed chunk, sync or async."""
        self._listeners.append(listener)
        return self

    async def mount(
        self,
        agent_class: type[AgentAction] | str | None = None,
        streaming: bool = False,
        show_user_instruction: bool = False,
        user_instruction_placeholder: str = "",
        record_id: Any = None,
        record_class: type[Any] | str | None = None,
        *,
        record: Any = None,
        user_instruction: str | None = None,
    ) -> None:
        """Store the locked props and immediately run the agent.

        The record is either passed directly or looked up through
        record_class.find(record_id).
        """
        self.agent_class = agent_class
        self.streaming = streaming
        self.show_user_instruction = show_user_instruction
        self.user_instruction_placeholder = user_instruction_placeholder
        self.record_id = record_id
        self.record_class = record_class
        self._record = record
        self._user_instruction = user_instruction
        object.__setattr__(self, "_mounted", True)

        if self.action is not None:
            self.action.mount_streaming_modal()

        await self.run()

    async def run(self) -> None:
        """Execute the agent and update the reactive state."""
        if self.streaming:
            async for _ in self.iter_stream():
                pass
        else:
            self.reset_state()
            result = await self._execute()
            self.apply_result(result)

    async def iter_stream(self) -> AsyncIterator[str]:
        """Execute the agent and yield the displayed chunks as they are pushed."""
        self.reset_state()
        result = await self._execute()

        for chunk in split_chunks(result.text, settings.stream_chunk_size):
            if self.action is not None:
                chunk = self.action.stream_chunk(chunk)
            self.response += chunk
            for listener in self._listeners:
                delivered = listener(chunk)
                if inspect.isawaitable(delivered):
                    await delivered
            yield chunk

        self.apply_result(result)

    def reset_state(self) -> None:
        """Return the reactive state to loading, dropping any previous result."""
        self.response = ""
        self.loading = True
        self.complete = False
        self.input_tokens = 0
        self.output_tokens = 0
        self.is_structured = False
        self.structured_data = None

    def apply_result(self, result: AgentResult) -> None:
        """Apply a completed result to the reactive state."""
        self.response = result.text
        self.loading = False
        self.complete = True
        self.input_tokens = result.input_tokens
        self.output_tokens = result.output_tokens

        if result.is_structured():
            self.is_structured = True
            self.structured_data = dict(result.structured or {})

    def render(self) -> str:
        return render_view(
            "agent-response-modal",
            loading=self.loading,
            complete=self.complete,
            response=self.response,
            is_structured=self.is_structured,
            structured_data=self.structured_data,
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            show_usage=settings.show_usage,
            allow_copy=settings.allow_copy,
        )

    async def _execute(self) -> AgentResult:
        agent = resolve_agent(self.agent_class)
        record = await self._resolve_record()

        if self.action is not None:
            agent = self.action.apply_provider_override(agent)

        context = self.build_context(record)
        logger.debug(f"Response modal running '{agent.agent_class().__name__}' (streaming: {self.streaming})")
        return await RunAgentAction().execute(agent, context)

    def build_context(self, record: Any) -> AgentContext:
        """Context for the mounted record, or an empty one when there is none."""
        context = AgentContext.empty() if record is None else AgentContext.from_record(record)

        if self.show_user_instruction:
            instruction = self._user_instruction
            if instruction is None and self.action is not None:
                instruction = self.action.get_mounted_action_data().get(USER_INSTRUCTION_FIELD)
            context = context.with_meta("userInstruction", instruction or "")

        if self.action is not None and self.action.context_callback is not None:
            context = self.action.context_callback(context, record)

        return context

    async def _resolve_record(self) -> Any:
        if self._record is not None:
            return self._record
        if self.record_class is None or self.record_id is None:
            return None

        record_class = self.record_class
        if isinstance(record_class, str):
            record_class = _import_record_class(record_class)

        find = getattr(record_class, "find", None)
        if not callable(find):
            raise RecordNotFoundError(f"{record_class!r} has no find() method to look up record {self.record_id!r}")

        record = find(self.record_id)
        if inspect.isawaitable(record):
            record = await record
        if record is None:
            raise RecordNotFoundError(f"{getattr(record_class, '__name__', record_class)} record {self.record_id!r} not found")
        return record


def _import_record_class(path: str) -> type[Any]:
    module_path, _, class_name = path.rpartition(".")
    try:
        return getattr(importlib.import_module(module_path), class_name)
    except (ImportError, AttributeError, ValueError) as e:
        raise RecordNotFoundError(f"Failed to import record class '{path}': {e}") from e
