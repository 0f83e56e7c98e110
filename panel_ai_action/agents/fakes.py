"""Canned agent responses for tests.

FakeAgentAction is consulted by RunAgentAction before any backend is
touched: when a response is faked for an agent class, the call is recorded
and the canned result is returned instead.
"""

import threading
from dataclasses import dataclass
from typing import Any, ClassVar

from .base import AgentAction, AgentContext, AgentResult

__all__ = ["FakeAgentAction", "RecordedAgentCall"]


@dataclass(frozen=True)
class RecordedAgentCall:
    """One faked agent invocation."""

    agent_class: type[AgentAction]
    context: AgentContext
    provider: str
    model: str


class FakeAgentAction:
    """Class-level registry of faked agent responses and recorded calls.

    Example:
        >>> FakeAgentAction.fake_response(SummaryAgent, "This is the summary.")
        >>> await AiAction.make().agent(SummaryAgent).record(post).run_agent()
        >>> FakeAgentAction.assert_agent_called(SummaryAgent, 1)
    """

    _responses: ClassVar[dict[type[AgentAction], AgentResult]] = {}
    _calls: ClassVar[list[RecordedAgentCall]] = []
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def fake_response(
        cls,
        agent_class: type[AgentAction],
        text: str,
        structured: dict[str, Any] | None = None,
        *,
        input_tokens: int = 0,
        output_tokens: int = 0,
    ) -> AgentResult:
        """Fake the result every run of agent_class returns."""
        result = AgentResult(
            text=text,
            structured=structured,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
        with cls._lock:
            cls._responses[agent_class] = result
        return result

    @classmethod
    def fake_result(cls, agent_class: type[AgentAction], result: AgentResult) -> None:
        with cls._lock:
            cls._responses[agent_class] = result

    @classmethod
    def is_faked(cls, agent_class: type[AgentAction]) -> bool:
        with cls._lock:
            return agent_class in cls._responses

    @classmethod
    def respond(cls, agent: AgentAction, context: AgentContext) -> AgentResult | None:
        """Record the call and return the faked result, or None when not faked."""
        agent_class = agent.agent_class()
        with cls._lock:
            result = cls._responses.get(agent_class)
            if result is None:
                return None
            cls._calls.append(
                RecordedAgentCall(
                    agent_class=agent_class,
                    context=context,
                    provider=agent.provider(),
                    model=agent.model(),
                )
            )
        return result

    @classmethod
    def calls(cls, agent_class: type[AgentAction] | None = None) -> list[RecordedAgentCall]:
        with cls._lock:
            return [c for c in cls._calls if agent_class is None or c.agent_class is agent_class]

    @classmethod
    def assert_agent_called(cls, agent_class: type[AgentAction], times: int | None = None) -> None:
        count = len(cls.calls(agent_class))
        if times is None:
            assert count > 0, f"Expected {agent_class.__name__} to be called, but it was not."
        else:
            assert count == times, f"Expected {agent_class.__name__} to be called {times} time(s), called {count} time(s)."

    @classmethod
    def assert_agent_not_called(cls, agent_class: type[AgentAction]) -> None:
        count = len(cls.calls(agent_class))
        assert count == 0, f"Expected {agent_class.__name__} not to be called, called {count} time(s)."

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._responses.clear()
            cls._calls.clear()
