"""Dashboard widget rendering an agent result inline.

@public

Configure the agent and an optional context builder on a subclass, then
add the widget to a panel. The agent runs during mount() and the result
is rendered with the same partials as the response modal, inline in the
widget card.

Example:
    >>> class WeeklyDigestWidget(AiActionWidget):
    ...     pass
    >>> WeeklyDigestWidget.agent(DigestAgent)
    >>> WeeklyDigestWidget.context_builder(lambda: AgentContext.empty().with_meta("period", "week"))
"""

import inspect
from collections.abc import Callable
from typing import Any, ClassVar, Self

from panel_ai_action.agents import AgentAction, AgentContext, AgentResult, RunAgentAction
from panel_ai_action.concerns import resolve_agent
from panel_ai_action.logging import get_pipeline_logger
from panel_ai_action.panel import Widget

__all__ = ["AiActionWidget"]

logger = get_pipeline_logger(__name__)


class AiActionWidget(Widget):
    """Widget that executes its agent on mount.

    @public

    Configuration is held per class: agent() and context_builder() set it
    on the class they are called on and return a fresh instance.
    """

    view: ClassVar[str] = "widgets/ai-action-widget"
    column_span: ClassVar[int | str] = "full"

    agent_class: ClassVar[type[AgentAction] | str | None] = None
    context_builder_callback: ClassVar[Callable[[], AgentContext] | None] = None

    def __init__(self) -> None:
        self.response = ""
        self.is_structured = False
        self.structured_data: dict[str, Any] | None = None
        self.loading = True

    @classmethod
    def agent(cls, agent_class: type[AgentAction] | str) -> Self:
        cls.agent_class = agent_class
        return cls()

    @classmethod
    def context_builder(cls, builder: Callable[[], AgentContext]) -> Self:
        """Provide a zero-argument callable building the widget's context."""
        cls.context_builder_callback = builder
        return cls()

    async def mount(self) -> None:
        """Execute the agent and populate the widget state.

        Without a configured agent the widget simply stops loading.
        """
        if not self.agent_class:
            self.loading = False
            return

        agent = resolve_agent(self.agent_class)

        builder = type(self).context_builder_callback
        if builder is not None:
            context = builder()
            if inspect.isawaitable(context):
                context = await context
        else:
            context = AgentContext.empty()

        logger.debug(f"Widget {type(self).__name__} running '{agent.agent_class().__name__}'")
        result = await RunAgentAction().execute(agent, context)
        self.apply_result(result)

    def apply_result(self, result: AgentResult) -> None:
        self.response = result.text
        self.loading = False

        if result.is_structured():
            self.is_structured = True
            self.structured_data = dict(result.structured or {})

    def get_view_data(self) -> dict[str, Any]:
        return {
            "loading": self.loading,
            "response": self.response,
            "is_structured": self.is_structured,
            "structured_data": self.structured_data,
        }
