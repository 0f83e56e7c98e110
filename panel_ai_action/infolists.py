"""Infolist entry rendering persisted agent results.

@public

AgentResultEntry reads a column previously written by persist_result_to()
and detects whether it holds a JSON-encoded structured result or plain
text, rendering each with the matching partial.

Example:
    >>> AgentResultEntry.make("ai_summary").markdown().refresh_action(SummaryAgent).record(post)
"""

import json
from typing import Any, ClassVar, Self

import markdown as markdown_lib

from panel_ai_action.actions import AiAction
from panel_ai_action.agents import AgentAction
from panel_ai_action.panel import Entry
from panel_ai_action.rendering import render_view

__all__ = ["AgentResultEntry"]


class AgentResultEntry(Entry):
    """Entry showing a persisted agent result as structured output or text.

    @public
    """

    view: ClassVar[str] = "infolists/agent-result-entry"

    def __init__(self, name: str):
        super().__init__(name)
        self._render_markdown = False
        self._show_refresh_action = False
        self._refresh_agent: type[AgentAction] | str | None = None

    def markdown(self, condition: bool = True) -> Self:
        """Convert the stored text to HTML with the markdown library."""
        self._render_markdown = condition
        return self

    def with_refresh_action(self, condition: bool = True) -> Self:
        """Embed an AiAction button that re-runs the agent and overwrites the column."""
        self._show_refresh_action = condition
        return self

    def refresh_action(self, agent_class: type[AgentAction] | str) -> Self:
        """Embed a refresh button running agent_class against the entry's record."""
        self._refresh_agent = agent_class
        self._show_refresh_action = True
        return self

    def is_markdown(self) -> bool:
        return self._render_markdown

    def has_refresh_action(self) -> bool:
        return self._show_refresh_action

    def get_refresh_action(self) -> AiAction | None:
        """The embedded refresh action, persisting back to this entry's column."""
        if not self._show_refresh_action or self._refresh_agent is None:
            return None

        return (
            AiAction.make(f"{self.name}-refresh")
            .label("Refresh")
            .icon("heroicon-o-arrow-path")
            .agent(self._refresh_agent)
            .persist_result_to(self.name)
            .record(self.get_record())
        )

    def is_structured(self) -> bool:
        """Whether the state is a JSON-encoded structured result (a JSON object)."""
        state = self.get_state()

        if not isinstance(state, str) or state == "":
            return False

        try:
            json.loads(state)
        except (ValueError, RecursionError):
            return False

        return state.lstrip().startswith("{")

    def get_structured_data(self) -> dict[str, Any]:
        """Decoded structured result; empty when the state is not a JSON object."""
        state = self.get_state()

        if not isinstance(state, str):
            return {}

        try:
            data = json.loads(state)
        except (ValueError, RecursionError):
            return {}

        return data if isinstance(data, dict) else {}

    def get_text_value(self) -> str:
        """The stored text, converted to HTML when markdown is enabled."""
        state = self.get_state()
        text = "" if state is None else str(state)

        if self._render_markdown:
            return markdown_lib.markdown(text)

        return text

    def render(self) -> str:
        return render_view(self.view, entry=self, refresh_action=self.get_refresh_action())
