"""AI actions for panel pages, resources and tables.

@public

AiAction runs an agent against the current record from a modal action;
AiBulkAction runs it against every selected table record. Both take the
fluent configuration of HasAgentConfiguration.

Example:
    >>> AiAction.make("summarise") \\
    ...     .agent(SummaryAgent) \\
    ...     .with_user_instruction("What should the summary focus on?") \\
    ...     .persist_result_to("ai_summary")
"""

from typing import Any, Self

from panel_ai_action.components import AiResponseModal
from panel_ai_action.concerns import HasAgentConfiguration, HasStreamingModal, agent_path
from panel_ai_action.panel import Action, BulkAction
from panel_ai_action.persistence import record_key
from panel_ai_action.rendering import render_view
from panel_ai_action.settings import settings

__all__ = ["AiAction", "AiBulkAction"]

ICON = "heroicon-o-sparkles"
COLOR = "primary"


class AiAction(HasAgentConfiguration, HasStreamingModal, Action):
    """Modal action that runs an agent and shows its response.

    @public
    """

    @classmethod
    def make(cls, name: str | None = None) -> Self:
        """Create an AiAction with the sparkles icon, primary color, configured
        label and modal width, the response modal content and run_agent() as
        the action callback."""
        static = super().make(name or "ai")

        static.icon(ICON).color(COLOR).label(settings.default_label).modal_width(settings.modal_size).modal_content(
            static.render_modal_content
        ).action(static.run_agent)

        return static

    def render_modal_content(self) -> str:
        record = self.get_record()
        return render_view(
            "ai-action-modal-content",
            agent_class=agent_path(self.agent_class),
            streaming=self.streaming,
            show_user_instruction=self.show_user_instruction,
            user_instruction_placeholder=self.user_instruction_placeholder,
            record_id=record_key(record),
            record_class=f"{type(record).__module__}.{type(record).__qualname__}" if record is not None else None,
        )

    async def mount_response_modal(self) -> AiResponseModal:
        """Mount a response modal for this action's record and run the agent in it."""
        modal = AiResponseModal(action=self)
        await modal.mount(
            agent_class=self.agent_class,
            streaming=self.streaming,
            show_user_instruction=self.show_user_instruction,
            user_instruction_placeholder=self.user_instruction_placeholder,
            record=self.get_record(),
            user_instruction=self.get_mounted_action_data().get("user_instruction") if self.show_user_instruction else None,
        )
        return modal


class AiBulkAction(HasAgentConfiguration, HasStreamingModal, BulkAction):
    """Bulk action that runs an agent against each selected record.

    @public

    Queued: one RunAgentJob is dispatched per selected record.
    Sync: records are processed in turn and results optionally persisted.
    """

    @classmethod
    def make(cls, name: str | None = None) -> Self:
        static = super().make(name or "ai-bulk")

        static.icon(ICON).color(COLOR).label(settings.default_label).action(static.run_agent)

        return static

    def get_selected_keys(self) -> list[Any]:
        return [record_key(record) for record in self.get_records()]
