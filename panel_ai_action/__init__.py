"""panel-ai-action - run AI agents from admin panel actions, widgets and entries.

@public

panel-ai-action wires an agent-execution contract into panel components:

    - **AiAction / AiBulkAction**: fluent configuration of which agent runs
      and how (streaming, queued, user instruction, persistence column,
      provider override, context enrichment)
    - **AiResponseModal**: reactive component driving the agent call and
      rendering streamed or complete output
    - **AiActionWidget**: dashboard card rendering an agent result inline
    - **AgentResultEntry**: infolist entry rendering persisted results
    - **PanelAiActionPlugin**: registers the component and assets on a panel

Agents are executed by a registered AgentBackend; this package does not
talk to AI providers itself.

Quick Start:
    >>> from panel_ai_action import AiAction, AgentAction
    >>>
    >>> class SummaryAgent(AgentAction):
    ...     def instructions(self, context):
    ...         return "Summarise the record."
    ...     def prompt(self, context):
    ...         return context.record.body
    >>>
    >>> action = AiAction.make("summarise").agent(SummaryAgent).persist_result_to("ai_summary")
    >>> await action.record(post).call()

Environment Variables:
    - PANEL_AI_ACTION_DEFAULT_LABEL, PANEL_AI_ACTION_SHOW_USAGE,
      PANEL_AI_ACTION_MODAL_SIZE, PANEL_AI_ACTION_ALLOW_COPY
    - PANEL_AI_ACTION_STREAM_CHUNK_SIZE, PANEL_AI_ACTION_DEFAULT_QUEUE
"""

from .actions import AiAction, AiBulkAction
from .agents import (
    ActionMode,
    AgentAction,
    AgentBackend,
    AgentContext,
    AgentResult,
    RunAgentAction,
    RunAgentJob,
    register_agent_backend,
)
from .components import AiResponseModal
from .exceptions import PanelAiActionError
from .infolists import AgentResultEntry
from .logging import get_pipeline_logger, setup_logging
from .plugin import PanelAiActionPlugin
from .rendering import render_result, render_view
from .settings import settings
from .widgets import AiActionWidget

__version__ = "0.1.0"

__all__ = [
    # Config/Settings
    "settings",
    # Logging
    "get_pipeline_logger",
    "setup_logging",
    # Errors
    "PanelAiActionError",
    # Agents
    "ActionMode",
    "AgentAction",
    "AgentBackend",
    "AgentContext",
    "AgentResult",
    "RunAgentAction",
    "RunAgentJob",
    "register_agent_backend",
    # Components
    "AiAction",
    "AiBulkAction",
    "AiActionWidget",
    "AiResponseModal",
    "AgentResultEntry",
    "PanelAiActionPlugin",
    # Rendering
    "render_result",
    "render_view",
]
