"""Agent execution contracts for panel components.

panel-ai-action defines the interfaces; a concrete backend (installed
separately) performs prompt dispatch against the AI providers.

Quick Start:
    1. Register a backend once, at startup:

        from your_backend import MyBackend
        from panel_ai_action.agents import register_agent_backend

        register_agent_backend(MyBackend())

    2. Describe an agent:

        class SummaryAgent(AgentAction):
            def instructions(self, context):
                return "Summarise the record."

            def prompt(self, context):
                return context.record.body

    3. Attach it to a panel component:

        AiAction.make("summarise").agent(SummaryAgent).persist_result_to("summary")
"""

from .base import ActionMode, AgentAction, AgentBackend, AgentContext, AgentResult
from .fakes import FakeAgentAction
from .jobs import RunAgentJob
from .override import ProviderOverrideAgent
from .queue import (
    JobQueue,
    PrefectJobQueue,
    dispatch,
    get_job_queue,
    register_job_queue,
    reset_job_queue,
    serve_agent_jobs,
    temporary_queue,
)
from .registry import (
    get_agent_backend,
    register_agent_backend,
    reset_agent_backend,
    temporary_backend,
)
from .runner import RunAgentAction

__all__ = [
    # Core types
    "ActionMode",
    "AgentAction",
    "AgentBackend",
    "AgentContext",
    "AgentResult",
    "ProviderOverrideAgent",
    # Execution
    "RunAgentAction",
    "RunAgentJob",
    # Backend registry
    "get_agent_backend",
    "register_agent_backend",
    "reset_agent_backend",
    "temporary_backend",
    # Queues
    "JobQueue",
    "PrefectJobQueue",
    "dispatch",
    "get_job_queue",
    "register_job_queue",
    "reset_job_queue",
    "serve_agent_jobs",
    "temporary_queue",
    # Testing
    "FakeAgentAction",
]
