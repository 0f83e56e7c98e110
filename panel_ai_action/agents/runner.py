"""Agent execution entry point.

RunAgentAction is the single place where a panel component hands an agent
and its context over for execution. It's a thin wrapper around the
registered backend.
"""

import asyncio
import time

from panel_ai_action.exceptions import AgentExecutionError, PanelAiActionError
from panel_ai_action.logging import get_pipeline_logger

from .base import AgentAction, AgentContext, AgentResult
from .fakes import FakeAgentAction
from .registry import get_agent_backend

__all__ = ["RunAgentAction"]

logger = get_pipeline_logger(__name__)

# Backends are long-lived singletons, so their id() is a stable key
_validation_lock = asyncio.Lock()
_validated_backend_ids: set[int] = set()


class RunAgentAction:
    """Runs one agent against one context.

    Execution order:
    1. A faked response for the agent class wins (see FakeAgentAction).
    2. Otherwise the registered backend is validated on first use and
       receives the agent's instructions, prompt, provider and model.
    """

    async def execute(self, agent: AgentAction, context: AgentContext) -> AgentResult:
        """Execute the agent and return its result.

        Raises:
            BackendNotRegisteredError: If no backend is registered
            AgentExecutionError: If the backend fails
        """
        agent_name = agent.agent_class().__name__

        faked = FakeAgentAction.respond(agent, context)
        if faked is not None:
            logger.debug(f"Returning faked response for agent '{agent_name}'")
            return faked

        backend = get_agent_backend()
        backend_id = id(backend)

        if backend_id not in _validated_backend_ids:
            async with _validation_lock:
                if backend_id not in _validated_backend_ids:
                    await backend.validate()
                    _validated_backend_ids.add(backend_id)

        provider = agent.provider()
        model = agent.model()
        logger.info(f"Running agent '{agent_name}' via {type(backend).__name__} ({provider or 'default'}/{model or 'default'})")

        started = time.perf_counter()
        try:
            result = await backend.run(
                agent,
                context,
                instructions=agent.instructions(context),
                prompt=agent.prompt(context),
                provider=provider,
                model=model,
            )
        except PanelAiActionError:
            raise
        except Exception as e:
            logger.warning(f"Agent '{agent_name}' failed: {e}")
            raise AgentExecutionError(f"Agent '{agent_name}' failed: {e}") from e

        duration = time.perf_counter() - started
        logger.info(
            f"Agent '{agent_name}' completed in {duration:.1f}s "
            f"(input: {result.input_tokens} tokens, output: {result.output_tokens} tokens)"
        )
        return result
