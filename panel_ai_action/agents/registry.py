"""Agent backend registry.

Only one backend can be registered at a time. Every agent run from every
panel component goes through it.

For testing, use reset_agent_backend() or the temporary_backend()
context manager to safely swap backends.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from panel_ai_action.exceptions import BackendNotRegisteredError

from ._registration import Registration
from .base import AgentBackend

__all__ = [
    "get_agent_backend",
    "register_agent_backend",
    "reset_agent_backend",
    "temporary_backend",
]


def _not_registered() -> BackendNotRegisteredError:
    return BackendNotRegisteredError(
        "No agent backend registered.\n\n"
        "To run agents, install an agent backend package and register it with "
        "register_agent_backend() at startup."
    )


_backends: Registration[AgentBackend] = Registration("Agent backend", "reset_agent_backend", on_missing=_not_registered)


def register_agent_backend(backend: AgentBackend) -> None:
    """Register the agent backend.

    Call once at application startup. Raises if a backend is already
    registered; use reset_agent_backend() first to replace it.

    Raises:
        RuntimeError: If a backend is already registered
    """
    _backends.register(backend)


def get_agent_backend() -> AgentBackend:
    """Get the registered agent backend.

    Raises:
        BackendNotRegisteredError: If no backend is registered
    """
    return _backends.get()


def reset_agent_backend() -> None:
    """Reset the backend registration. Primarily for tests."""
    _backends.reset()


@contextmanager
def temporary_backend(backend: AgentBackend) -> Iterator[AgentBackend]:
    """Temporarily register a backend, restoring the previous one on exit."""
    with _backends.temporary(backend):
        yield backend
