"""Per-action provider and model override."""

from .base import AgentAction, AgentContext

__all__ = ["ProviderOverrideAgent"]


class ProviderOverrideAgent(AgentAction):
    """Forwarding proxy that substitutes provider() and model().

    Instructions and prompt come from the wrapped agent unchanged.
    Fakes and logs still identify the run by the wrapped agent's class.
    """

    def __init__(self, inner: AgentAction, provider: str, model: str):
        self.inner = inner
        self._provider = provider
        self._model = model

    def instructions(self, context: AgentContext) -> str:
        return self.inner.instructions(context)

    def prompt(self, context: AgentContext) -> str:
        return self.inner.prompt(context)

    def provider(self) -> str:
        return self._provider

    def model(self) -> str:
        return self._model

    def agent_class(self) -> type[AgentAction]:
        return self.inner.agent_class()

    def __repr__(self) -> str:
        return f"ProviderOverrideAgent({self.inner!r}, provider={self._provider!r}, model={self._model!r})"
