"""Mixins that add AI behaviour to panel components."""

from .agent_configuration import HasAgentConfiguration, agent_path, resolve_agent, resolve_agent_class
from .streaming_modal import HasStreamingModal

__all__ = [
    "HasAgentConfiguration",
    "HasStreamingModal",
    "agent_path",
    "resolve_agent",
    "resolve_agent_class",
]
