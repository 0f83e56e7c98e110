"""Exception hierarchy for panel-ai-action.

All exceptions raised by the package inherit from PanelAiActionError, so
callers can catch the whole family in one place.
"""


class PanelAiActionError(Exception):
    """Base exception for all panel-ai-action errors."""


class AgentNotConfiguredError(PanelAiActionError):
    """Raised when a component is run before an agent has been configured."""


class AgentResolutionError(PanelAiActionError):
    """Raised when an agent reference cannot be imported or instantiated."""


class AgentExecutionError(PanelAiActionError):
    """Raised when the agent backend fails while executing an agent."""


class BackendNotRegisteredError(PanelAiActionError):
    """Raised when an agent is executed and no agent backend is registered."""


class RecordNotFoundError(PanelAiActionError):
    """Raised when the record for a response component cannot be found."""


class LockedPropertyError(PanelAiActionError):
    """Raised when a locked component property is written after mount."""


class ViewError(PanelAiActionError):
    """Base exception for view template errors."""


class ViewNotFoundError(ViewError):
    """Raised when a view template is not found in the package templates."""


class ViewRenderError(ViewError):
    """Raised when Jinja2 template rendering fails."""
