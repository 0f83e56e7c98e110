"""Panel plugin registering the AI components and assets.

@public

Add the plugin to a panel to make the response modal component and the
stylesheet available there:

    >>> panel = Panel(id="admin").plugins([PanelAiActionPlugin.make()])

Registration happens per panel, so only panels that opt in get them.
"""

from pathlib import Path
from typing import Self

from panel_ai_action.components import AiResponseModal
from panel_ai_action.logging import get_pipeline_logger
from panel_ai_action.panel import Css, Panel, Plugin

__all__ = ["PanelAiActionPlugin"]

logger = get_pipeline_logger(__name__)

PLUGIN_ID = "panel-ai-action"
RESPONSE_MODAL_COMPONENT = f"{PLUGIN_ID}.ai-response-modal"
STYLESHEET = Path(__file__).parent / "static" / "panel-ai-action.css"


class PanelAiActionPlugin(Plugin):
    """Registers AiResponseModal and the plugin stylesheet on a panel.

    @public
    """

    @classmethod
    def make(cls) -> Self:
        return cls()

    def get_id(self) -> str:
        return PLUGIN_ID

    def register(self, panel: Panel) -> None:
        panel.component(RESPONSE_MODAL_COMPONENT, AiResponseModal)
        panel.register_assets([Css(PLUGIN_ID, STYLESHEET)])
        logger.debug(f"Registered {PLUGIN_ID} on panel '{panel.id}'")

    def boot(self, panel: Panel) -> None:
        """Reserved for boot-time hooks."""
