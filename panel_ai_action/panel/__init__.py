"""Panel component model the AI components are built on."""

from .components import Action, BulkAction, Entry, Widget
from .panel import Css, Panel, Plugin

__all__ = [
    "Action",
    "BulkAction",
    "Css",
    "Entry",
    "Panel",
    "Plugin",
    "Widget",
]
