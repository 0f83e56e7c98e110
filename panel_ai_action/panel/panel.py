"""Panels, plugins and registered assets."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

__all__ = ["Css", "Panel", "Plugin"]


@dataclass(frozen=True)
class Css:
    """A stylesheet asset served by a panel."""

    name: str
    path: Path


class Plugin(ABC):
    """Opt-in extension registered on a panel."""

    @abstractmethod
    def get_id(self) -> str:
        """Unique plugin identifier."""

    @abstractmethod
    def register(self, panel: "Panel") -> None:
        """Register components and assets with the panel."""

    def boot(self, panel: "Panel") -> None:
        """Boot-time hook, run after every plugin of the panel is registered."""


@dataclass
class Panel:
    """An admin panel: its id, plugins, components and assets."""

    id: str
    components: dict[str, type[Any]] = field(default_factory=dict)
    assets: dict[str, Css] = field(default_factory=dict)
    _plugins: dict[str, Plugin] = field(default_factory=dict, repr=False)

    def plugins(self, plugins: list[Plugin]) -> Self:
        for plugin in plugins:
            self._plugins[plugin.get_id()] = plugin
            plugin.register(self)
        for plugin in plugins:
            plugin.boot(self)
        return self

    def get_plugin(self, plugin_id: str) -> Plugin:
        return self._plugins[plugin_id]

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def component(self, name: str, component_class: type[Any]) -> None:
        self.components[name] = component_class

    def register_assets(self, assets: list[Css]) -> None:
        for asset in assets:
            self.assets[asset.name] = asset
