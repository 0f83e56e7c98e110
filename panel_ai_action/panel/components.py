"""Panel component model: actions, bulk actions, widgets and entries.

These are the seams the AI components plug into. Each component is built
with a make() factory and configured through fluent setters that return
the component itself.
"""

import inspect
from collections.abc import Callable, Iterable
from typing import Any, ClassVar, Self

from panel_ai_action.rendering import render_view

__all__ = ["Action", "BulkAction", "Entry", "Widget"]


async def _evaluate(callback: Callable[..., Any], *args: Any) -> Any:
    value = callback(*args)
    if inspect.isawaitable(value):
        value = await value
    return value


class Action:
    """A button that optionally opens a modal and runs a callback.

    Example:
        >>> action = Action.make("publish").label("Publish").action(publish_post)
        >>> await action.record(post).call()
    """

    def __init__(self, name: str):
        self.name = name
        self._label: str | None = None
        self._icon: str | None = None
        self._color: str | None = None
        self._modal_width: str | None = None
        self._modal_content: Callable[[], str] | None = None
        self._action: Callable[[], Any] | None = None
        self._record: Any = None
        self._mounted_data: dict[str, Any] = {}

    @classmethod
    def make(cls, name: str) -> Self:
        return cls(name)

    def label(self, label: str) -> Self:
        self._label = label
        return self

    def icon(self, icon: str) -> Self:
        self._icon = icon
        return self

    def color(self, color: str) -> Self:
        self._color = color
        return self

    def modal_width(self, width: str) -> Self:
        self._modal_width = width
        return self

    def modal_content(self, content: Callable[[], str]) -> Self:
        self._modal_content = content
        return self

    def action(self, callback: Callable[[], Any]) -> Self:
        self._action = callback
        return self

    def record(self, record: Any) -> Self:
        self._record = record
        return self

    def get_label(self) -> str:
        return self._label if self._label is not None else self.name.replace("-", " ").replace("_", " ").capitalize()

    def get_icon(self) -> str | None:
        return self._icon

    def get_color(self) -> str | None:
        return self._color

    def get_modal_width(self) -> str | None:
        return self._modal_width

    def get_record(self) -> Any:
        return self._record

    def get_modal_content(self) -> str | None:
        return self._modal_content() if self._modal_content is not None else None

    def fill_form(self, data: dict[str, Any]) -> Self:
        self._mounted_data = dict(data)
        return self

    def get_mounted_action_data(self) -> dict[str, Any]:
        return self._mounted_data

    async def call(self, data: dict[str, Any] | None = None) -> Any:
        """Submit the action: mount the form data, then run the callback."""
        if data is not None:
            self.fill_form(data)
        if self._action is None:
            return None
        return await _evaluate(self._action)


class BulkAction(Action):
    """An action applied to every selected table record."""

    def __init__(self, name: str):
        super().__init__(name)
        self._records: list[Any] = []

    def records(self, records: Iterable[Any]) -> Self:
        self._records = list(records)
        return self

    def get_records(self) -> list[Any]:
        return self._records


class Widget:
    """A dashboard card rendered from a view template."""

    view: ClassVar[str] = ""
    column_span: ClassVar[int | str] = 1

    def get_view_data(self) -> dict[str, Any]:
        return {}

    def get_column_span(self) -> int | str:
        return self.column_span

    def render(self) -> str:
        return render_view(self.view, widget=self, **self.get_view_data())


class Entry:
    """An infolist entry displaying one attribute of a record."""

    view: ClassVar[str] = ""

    def __init__(self, name: str):
        self.name = name
        self._label: str | None = None
        self._record: Any = None
        self._state_using: Callable[[Any], Any] | None = None

    @classmethod
    def make(cls, name: str) -> Self:
        return cls(name)

    def label(self, label: str) -> Self:
        self._label = label
        return self

    def record(self, record: Any) -> Self:
        self._record = record
        return self

    def state(self, callback: Callable[[Any], Any]) -> Self:
        """Compute the state from the record instead of reading the attribute."""
        self._state_using = callback
        return self

    def get_label(self) -> str:
        return self._label if self._label is not None else self.name.replace("_", " ").capitalize()

    def get_record(self) -> Any:
        return self._record

    def get_state(self) -> Any:
        if self._state_using is not None:
            return self._state_using(self._record)
        if self._record is None:
            return None
        if isinstance(self._record, dict):
            return self._record.get(self.name)
        return getattr(self._record, self.name, None)

    def render(self) -> str:
        return render_view(self.view, entry=self)
