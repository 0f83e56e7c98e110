"""View rendering for panel-ai-action.

@public

Views are Jinja2 templates shipped in panel_ai_action/templates. The
result-rendering contract lives in render_result(): given a completed
agent result it decides, at render time, whether to show a definition list
(structured output) or plain/markdown text, and whether to add the
copy-to-clipboard button and the token usage footer.
"""

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, TemplateError, TemplateNotFound

from panel_ai_action.exceptions import ViewNotFoundError, ViewRenderError
from panel_ai_action.logging import get_pipeline_logger
from panel_ai_action.settings import settings

__all__ = ["get_environment", "headline", "render_result", "render_view"]

logger = get_pipeline_logger(__name__)

TEMPLATE_SUFFIX = ".html.jinja2"

_WORD_START = re.compile(r"(^|\s)(\S)")


def headline(key: Any) -> str:
    """Turn a structured-output key into a label: "risk_score" -> "Risk Score".

    Underscores become spaces and every word is capitalised; other
    whitespace is kept as-is.
    """
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), str(key).replace("_", " "))


def _list_items(value: Any) -> list[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    return list(value)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple, Mapping))


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Jinja2 environment loading the package templates, autoescape on."""
    env = Environment(
        loader=PackageLoader("panel_ai_action", "templates"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["headline"] = headline
    env.filters["list_items"] = _list_items
    env.tests["list"] = _is_list
    env.globals["settings"] = settings
    return env


def render_view(name: str, **context: Any) -> str:
    """Render a package view by name, e.g. "components/streaming-text".

    Raises:
        ViewNotFoundError: If the template does not exist
        ViewRenderError: If rendering fails
    """
    template_name = name if name.endswith(TEMPLATE_SUFFIX) else f"{name}{TEMPLATE_SUFFIX}"
    env = get_environment()

    try:
        template = env.get_template(template_name)
    except TemplateNotFound as e:
        raise ViewNotFoundError(f"View '{name}' not found in panel_ai_action/templates") from e

    try:
        return template.render(**context)
    except TemplateError as e:
        logger.warning(f"Failed to render view '{name}': {e}")
        raise ViewRenderError(f"Failed to render view '{name}': {e}") from e


def render_result(
    result: Any,
    *,
    complete: bool = True,
    show_usage: bool | None = None,
    allow_copy: bool | None = None,
) -> str:
    """Render a completed agent result the way the response modal does.

    Args:
        result: An AgentResult (or any object exposing text, structured,
                input_tokens, output_tokens and is_structured()).
        complete: False while text is still streaming; shows the cursor
                  and hides the copy button and usage footer.
        show_usage: Render the token footer. Defaults to settings.show_usage.
        allow_copy: Render the copy button. Defaults to settings.allow_copy.

    Returns:
        HTML markup.
    """
    return render_view(
        "agent-response-modal",
        loading=False,
        complete=complete,
        response=result.text,
        is_structured=result.is_structured(),
        structured_data=result.structured,
        input_tokens=result.input_tokens,
        output_tokens=result.output_tokens,
        show_usage=settings.show_usage if show_usage is None else show_usage,
        allow_copy=settings.allow_copy if allow_copy is None else allow_copy,
    )
