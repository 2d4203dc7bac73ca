"""
placeholders.py
---------------
Expands `{{key}}` and legacy `${key}` placeholders against the configuration
of a job. The `{{key}}` pass is a logic-less mustache render without HTML
escaping; the legacy pass then runs on its output, so a `${key}` produced by
the first pass is expanded too.
"""
import json
from typing import Any, Mapping, Optional

import pystache
from pystache.parser import ParsingError


class TemplateError(ValueError):
    pass


def to_text(value: Any) -> str:
    """Canonical textual form of a configuration value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


class PlaceholderRenderer(pystache.Renderer):
    """Missing keys render empty, values are written as canonical text."""

    def __init__(self):
        super().__init__(escape=lambda text: text, missing_tags="ignore")

    def str_coerce(self, val):
        return to_text(val)


_renderer = PlaceholderRenderer()


def expand(template: Optional[str], context: Mapping[str, Any]) -> Optional[str]:
    if template is None:
        return None
    try:
        rendered = _renderer.render(template, dict(context))
    except ParsingError as e:
        raise TemplateError(f"Invalid placeholder template {template!r}: {e}") from e
    return expand_legacy(rendered, context)


def expand_legacy(template: str, context: Mapping[str, Any]) -> str:
    # Keys missing from the context are left as they are
    for key, value in context.items():
        token = "${" + key + "}"
        if token in template:
            template = template.replace(token, to_text(value))
    return template
