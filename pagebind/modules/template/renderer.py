import json
import re
from typing import Any, Dict, List, Optional

from ..scope.stack import MISSING, DataScopeStack

PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}")


def to_text(value: Any) -> str:
    """Coerce a looked-up value to the text that replaces its placeholder."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def has_placeholders(text: Any) -> bool:
    return isinstance(text, str) and PLACEHOLDER.search(text) is not None


def extract_paths(text: Any) -> List[str]:
    """Dotted paths of every placeholder, in order of appearance."""
    if not isinstance(text, str):
        return []
    return [match.strip() for match in PLACEHOLDER.findall(text)]


def extract_variables(text: Any) -> List[str]:
    """Distinct scope names the placeholders refer to."""
    names: List[str] = []
    for path in extract_paths(text):
        name = path.split(".", 1)[0]
        if name not in names:
            names.append(name)
    return names


class TemplateRenderer:
    """Resolves {{dotted.path}} placeholders against a data scope.

    Missing values render as empty strings: a broken placeholder never
    breaks the page and never shows up literally in the output.
    """

    def render(self, template: Optional[str], scope: DataScopeStack) -> str:
        """
        Render a template string against the given scope.

        Args:
            template: The template string to render
            scope: The scope stack of the current render path

        Returns:
            str: The rendered string
        """
        if not template:
            return ""
        if not isinstance(template, str):
            return to_text(template)
        if "{{" not in template:
            return template

        return PLACEHOLDER.sub(lambda match: to_text(scope.lookup(match.group(1).strip())), template)

    def render_value(self, value: Any, scope: DataScopeStack) -> Any:
        """Render strings anywhere inside nested dicts and lists; other values pass through."""
        if isinstance(value, str):
            return self.render(value, scope)
        if isinstance(value, dict):
            return {key: self.render_value(item, scope) for key, item in value.items()}
        if isinstance(value, list):
            return [self.render_value(item, scope) for item in value]
        return value

    def render_dict(self, data: Optional[Dict[str, Any]], scope: DataScopeStack) -> Dict[str, Any]:
        """Render every string in a mapping such as request parameters or a where clause."""
        return self.render_value(data or {}, scope)


def render_template(text: Optional[str], scope: DataScopeStack) -> str:
    """Render placeholders in text against scope."""
    return TemplateRenderer().render(text, scope)
