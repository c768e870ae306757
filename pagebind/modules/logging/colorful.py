from typing import Any, Dict

import click

from .base import BaseLogger

STYLES: Dict[str, Dict[str, Any]] = {
    "source": {"fg": "cyan", "bold": True},
    "fallback": {"fg": "magenta"},
    "error": {"fg": "red", "bold": True},
    "warning": {"fg": "yellow", "bold": True},
    "info": {"fg": "white"},
    "debug": {"fg": "blue"},
}


def status_color(status_code: int) -> str:
    if status_code >= 500:
        return "red"
    if status_code >= 400:
        return "yellow"
    if status_code >= 300:
        return "blue"
    if status_code >= 200:
        return "green"
    return "white"


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""

    def handler_options(self) -> Dict[str, Any]:
        return {
            "colorize": True,
            "format": "<cyan>{time:HH:mm:ss.SSS}</cyan> | <level>{level: <8}</level> | {message}",
        }

    def emit(self, level: str, message: str, **fields: Any):
        if fields.get("type") == "status":
            style = {"fg": status_color(fields["code"]), "bold": True}
        else:
            style = STYLES.get(fields.get("type"), {})
        self.logger.log(level, click.style(message, **style))
