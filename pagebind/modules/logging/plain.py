from typing import Any, Dict

from .base import BaseLogger


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for CI/file output."""

    def handler_options(self) -> Dict[str, Any]:
        return {
            "colorize": False,
            "format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
        }

    def emit(self, level: str, message: str, **fields: Any):
        self.logger.log(level, message)
