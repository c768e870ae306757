from typing import Any, Dict

from .base import BaseLogger


class JsonLogger(BaseLogger):
    """Logger that outputs one JSON record per event for machine parsing.

    The structured fields of an event (type, kind, target, code, reason)
    land in the record's "extra" mapping.
    """

    def handler_options(self) -> Dict[str, Any]:
        return {"serialize": True, "format": "{message}"}

    def emit(self, level: str, message: str, **fields: Any):
        self.logger.bind(**fields).log(level, message)
