import sys
from abc import ABC, abstractmethod
from typing import Any, Dict

from loguru import logger


class BaseLogger(ABC):
    """Abstract base class for loggers.

    Every event goes through emit(); subclasses decide how it is rendered.
    Output is written to stderr so command output on stdout stays clean.
    """

    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level
        self.logger.configure(
            handlers=[{"sink": sys.stderr, "level": log_level, **self.handler_options()}]
        )

    @abstractmethod
    def handler_options(self) -> Dict[str, Any]:
        """Loguru handler settings other than sink and level."""
        pass

    @abstractmethod
    def emit(self, level: str, message: str, **fields: Any):
        """Write one event. fields always carries the event type."""
        pass

    def log_source(self, kind: str, target: str):
        """Log the start of a data source resolution."""
        self.emit("INFO", f"Resolving {kind} source: {target}", type="source", kind=kind, target=target)

    def log_status(self, status_code: int):
        """Log a response status code."""
        self.emit("INFO", f"Status: {status_code}", type="status", code=status_code)

    def log_fallback(self, target: str, reason: str):
        """Log that synthesized data replaced a failed fetch."""
        self.emit(
            "WARNING",
            f"Using synthesized data for {target}: {reason}",
            type="fallback", target=target, reason=reason
        )

    def log_error(self, message: str):
        self.emit("ERROR", message, type="error")

    def log_warning(self, message: str):
        self.emit("WARNING", message, type="warning")

    def log_info(self, message: str):
        self.emit("INFO", message, type="info")

    def log_debug(self, message: str):
        self.emit("DEBUG", message, type="debug")
