from typing import Dict, Type

from .base import BaseLogger
from .colorful import ColorfulLogger
from .plain import PlainLogger
from .json import JsonLogger

LOGGERS: Dict[str, Type[BaseLogger]] = {
    "colorful": ColorfulLogger,
    "plain": PlainLogger,
    "json": JsonLogger,
}


def create_logger(output_type: str, log_level: str = "INFO") -> BaseLogger:
    """Create the logger for an output type.

    Args:
        output_type: colorful, plain or json (case-insensitive)
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger_class = LOGGERS.get(output_type.lower())
    if logger_class is None:
        raise ValueError(f"Invalid output type: {output_type}. Must be one of: {', '.join(LOGGERS)}")
    return logger_class(log_level)


__all__ = ['BaseLogger', 'ColorfulLogger', 'PlainLogger', 'JsonLogger', 'LOGGERS', 'create_logger']
