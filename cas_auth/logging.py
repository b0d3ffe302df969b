"""structlog adapters for the logging functions taken by ``CasStrategy``."""

from typing import Any

import structlog

from .models import DebugLogger, ErrorLogger


def structlog_loggers(logger: Any = None) -> tuple[ErrorLogger, DebugLogger]:
    """Build the error and debug logging functions taken by ``CasStrategy``.

    Args:
        logger: structlog logger to write to. Defaults to one named ``cas_auth``.

    Returns:
        ``(error_logger, debug_logger)``
    """
    log = logger if logger is not None else structlog.get_logger("cas_auth")

    def error_logger(message: str, error: Any) -> None:
        log.error(message, error=str(error), error_type=type(error).__name__)

    def debug_logger(message: str) -> None:
        log.debug(message)

    return error_logger, debug_logger
