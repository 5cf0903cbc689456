from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    InternalError,
    NetworkError,
    ParsingError,
    PublishError,
)


def error_category(error: BaseException) -> str:
    """Map an exception onto the category used for structured logging."""
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, PublishError):
        return "publish"
    if isinstance(error, ParsingError | ValueError | TypeError):
        return "parsing"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update({k: v for k, v in error.data.items() if v is not None})
    if context:
        merged.update(context)
    log_structured_error(
        error_type=error_category(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
