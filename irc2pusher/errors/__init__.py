"""Error hierarchy and logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigurationError,
    InternalError,
    IRCConnectionError,
    IRCReadError,
    NetworkError,
    ParsingError,
    PublishError,
)

__all__ = [
    "ConfigurationError",
    "InternalError",
    "IRCConnectionError",
    "IRCReadError",
    "NetworkError",
    "ParsingError",
    "PublishError",
    "log_error",
]
