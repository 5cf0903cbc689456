"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the bridge's failure policy.
Raw asyncio / aiohttp / JSON errors are wrapped at the component boundary
that observes them.

Classes:
  InternalError        – Base for all internal errors.
  ConfigurationError   – Missing or invalid startup configuration.
  NetworkError         – Transport/IO issues.
  IRCConnectionError   – Could not open the IRC stream.
  IRCReadError         – Inbound stream failed or reached EOF.
  ParsingError         – A protocol line or payload could not be handled.
  PublishError         – The publish collaborator gave up on a payload.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigurationError(InternalError):
    """Raised when required configuration is missing or invalid.

    Always raised before any network activity takes place.
    """


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class IRCConnectionError(NetworkError):
    """Raised when the IRC server cannot be reached.

    Args:
        target: ``host:port`` that was dialled.
        cause: The underlying exception.
    """

    def __init__(self, target: str, cause: BaseException | None = None) -> None:
        super().__init__(
            f"Unable to connect to {target}: {cause}",
            data={"target": target, "cause": cause},
        )
        self.target = target
        self.cause = cause


class IRCReadError(NetworkError):
    """Raised when reading the next line fails or the stream is closed."""

    def __init__(self, message: str, *, partial: str = "") -> None:
        super().__init__(message, data={"partial": partial})
        self.partial = partial


class ParsingError(InternalError):
    """Exception raised for protocol line or payload handling errors."""


class PublishError(InternalError):
    """Raised by the publisher once it stops trying to deliver a payload.

    Attributes:
        status: HTTP status of the last response, if one was received.
    """

    def __init__(
        self, message: str, *, status: int | None = None, attempts: int = 1
    ) -> None:
        super().__init__(message, data={"status": status, "attempts": attempts})
        self.status = status
        self.attempts = attempts


__all__ = [
    "InternalError",
    "ConfigurationError",
    "NetworkError",
    "IRCConnectionError",
    "IRCReadError",
    "ParsingError",
    "PublishError",
]
