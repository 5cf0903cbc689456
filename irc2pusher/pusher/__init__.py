"""Pusher publishing package."""

from .client import PusherClient, SessionBackend  # noqa: F401
from .protocols import PublisherProtocol  # noqa: F401

__all__ = ["PusherClient", "PublisherProtocol", "SessionBackend"]
