"""Bridge orchestration: dispatch loop plus interrupt handling."""

from .core import IRCBridge  # noqa: F401
from .signal_handler import SignalHandler  # noqa: F401

__all__ = ["IRCBridge", "SignalHandler"]
