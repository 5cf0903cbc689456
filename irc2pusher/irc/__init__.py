"""IRC subsystem package.

Contains the line parser, the connection session and the dispatch loop.
"""

from .connection import IRCSession, normalize_channel  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .models import ConnectionState  # noqa: F401
from .parser import (  # noqa: F401
    ChatMessage,
    is_ping,
    is_privmsg,
    parse_message,
    ping_argument,
)

__all__ = [
    "ChatMessage",
    "ConnectionState",
    "IRCDispatcher",
    "IRCSession",
    "is_ping",
    "is_privmsg",
    "normalize_channel",
    "parse_message",
    "ping_argument",
]
