"""IRC line parsing utilities."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass

from ..constants import PING_MARKER, PRIVMSG_MARKER
from ..errors.internal import ParsingError


@dataclass(frozen=True, slots=True)
class ChatMessage:
    nick: str
    channel: str
    message: str

    def to_payload(self) -> str:
        """Serialize to the JSON object published for each message."""
        return json.dumps(asdict(self), ensure_ascii=False)

    def to_line(self) -> str:
        """Render the canonical PRIVMSG line this record parses from."""
        return f":{self.nick}! {PRIVMSG_MARKER} {self.channel} :{self.message}"


def is_ping(line: str) -> bool:
    return PING_MARKER in line


def is_privmsg(line: str) -> bool:
    return PRIVMSG_MARKER in line


def ping_argument(line: str) -> str:
    """Return the argument of a keepalive probe.

    ``PING :server123`` and ``PING server123`` both yield ``server123``.
    """
    chunks = line.split(" ")
    if len(chunks) < 2:
        raise ParsingError(f"PING without argument: {line!r}")
    argument = chunks[1]
    return argument[1:] if argument.startswith(":") else argument


def parse_message(line: str) -> ChatMessage:
    """Split a PRIVMSG line into sender, target channel and text.

    Only defined for lines containing the PRIVMSG marker; callers filter
    with :func:`is_privmsg` first. Text that repeats the ``"<channel> :"``
    pattern is not special-cased, only the first occurrence is removed.
    """
    if PRIVMSG_MARKER not in line:
        raise ParsingError(f"Not a {PRIVMSG_MARKER} line: {line!r}")
    head, payload = line.split(PRIVMSG_MARKER, 1)
    nick = head.split("!", 1)[0].replace(":", "", 1)
    channel = payload.split(":", 1)[0].strip()
    message = payload.replace(f"{channel} :", "", 1).strip()
    return ChatMessage(nick=nick, channel=channel, message=message)
