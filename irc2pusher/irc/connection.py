"""IRC session: owns the duplex stream, registration and line I/O."""

from __future__ import annotations

import asyncio
import logging

from ..config.model import ConnectionConfig
from ..constants import CHANNEL_PREFIX, LINE_TERMINATOR
from ..errors.internal import IRCConnectionError, IRCReadError
from ..logs.logger import logger
from .models import ConnectionState
from .parser import ping_argument


def normalize_channel(name: str) -> str:
    name = name.strip()
    return name if name.startswith(CHANNEL_PREFIX) else f"{CHANNEL_PREFIX}{name}"


class IRCSession:  # pylint: disable=too-many-instance-attributes
    """A single live connection to an IRC server.

    The session exclusively owns its reader/writer pair. Writes go through
    one lock so the dispatch loop and the interrupt path can both emit lines.
    The stream is closed at most once.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        reader: asyncio.StreamReader | None = None,
        writer: asyncio.StreamWriter | None = None,
    ) -> None:
        self.config = config
        self.reader = reader
        self.writer = writer
        self.state = (
            ConnectionState.CONNECTING if writer is not None else ConnectionState.DISCONNECTED
        )
        self.lines_sent = 0
        self.lines_received = 0
        self._write_lock = asyncio.Lock()
        self._closed = False

    @property
    def nick(self) -> str:
        return self.config.nick

    @property
    def closed(self) -> bool:
        return self._closed

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    @classmethod
    async def connect(cls, config: ConnectionConfig) -> IRCSession:
        """Open a stream to ``config.server:config.port``.

        Raises:
            IRCConnectionError: If the connection cannot be established.
        """
        session = cls(config)
        await session.open()
        return session

    async def open(self) -> None:
        target = self.config.target
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event("irc", "connect_start", user=self.nick, target=target)
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.config.server, self.config.port),
                timeout=self.config.connect_timeout,
            )
        except (OSError, TimeoutError) as e:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.ERROR,
                user=self.nick,
                target=target,
                error=str(e) or type(e).__name__,
            )
            raise IRCConnectionError(target, e) from e
        logger.log_event("irc", "connect_success", user=self.nick, target=target)

    async def send(self, line: str) -> None:
        """Write one line to the server, best effort.

        A newline is appended unless the caller already supplied one. Failures
        are logged and otherwise ignored; a broken stream surfaces on the next
        read.
        """
        if not line.endswith(LINE_TERMINATOR):
            line = f"{line}{LINE_TERMINATOR}"
        async with self._write_lock:
            logger.log_event("irc", "send", user=self.nick, line=line.rstrip())
            if self.writer is None or self._closed:
                logger.log_event(
                    "irc",
                    "send_failed",
                    level=logging.ERROR,
                    user=self.nick,
                    error="connection is not open",
                )
                return
            try:
                self.writer.write(line.encode("utf-8"))
                await self.writer.drain()
            except (OSError, RuntimeError) as e:
                logger.log_event(
                    "irc",
                    "send_failed",
                    level=logging.ERROR,
                    user=self.nick,
                    error=str(e) or type(e).__name__,
                )
                return
            self.lines_sent += 1

    async def register(self) -> None:
        """Send USER and NICK, then join every configured channel in order."""
        self._set_state(ConnectionState.REGISTERING)
        nick = self.nick
        await self.send(f"USER {nick} 8 * :{nick}")
        await self.send(f"NICK {nick}")
        for name in self.config.channels:
            await self.join(name)
        logger.log_event(
            "irc", "registered", user=nick, count=len(self.config.channels)
        )
        self._set_state(ConnectionState.READY)

    async def join(self, name: str) -> None:
        channel = normalize_channel(name)
        logger.log_event(
            "irc", "join", level=logging.DEBUG, user=self.nick, channel_name=channel
        )
        await self.send(f"JOIN {channel}")

    async def respond_to_ping(self, line: str) -> None:
        argument = ping_argument(line)
        await self.send(f"PONG {argument}")
        logger.log_event(
            "irc", "pong", level=logging.DEBUG, user=self.nick, argument=argument
        )

    async def read_line(self) -> str:
        """Read the next line without its terminator.

        Raises:
            IRCReadError: On EOF, I/O failure, oversized line or read timeout.
        """
        if self.reader is None or self._closed:
            raise IRCReadError("connection is not open")
        try:
            data = await asyncio.wait_for(
                self.reader.readline(), timeout=self.config.read_timeout
            )
        except TimeoutError as e:
            raise IRCReadError(
                f"no data received within {self.config.read_timeout}s"
            ) from e
        except (OSError, ValueError) as e:
            raise IRCReadError(str(e) or type(e).__name__) from e
        text = data.decode("utf-8", errors="replace")
        if not text.endswith("\n"):
            raise IRCReadError("connection closed by server", partial=text)
        self.lines_received += 1
        return text.rstrip("\r\n")

    async def quit(self) -> None:
        await self.send("QUIT :")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._set_state(ConnectionState.CLOSED)
        if self.writer is not None:
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except (OSError, RuntimeError) as e:
                logger.log_event(
                    "irc",
                    "send_failed",
                    level=logging.WARNING,
                    user=self.nick,
                    error=str(e) or type(e).__name__,
                )
        logger.log_event("irc", "closed", user=self.nick)
