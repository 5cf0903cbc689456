"""Line dispatch loop: read, classify, respond or forward."""

from __future__ import annotations

import logging

from ..constants import DEFAULT_PUSHER_CHANNEL, DEFAULT_PUSHER_EVENT, EXIT_FAILURE
from ..errors.handling import log_error
from ..errors.internal import IRCReadError, ParsingError, PublishError
from ..logs.logger import logger
from ..pusher.protocols import PublisherProtocol
from .connection import IRCSession
from .parser import ChatMessage, is_ping, is_privmsg, parse_message


class IRCDispatcher:
    """Consumes lines from a session until the stream fails.

    PING lines are answered, PRIVMSG lines are parsed and handed to the
    publisher, everything else is dropped.
    """

    def __init__(
        self,
        session: IRCSession,
        publisher: PublisherProtocol,
        event: str = DEFAULT_PUSHER_EVENT,
        channel: str = DEFAULT_PUSHER_CHANNEL,
    ) -> None:
        self.session = session
        self.publisher = publisher
        self.event = event
        self.channel = channel
        self.published = 0
        self.dropped = 0

    async def run(self) -> int:
        """Process lines until a read fails; returns the exit status."""
        logger.log_event("dispatch", "start", user=self.session.nick)
        while True:
            try:
                line = await self.session.read_line()
            except IRCReadError as e:
                return await self._handle_read_failure(e)
            await self.handle_line(line)

    async def _handle_read_failure(self, error: IRCReadError) -> int:
        logger.log_event(
            "irc",
            "read_failed",
            level=logging.ERROR,
            user=self.session.nick,
            error=str(error),
            line=error.partial,
        )
        log_error("Error reading line", error)
        await self.session.close()
        logger.log_event("dispatch", "stopped", level=logging.DEBUG, user=self.session.nick)
        return EXIT_FAILURE

    async def handle_line(self, line: str) -> None:
        logger.log_event("irc", "raw", user=self.session.nick, raw=line)
        if is_ping(line):
            try:
                await self.session.respond_to_ping(line)
            except ParsingError as e:
                log_error("Malformed PING", e)
            return
        if is_privmsg(line):
            await self.forward(parse_message(line))

    async def forward(self, msg: ChatMessage) -> None:
        logger.log_event(
            "dispatch",
            "privmsg",
            level=logging.DEBUG,
            user=self.session.nick,
            channel=msg.channel,
            author=msg.nick,
            message=msg.message,
        )
        try:
            payload = msg.to_payload()
        except (TypeError, ValueError) as e:
            self.dropped += 1
            logger.log_event(
                "dispatch",
                "serialize_failed",
                level=logging.ERROR,
                user=self.session.nick,
                author=msg.nick,
                error=str(e),
            )
            return
        try:
            await self.publisher.publish(payload, self.event, self.channel)
        except PublishError as e:
            self.dropped += 1
            logger.log_event(
                "dispatch",
                "publish_failed",
                level=logging.ERROR,
                user=self.session.nick,
                author=msg.nick,
                error=str(e),
            )
            return
        self.published += 1
