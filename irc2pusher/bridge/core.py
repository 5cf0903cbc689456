"""IRCBridge - owns the session and runs dispatch and interrupt handling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..config.model import BridgeConfig, ConnectionConfig
from ..constants import EXIT_OK
from ..irc.connection import IRCSession
from ..irc.dispatcher import IRCDispatcher
from ..logs.logger import logger
from ..pusher.protocols import PublisherProtocol
from .signal_handler import SignalHandler

SessionFactory = Callable[[ConnectionConfig], Awaitable[IRCSession]]


class IRCBridge:
    """Connects to IRC and relays channel messages to a publisher.

    One bridge owns at most one session. :meth:`run` returns the process
    exit status: 0 after an interrupt, 1 after a read failure.
    """

    def __init__(
        self,
        config: BridgeConfig,
        publisher: PublisherProtocol,
        session_factory: SessionFactory = IRCSession.connect,
    ) -> None:
        self.config = config
        self.publisher = publisher
        self.session_factory = session_factory
        self.session: IRCSession | None = None
        self.dispatcher: IRCDispatcher | None = None
        self.signal_handler = SignalHandler(self.interrupt)
        self.exit_status: int | None = None
        self._dispatch_task: asyncio.Task[int] | None = None

    async def start(self) -> IRCSession:
        """Open the session and send the registration sequence.

        Raises:
            IRCConnectionError: If the server cannot be reached.
            RuntimeError: If the bridge already owns a session.
        """
        if self.session is not None:
            raise RuntimeError("bridge already has an active session")
        self.session = await self.session_factory(self.config.irc)
        await self.session.register()
        self.dispatcher = IRCDispatcher(
            self.session,
            self.publisher,
            event=self.config.pusher.event,
            channel=self.config.pusher.channel,
        )
        return self.session

    async def run(self, install_signals: bool = True) -> int:
        if self.session is None or self.dispatcher is None:
            await self.start()
        assert self.session is not None and self.dispatcher is not None
        self._dispatch_task = asyncio.create_task(self.dispatcher.run())
        if install_signals:
            self.signal_handler.setup_signal_handlers()
        try:
            status = await self._dispatch_task
        except asyncio.CancelledError:
            if self.signal_handler.task is None:
                raise
            status = EXIT_OK
        finally:
            self.signal_handler.remove_signal_handlers()
        if self.signal_handler.task is not None:
            await self.signal_handler.task
            status = EXIT_OK
        self.exit_status = status
        logger.log_event(
            "app",
            "shutdown",
            level=logging.INFO if status == EXIT_OK else logging.ERROR,
            status=status,
            lines_received=self.session.lines_received,
            lines_sent=self.session.lines_sent,
            published=self.dispatcher.published,
            dropped=self.dispatcher.dropped,
        )
        return status

    async def interrupt(self, signum: int | None = None) -> None:
        """Stop reading, send the quit notice and close the stream."""
        if self._dispatch_task is not None and not self._dispatch_task.done():
            self._dispatch_task.cancel()
        if self.session is None or self.session.closed:
            return
        await self.session.quit()
        await self.session.close()
