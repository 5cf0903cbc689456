"""SignalHandler - turns process signals into a single shutdown callback."""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Awaitable, Callable, Iterable

from ..logs.logger import logger

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SignalHandler:
    """Installs loop signal handlers and runs ``on_signal`` once.

    Only the first signal triggers the callback; later signals are ignored
    while shutdown is in progress.
    """

    def __init__(self, on_signal: Callable[[int], Awaitable[None]]) -> None:
        self.on_signal = on_signal
        self.shutdown_initiated = False
        self.received: int | None = None
        self.task: asyncio.Task[None] | None = None
        self._installed: list[int] = []
        self._loop: asyncio.AbstractEventLoop | None = None

    def handle(self, signum: int) -> None:
        if self.shutdown_initiated:
            return
        self.shutdown_initiated = True
        self.received = signum
        logger.log_event(
            "signal",
            "received",
            level=logging.WARNING,
            signal_name=signal.Signals(signum).name,
        )
        loop = self._loop or asyncio.get_running_loop()
        self.task = loop.create_task(self.on_signal(signum))

    def setup_signal_handlers(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        signals: Iterable[int] = DEFAULT_SIGNALS,
    ) -> None:
        """Register :meth:`handle` for each signal on the running loop.

        Platforms without ``add_signal_handler`` keep the default behaviour;
        SIGINT then surfaces as KeyboardInterrupt in the entry point.
        """
        self._loop = loop or asyncio.get_running_loop()
        for sig in signals:
            try:
                self._loop.add_signal_handler(sig, self.handle, sig)
            except (NotImplementedError, RuntimeError, ValueError):
                continue
            self._installed.append(sig)
        logger.log_event(
            "signal",
            "installed",
            level=logging.DEBUG,
            signals=", ".join(signal.Signals(s).name for s in self._installed),
        )

    def remove_signal_handlers(self) -> None:
        if self._loop is None:
            return
        for sig in self._installed:
            self._loop.remove_signal_handler(sig)
        self._installed.clear()
