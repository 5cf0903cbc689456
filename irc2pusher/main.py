#!/usr/bin/env python3
"""
Main entry point for the IRC to Pusher bridge
"""

import asyncio
import logging
import sys
from collections.abc import Sequence

from . import __version__
from .bridge.core import IRCBridge
from .config import BridgeConfig, load_configuration
from .constants import EXIT_FAILURE, EXIT_OK
from .errors.handling import log_error
from .errors.internal import ConfigurationError, IRCConnectionError
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .pusher.client import PusherClient


async def main(config: BridgeConfig) -> int:
    """Connect, register and relay until interrupted or the stream fails.

    Returns:
        The process exit status.
    """
    logger.log_event("app", "start", version=__version__)
    async with PusherClient(config.pusher) as publisher:
        bridge = IRCBridge(config, publisher)
        try:
            await bridge.start()
        except IRCConnectionError as e:
            log_error("Connection failed", e)
            return EXIT_FAILURE
        return await bridge.run()


def run(argv: Sequence[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Configuration problems exit with status 1 before any network activity.
    """
    LoggerConfigurator().configure()
    try:
        config = load_configuration(argv)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        logger.log_event("app", "config_error", level=logging.ERROR, error=str(e))
        sys.exit(EXIT_FAILURE)

    try:
        status = asyncio.run(main(config))
    except KeyboardInterrupt:
        sys.exit(EXIT_OK)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(EXIT_FAILURE)
    sys.exit(status)


if __name__ == "__main__":
    run()
