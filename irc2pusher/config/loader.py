"""Command line and environment configuration loading.

IRC options come from the command line, Pusher credentials from the
environment. Anything missing is reported as a ConfigurationError before
any connection is attempted.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from .. import __version__
from ..constants import (
    DEFAULT_IRC_PORT,
    DEFAULT_NICK,
    DEFAULT_PUSHER_CHANNEL,
    DEFAULT_PUSHER_EVENT,
    DEFAULT_PUSHER_HOST,
    DEFAULT_PUSHER_SCHEME,
)
from ..errors.internal import ConfigurationError
from .model import BridgeConfig, ConnectionConfig, PusherConfig, split_channels

_REQUIRED_PUSHER_VARS = ("PUSHER_ID", "PUSHER_KEY", "PUSHER_SECRET")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="irc2pusher",
        description="Relay IRC channel messages to Pusher events.",
    )
    parser.add_argument("-s", "--server", help="IRC server hostname or IP")
    parser.add_argument(
        "-p", "--port", type=int, default=DEFAULT_IRC_PORT, help="IRC server port"
    )
    parser.add_argument("-n", "--nick", default=DEFAULT_NICK, help="Nickname")
    parser.add_argument(
        "-c", "--channels", help="Channels to join (space separated, quote the list)"
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=None,
        help="Seconds to wait for the TCP connection (default: no timeout)",
    )
    parser.add_argument(
        "--read-timeout",
        type=float,
        default=None,
        help="Seconds to wait for each line (default: no timeout)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def load_connection_config(args: argparse.Namespace) -> ConnectionConfig:
    if not args.server:
        raise ConfigurationError("IRC server hostname or ip is not set")
    if not split_channels(args.channels):
        raise ConfigurationError("IRC server channels are not set")
    try:
        return ConnectionConfig(
            server=args.server,
            port=args.port,
            nick=args.nick or DEFAULT_NICK,
            channels=args.channels,
            connect_timeout=args.connect_timeout,
            read_timeout=args.read_timeout,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid IRC options ({_first_error(e)})") from e


def load_pusher_config(environ: Mapping[str, str] | None = None) -> PusherConfig:
    env = os.environ if environ is None else environ
    for name in _REQUIRED_PUSHER_VARS:
        if not env.get(name):
            raise ConfigurationError(f"{name} env variable is not set")
    try:
        return PusherConfig(
            app_id=env["PUSHER_ID"],
            key=env["PUSHER_KEY"],
            secret=env["PUSHER_SECRET"],
            channel=env.get("PUSHER_CHANNEL") or DEFAULT_PUSHER_CHANNEL,
            event=env.get("PUSHER_EVENT") or DEFAULT_PUSHER_EVENT,
            host=env.get("PUSHER_HOST") or DEFAULT_PUSHER_HOST,
            scheme=env.get("PUSHER_SCHEME") or DEFAULT_PUSHER_SCHEME,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Pusher settings ({_first_error(e)})") from e


def load_configuration(
    argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None
) -> BridgeConfig:
    """Build the full bridge configuration.

    Args:
        argv: Command line arguments without the program name.
        environ: Environment mapping; defaults to ``os.environ``.

    Raises:
        ConfigurationError: If a required option or credential is missing.
        SystemExit: On ``--help``/``--version`` or unparseable arguments.
    """
    args = build_arg_parser().parse_args(argv)
    irc = load_connection_config(args)
    pusher = load_pusher_config(environ)
    return BridgeConfig(irc=irc, pusher=pusher)
