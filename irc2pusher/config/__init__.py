"""Configuration package exports."""

from .loader import build_arg_parser, load_configuration, load_pusher_config  # noqa: F401
from .model import BridgeConfig, ConnectionConfig, PusherConfig  # noqa: F401

__all__ = [
    "BridgeConfig",
    "ConnectionConfig",
    "PusherConfig",
    "build_arg_parser",
    "load_configuration",
    "load_pusher_config",
]
