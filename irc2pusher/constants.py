"""
Configuration constants for the IRC to Pusher bridge

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# IRC connection defaults
DEFAULT_IRC_PORT = _get_env_int("DEFAULT_IRC_PORT", 6667)  # Plaintext IRC port
DEFAULT_NICK = os.getenv("DEFAULT_NICK", "irc2pusher")  # Bridge nickname

# Protocol tokens
PING_MARKER = "PING"  # Keepalive probe
PRIVMSG_MARKER = "PRIVMSG"  # Chat message delivery
CHANNEL_PREFIX = "#"  # Required prefix for joined channel names
LINE_TERMINATOR = "\n"  # Appended to every outbound line

# Pusher defaults
DEFAULT_PUSHER_CHANNEL = os.getenv("DEFAULT_PUSHER_CHANNEL", "irc")
DEFAULT_PUSHER_EVENT = os.getenv("DEFAULT_PUSHER_EVENT", "message")
DEFAULT_PUSHER_HOST = os.getenv("DEFAULT_PUSHER_HOST", "api.pusherapp.com")
DEFAULT_PUSHER_SCHEME = os.getenv("DEFAULT_PUSHER_SCHEME", "http")

# Network/HTTP constants
PUSHER_HTTP_TIMEOUT = _get_env_int(
    "PUSHER_HTTP_TIMEOUT", 10
)  # Total seconds for one publish request
PUSHER_MAX_ATTEMPTS = _get_env_int(
    "PUSHER_MAX_ATTEMPTS", 3
)  # Attempts per publish before giving up
RETRY_BACKOFF_MULTIPLIER = _get_env_float(
    "RETRY_BACKOFF_MULTIPLIER", 0.5
)  # Exponential backoff multiplier
RETRY_MAX_BACKOFF_SECONDS = _get_env_float(
    "RETRY_MAX_BACKOFF_SECONDS", 10.0
)  # Maximum backoff time in seconds

# Exit statuses
EXIT_OK = 0
EXIT_FAILURE = 1
