from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    DEFAULT_IRC_PORT,
    DEFAULT_NICK,
    DEFAULT_PUSHER_CHANNEL,
    DEFAULT_PUSHER_EVENT,
    DEFAULT_PUSHER_HOST,
    DEFAULT_PUSHER_SCHEME,
    PUSHER_HTTP_TIMEOUT,
)


def split_channels(raw: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """Split a space separated channel list, preserving order.

    Empty entries are dropped and repeated names are kept once. The ``#``
    prefix is not touched here; the session adds it when joining.
    """
    if raw is None:
        return ()
    items = raw.split(" ") if isinstance(raw, str) else list(raw)
    cleaned = (item.strip() for item in items if isinstance(item, str))
    return tuple(dict.fromkeys(c for c in cleaned if c))


class ConnectionConfig(BaseModel):
    """IRC connection target and identity.

    Attributes:
        server: IRC server hostname or IP.
        port: IRC server port.
        nick: Nickname used for both USER and NICK registration lines.
        channels: Channels to join, in join order.
        connect_timeout: Seconds allowed to open the stream; None blocks.
        read_timeout: Seconds allowed to wait for one line; None blocks.
    """

    model_config = ConfigDict(frozen=True)

    server: str = Field(min_length=1)
    port: int = Field(default=DEFAULT_IRC_PORT, gt=0, lt=65536)
    nick: str = Field(default=DEFAULT_NICK, min_length=1)
    channels: tuple[str, ...] = Field(min_length=1)
    connect_timeout: float | None = Field(default=None, gt=0)
    read_timeout: float | None = Field(default=None, gt=0)

    @field_validator("server", "nick", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> tuple[str, ...]:
        if not isinstance(v, str | list | tuple):
            raise ValueError("channels must be a string or a sequence of names")
        return split_channels(v)

    @property
    def target(self) -> str:
        return f"{self.server}:{self.port}"


class PusherConfig(BaseModel):
    """Credentials and routing for the Pusher REST API."""

    model_config = ConfigDict(frozen=True)

    app_id: str = Field(min_length=1)
    key: str = Field(min_length=1)
    secret: str = Field(min_length=1, repr=False)
    channel: str = Field(default=DEFAULT_PUSHER_CHANNEL, min_length=1)
    event: str = Field(default=DEFAULT_PUSHER_EVENT, min_length=1)
    host: str = DEFAULT_PUSHER_HOST
    scheme: str = Field(default=DEFAULT_PUSHER_SCHEME, pattern=r"^https?$")
    timeout: int = Field(default=PUSHER_HTTP_TIMEOUT, gt=0)

    @property
    def ssl(self) -> bool:
        return self.scheme == "https"


class BridgeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    irc: ConnectionConfig
    pusher: PusherConfig
