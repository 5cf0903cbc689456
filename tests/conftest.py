import pytest

from irc2pusher.config.model import BridgeConfig, ConnectionConfig, PusherConfig
from irc2pusher.irc.connection import IRCSession
from tests.fixtures.streams import FakeWriter, RecordingPublisher, make_reader


@pytest.fixture
def connection_config() -> ConnectionConfig:
    return ConnectionConfig(
        server="irc.example.net", port=6667, nick="bridgebot", channels="general #dev"
    )


@pytest.fixture
def pusher_config() -> PusherConfig:
    return PusherConfig(app_id="1234", key="app-key", secret="app-secret")


@pytest.fixture
def bridge_config(connection_config, pusher_config) -> BridgeConfig:
    return BridgeConfig(irc=connection_config, pusher=pusher_config)


@pytest.fixture
def writer() -> FakeWriter:
    return FakeWriter()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def session_factory(connection_config, writer):
    """Build an IRCSession over an in-memory reader fed with ``lines``.

    Must be called from inside an async test so the reader binds to the
    running loop.
    """

    def _make(*lines: str, eof: bool = True, config=None) -> IRCSession:
        return IRCSession(
            config or connection_config, make_reader(*lines, eof=eof), writer
        )

    return _make
