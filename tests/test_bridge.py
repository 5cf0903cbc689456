from __future__ import annotations

import asyncio
import logging
import signal

import pytest

from irc2pusher.bridge.core import IRCBridge
from irc2pusher.irc.connection import IRCSession
from tests.fixtures.streams import BlockingReader, make_reader


def _bridge_for(session: IRCSession, config, publisher) -> IRCBridge:
    async def factory(_cfg):
        return session

    return IRCBridge(config, publisher, session_factory=factory)


@pytest.mark.asyncio
async def test_start_registers_before_reading(bridge_config, writer, publisher):
    reader = BlockingReader()
    session = IRCSession(bridge_config.irc, reader, writer)  # type: ignore[arg-type]
    bridge = _bridge_for(session, bridge_config, publisher)
    await bridge.start()
    assert reader.reads == 0
    assert writer.lines == [
        "USER bridgebot 8 * :bridgebot\n",
        "NICK bridgebot\n",
        "JOIN #general\n",
        "JOIN #dev\n",
    ]


@pytest.mark.asyncio
async def test_only_one_session_per_bridge(bridge_config, writer, publisher):
    session = IRCSession(bridge_config.irc, make_reader(), writer)
    bridge = _bridge_for(session, bridge_config, publisher)
    await bridge.start()
    with pytest.raises(RuntimeError):
        await bridge.start()


@pytest.mark.asyncio
async def test_interrupt_sends_one_quit_and_exits_zero(bridge_config, writer, publisher):
    reader = BlockingReader()
    session = IRCSession(bridge_config.irc, reader, writer)  # type: ignore[arg-type]
    bridge = _bridge_for(session, bridge_config, publisher)
    await bridge.start()
    reader.push(":alice!a@h PRIVMSG #general :hi\r\n")

    run_task = asyncio.create_task(bridge.run(install_signals=False))
    while not publisher.calls:
        await asyncio.sleep(0)
    reads_before_quit = reader.reads

    bridge.signal_handler.handle(signal.SIGINT)
    bridge.signal_handler.handle(signal.SIGINT)  # second signal is ignored
    status = await run_task

    assert status == 0
    assert bridge.exit_status == 0
    assert writer.lines.count("QUIT :\n") == 1
    assert writer.lines[-1] == "QUIT :\n"
    assert writer.close_calls == 1
    assert reader.reads == reads_before_quit
    assert session.closed


@pytest.mark.asyncio
async def test_read_failure_exits_non_zero(bridge_config, writer, publisher):
    session = IRCSession(
        bridge_config.irc,
        make_reader(
            ":a!b@c PRIVMSG #general :one\n",
            ":a!b@c PRIVMSG #general :two\n",
            ":a!b@c PRIVMSG #general :three\n",
        ),
        writer,
    )
    bridge = _bridge_for(session, bridge_config, publisher)
    status = await bridge.run(install_signals=False)
    assert status == 1
    assert len(publisher.calls) == 3
    assert "QUIT :\n" not in writer.lines
    assert writer.close_calls == 1


@pytest.mark.asyncio
async def test_publish_uses_configured_routing(bridge_config, writer, publisher):
    config = bridge_config.model_copy(
        update={
            "pusher": bridge_config.pusher.model_copy(
                update={"event": "irc-message", "channel": "chat"}
            )
        }
    )
    session = IRCSession(config.irc, make_reader(":a!b@c PRIVMSG #x :y\n"), writer)
    bridge = _bridge_for(session, config, publisher)
    await bridge.run(install_signals=False)
    assert publisher.calls[0][1:] == ("irc-message", "chat")


@pytest.mark.asyncio
async def test_interrupt_after_close_skips_quit(bridge_config, writer, publisher, caplog):
    session = IRCSession(bridge_config.irc, make_reader(), writer)
    bridge = _bridge_for(session, bridge_config, publisher)
    await bridge.start()
    await session.close()
    caplog.set_level(logging.INFO, logger="irc2pusher")

    await bridge.interrupt(signal.SIGINT)

    assert "QUIT :\n" not in writer.lines
    assert writer.close_calls == 1
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


@pytest.mark.asyncio
async def test_shutdown_event_reports_line_counts(bridge_config, writer, publisher, caplog):
    session = IRCSession(
        bridge_config.irc,
        make_reader(
            ":a!b@c PRIVMSG #general :one\n",
            "PING :keepalive\n",
            ":irc.example.net NOTICE * :hello\n",
        ),
        writer,
    )
    bridge = _bridge_for(session, bridge_config, publisher)
    caplog.set_level(logging.INFO, logger="irc2pusher")

    status = await bridge.run(install_signals=False)

    assert status == 1
    # four registration lines plus one PONG
    assert (session.lines_received, session.lines_sent) == (3, 5)
    assert (
        "exit status 1; 3 line(s) received, 5 sent, 1 published, 0 dropped"
        in caplog.text
    )
