from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, Mock

import aiohttp
import pytest

from irc2pusher.errors.internal import PublishError
from irc2pusher.pusher.client import PusherClient


def _response(status: int, text: str = "{}") -> Mock:
    resp = Mock()
    resp.status = status
    resp.text = AsyncMock(return_value=text)
    return resp


def _session(*outcomes) -> MagicMock:
    """Session whose request() yields the given responses or raises exceptions."""
    session = MagicMock()
    session.closed = False
    contexts = []
    for outcome in outcomes:
        ctx = MagicMock()
        if isinstance(outcome, BaseException):
            ctx.__aenter__ = AsyncMock(side_effect=outcome)
        else:
            ctx.__aenter__ = AsyncMock(return_value=outcome)
        ctx.__aexit__ = AsyncMock(return_value=False)
        contexts.append(ctx)
    session.request = Mock(side_effect=contexts)
    return session


@pytest.mark.asyncio
async def test_publish_sends_signed_trigger(pusher_config):
    session = _session(_response(200))
    client = PusherClient(pusher_config, session, backoff_multiplier=0)
    await client.publish('{"nick": "a"}', "message", "irc")

    session.request.assert_called_once()
    args, kwargs = session.request.call_args
    assert args[0] == "POST"
    assert args[1].startswith("http://api.pusherapp.com")
    assert args[1].endswith("/apps/1234/events")
    body = json.loads(kwargs["data"])
    assert body["name"] == "message"
    assert body["channels"] == ["irc"]
    assert body["data"] == '{"nick": "a"}'
    params = kwargs["params"]
    assert params["auth_key"] == "app-key"
    assert {"auth_signature", "auth_timestamp", "auth_version"} <= set(params)


@pytest.mark.asyncio
async def test_https_scheme_is_used_for_requests(pusher_config):
    config = pusher_config.model_copy(update={"scheme": "https"})
    session = _session(_response(200))
    await PusherClient(config, session).publish("{}", "message", "irc")
    assert session.request.call_args.args[1].startswith("https://api.pusherapp.com")


@pytest.mark.asyncio
async def test_publish_retries_server_errors(pusher_config):
    session = _session(_response(503, "busy"), _response(200))
    client = PusherClient(pusher_config, session, max_attempts=3, backoff_multiplier=0)
    await client.publish("{}", "message", "irc")
    assert session.request.call_count == 2


@pytest.mark.asyncio
async def test_publish_retries_network_errors(pusher_config):
    session = _session(aiohttp.ClientConnectionError("down"), _response(200))
    client = PusherClient(pusher_config, session, max_attempts=3, backoff_multiplier=0)
    await client.publish("{}", "message", "irc")
    assert session.request.call_count == 2


@pytest.mark.asyncio
async def test_publish_auth_error_is_not_retried(pusher_config):
    session = _session(_response(401, "Invalid signature"))
    client = PusherClient(pusher_config, session, max_attempts=3, backoff_multiplier=0)
    with pytest.raises(PublishError) as exc_info:
        await client.publish("{}", "message", "irc")
    assert exc_info.value.status == 401
    assert "Invalid signature" in str(exc_info.value)
    assert session.request.call_count == 1


@pytest.mark.asyncio
async def test_invalid_channel_is_rejected_before_sending(pusher_config):
    session = _session()
    client = PusherClient(pusher_config, session, max_attempts=3, backoff_multiplier=0)
    with pytest.raises(PublishError):
        await client.publish("{}", "message", "bad channel")
    session.request.assert_not_called()


@pytest.mark.asyncio
async def test_publish_gives_up_after_max_attempts(pusher_config):
    session = _session(_response(500), _response(502), _response(500))
    client = PusherClient(pusher_config, session, max_attempts=3, backoff_multiplier=0)
    with pytest.raises(PublishError) as exc_info:
        await client.publish("{}", "message", "irc")
    assert exc_info.value.attempts == 3
    assert session.request.call_count == 3


@pytest.mark.asyncio
async def test_close_leaves_external_session_open(pusher_config):
    session = _session()
    session.close = AsyncMock()
    client = PusherClient(pusher_config, session)
    await client.close()
    session.close.assert_not_awaited()


@pytest.mark.asyncio
async def test_context_manager_owns_session(pusher_config):
    async with PusherClient(pusher_config) as client:
        session = client._session  # noqa: SLF001
        assert isinstance(session, aiohttp.ClientSession)
    assert session.closed
