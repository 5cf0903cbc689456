"""Asynchronous Pusher publisher built on the ``pusher`` client library.

The library signs and builds trigger requests; :class:`SessionBackend` sends
them over one shared aiohttp session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import aiohttp
from pusher import Pusher
from pusher.errors import (
    PusherBadAuth,
    PusherBadRequest,
    PusherBadStatus,
    PusherError,
    PusherForbidden,
)
from pusher.http import process_response

from ..config.model import PusherConfig
from ..constants import PUSHER_MAX_ATTEMPTS, RETRY_BACKOFF_MULTIPLIER
from ..errors.internal import PublishError
from ..logs.logger import logger
from ..utils.retry import RetryExhaustedError, retry_async

_REJECTION_STATUS: dict[type[PusherError], int] = {
    PusherBadRequest: 400,
    PusherBadAuth: 401,
    PusherForbidden: 403,
}


class SessionBackend:
    """``pusher`` HTTP backend that reuses the publisher's aiohttp session.

    Args:
        client: The library client; passed in by ``pusher`` itself.
        session_provider: Returns the open session for each request.
    """

    def __init__(
        self, client: object, session_provider: Callable[[], aiohttp.ClientSession]
    ) -> None:
        self.client = client
        self.session_provider = session_provider

    async def send_request(self, request):  # type: ignore[no-untyped-def]
        session = self.session_provider()
        async with session.request(
            request.method,
            f"{request.base_url}{request.path}",
            params=request.query_params,
            data=request.body,
            headers=request.headers,
        ) as resp:
            body = await resp.text("utf-8")
            status = resp.status
        return process_response(status, body)


class PusherClient:
    """Publishes events through the Pusher HTTP API.

    Network errors and unexpected statuses (429, 5xx) are retried with
    exponential backoff; 400/401/403 responses and payloads the library
    refuses fail immediately.

    Attributes:
        config: Credentials, host and default routing.
        pusher: The ``pusher.Pusher`` instance that builds signed requests.
        max_attempts: Attempts per publish before raising PublishError.
    """

    def __init__(
        self,
        config: PusherConfig,
        session: aiohttp.ClientSession | None = None,
        *,
        max_attempts: int = PUSHER_MAX_ATTEMPTS,
        backoff_multiplier: float = RETRY_BACKOFF_MULTIPLIER,
    ) -> None:
        self.config = config
        self.max_attempts = max_attempts
        self.backoff_multiplier = backoff_multiplier
        self._session = session
        self._owns_session = session is None
        self.pusher = Pusher(
            app_id=config.app_id,
            key=config.key,
            secret=config.secret,
            ssl=config.ssl,
            host=config.host,
            timeout=config.timeout,
            backend=SessionBackend,
            session_provider=self._ensure_session,
        )

    async def __aenter__(self) -> PusherClient:
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def publish(self, data: str, event: str, channel: str) -> None:
        """Trigger ``event`` on ``channel`` with ``data`` as its payload.

        Raises:
            PublishError: On a rejected request or once attempts run out.
        """
        last_error: PusherError | None = None

        async def attempt(_n: int) -> tuple[None, bool]:
            nonlocal last_error
            try:
                await self.pusher.trigger(channel, event, data)
            except PusherBadStatus as e:
                last_error = e
                return None, True
            except (PusherError, ValueError, TypeError) as e:
                raise PublishError(
                    f"Pusher rejected event: {str(e).strip()[:200]}",
                    status=_REJECTION_STATUS.get(type(e)),
                ) from e
            return None, False

        def on_retry(attempt_number: int, cause: BaseException | None) -> None:
            logger.log_event(
                "pusher",
                "retry",
                level=logging.WARNING,
                attempt=attempt_number,
                error=str(cause or last_error).strip(),
            )

        try:
            await retry_async(
                attempt,
                self.max_attempts,
                multiplier=self.backoff_multiplier,
                on_retry=on_retry,
            )
        except RetryExhaustedError as e:
            logger.log_event(
                "pusher",
                "failed",
                level=logging.ERROR,
                pusher_channel=channel,
                attempts=e.attempts,
            )
            raise PublishError(
                f"Giving up after {e.attempts} attempt(s): "
                f"{str(e.final_exception or last_error).strip()}",
                attempts=e.attempts,
            ) from e
        logger.log_event(
            "pusher", "publish", level=logging.DEBUG, event=event, pusher_channel=channel
        )
