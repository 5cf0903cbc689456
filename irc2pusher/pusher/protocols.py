"""Protocol definition for the publish collaborator.

The dispatch loop only needs something that can deliver a finished payload;
the Pusher client is one implementation and tests use simple doubles.
"""

from __future__ import annotations

from typing import Protocol


class PublisherProtocol(Protocol):
    """Delivers one serialized payload as a named event on a channel."""

    async def publish(self, data: str, event: str, channel: str) -> None:
        """Publish ``data`` as ``event`` on ``channel``.

        Raises:
            PublishError: When delivery is abandoned.
        """
        ...
