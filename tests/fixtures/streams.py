"""In-memory stream and publisher doubles for IRC session tests."""

import asyncio

from irc2pusher.errors.internal import PublishError


class FakeWriter:
    """Stand-in for asyncio.StreamWriter that records written bytes."""

    def __init__(self, fail_writes: bool = False) -> None:
        self.buffer = bytearray()
        self.fail_writes = fail_writes
        self.close_calls = 0
        self.drain_calls = 0

    def write(self, data: bytes) -> None:
        if self.fail_writes:
            raise ConnectionResetError("Connection reset by peer")
        self.buffer.extend(data)

    async def drain(self) -> None:
        self.drain_calls += 1

    def close(self) -> None:
        self.close_calls += 1

    async def wait_closed(self) -> None:
        return None

    @property
    def lines(self) -> list[str]:
        return self.buffer.decode("utf-8").splitlines(keepends=True)


class RecordingPublisher:
    """Publisher double collecting ``(data, event, channel)`` calls."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self.fail = fail

    async def publish(self, data: str, event: str, channel: str) -> None:
        self.calls.append((data, event, channel))
        if self.fail:
            raise PublishError("service unavailable", status=503, attempts=3)


class BlockingReader:
    """Reader whose readline waits until lines are pushed or it is released."""

    def __init__(self) -> None:
        self.queue: asyncio.Queue[bytes] = asyncio.Queue()
        self.reads = 0

    def push(self, line: str) -> None:
        self.queue.put_nowait(line.encode("utf-8"))

    async def readline(self) -> bytes:
        self.reads += 1
        return await self.queue.get()


def make_reader(*lines: str, eof: bool = True) -> asyncio.StreamReader:
    """Build a StreamReader pre-fed with ``lines``; call inside a running loop."""
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line.encode("utf-8"))
    if eof:
        reader.feed_eof()
    return reader
