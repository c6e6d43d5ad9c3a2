"""Shared pytest fixtures for the recio test suite."""

from __future__ import annotations

import io

import pytest

from recio.writer import RecordWriter


class ChunkedSource:
    """Byte source that hands out at most chunk_size bytes per read call."""

    def __init__(self, data: bytes, chunk_size: int):
        self._stream = io.BytesIO(data)
        self._chunk_size = chunk_size
        self.read_calls = 0

    def read(self, n: int = -1) -> bytes:
        self.read_calls += 1
        if n < 0:
            n = self._chunk_size
        return self._stream.read(min(n, self._chunk_size))


def frame_all(payloads) -> bytes:
    """Return the wire bytes for a sequence of payloads."""
    sink = io.BytesIO()
    writer = RecordWriter(sink)
    for payload in payloads:
        writer.write(payload)
    return sink.getvalue()


@pytest.fixture()
def sink() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture()
def chunked_source():
    """Factory for sources that return short reads."""
    return ChunkedSource
