"""Record reader: consumes one length-prefixed record per call."""

import logging
from typing import Iterator

from recio.errors import EndOfStream, TargetBufferTooSmall
from recio.protocol import discard_exact, read_length_prefix, readinto_exact, readinto_once

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORD_SIZE = 1024 * 1024  # 1 MB


class RecordReader:
    """Reads framed records from a byte source.

    Args:
        source: Any object with read(n); readinto(view) is used when present.
        exact: When True, payload reads loop until the full record has been
            delivered. When False, a single underlying read is issued and its
            count returned as-is, which is only safe for file-backed or fully
            buffered sources.
    """

    def __init__(self, source, exact: bool = True):
        self._source = source
        self._exact = exact
        self._scratch = None

    @property
    def source(self):
        return self._source

    @property
    def exact(self) -> bool:
        return self._exact

    def readinto(self, buffer) -> int:
        """Read the next record into buffer. Returns the number of bytes delivered.

        Raises:
            EndOfStream: No more records; the stream ended at a frame boundary.
            MalformedStream: The stream ended partway through a frame.
            TargetBufferTooSmall: The record was longer than buffer and has
                been skipped. The next call reads the following record.
        """
        # No view of buffer outlives this call.
        with memoryview(buffer) as mv:
            capacity = mv.nbytes
        length = read_length_prefix(self._source)

        if length > capacity:
            logger.debug("Skipping record of %d bytes (buffer holds %d)", length, capacity)
            discard_exact(self._source, length)
            raise TargetBufferTooSmall(length, capacity)

        with memoryview(buffer) as mv, mv.cast("B") as view, view[:length] as target:
            if self._exact:
                return readinto_exact(self._source, target)
            return readinto_once(self._source, target)

    def read(self, max_size: int = DEFAULT_MAX_RECORD_SIZE) -> bytes:
        """Read the next record and return it as bytes.

        The scratch buffer is kept between calls and only reallocated when
        max_size changes.
        """
        if self._scratch is None or len(self._scratch) != max_size:
            self._scratch = bytearray(max_size)
        n = self.readinto(self._scratch)
        return bytes(self._scratch[:n])

    def records(self, max_size: int = DEFAULT_MAX_RECORD_SIZE,
                skip_oversized: bool = False) -> Iterator[bytes]:
        """Yield records until the end of the stream.

        With skip_oversized, records longer than max_size are logged and
        skipped instead of raising TargetBufferTooSmall.
        """
        buffer = bytearray(max_size)
        while True:
            try:
                n = self.readinto(buffer)
            except EndOfStream:
                return
            except TargetBufferTooSmall as exc:
                if not skip_oversized:
                    raise
                logger.warning("Skipped oversized record of %d bytes (max %d)",
                               exc.length, exc.capacity)
                continue
            yield bytes(buffer[:n])

    def __iter__(self) -> Iterator[bytes]:
        return self.records()
