"""Record writer: prepends each payload with its 4-byte length."""

import logging

from recio.errors import IncompleteWrite, RecordTooLarge
from recio.protocol import LENGTH_PREFIX_SIZE, MAX_PAYLOAD_SIZE, encode_length_prefix

logger = logging.getLogger(__name__)


class RecordWriter:
    """Frames payloads onto a byte sink.

    Each write issues two sink writes (prefix, then payload), so a single
    instance must not be shared between concurrent callers.
    """

    def __init__(self, sink):
        self._sink = sink

    @property
    def sink(self):
        return self._sink

    def write(self, payload) -> int:
        """Write one record. Returns the number of payload bytes written.

        The length prefix is not included in the returned count. If the
        payload write fails after the prefix went out, the sink's error
        propagates and the stream can no longer be read back past this point.
        """
        length = len(payload)
        if length > MAX_PAYLOAD_SIZE:
            raise RecordTooLarge(
                f"Record of {length} bytes exceeds maximum of {MAX_PAYLOAD_SIZE} bytes"
            )

        written = self._sink.write(encode_length_prefix(length))
        if written is not None and written != LENGTH_PREFIX_SIZE:
            raise IncompleteWrite(
                f"Sink wrote {written} of {LENGTH_PREFIX_SIZE} length prefix bytes"
            )

        try:
            written = self._sink.write(payload)
        except Exception:
            logger.warning("Payload write failed after length prefix; stream is now inconsistent")
            raise
        if written is None:
            written = length
        elif written != length:
            logger.warning("Short payload write (%d of %d bytes); stream is now inconsistent",
                           written, length)
        logger.debug("Wrote record of %d bytes", length)
        return written

    def flush(self):
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()
