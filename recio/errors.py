"""Exceptions raised by record readers and writers."""


class RecordIOError(Exception):
    """Base class for all framing errors."""


class EndOfStream(RecordIOError, EOFError):
    """No more frames: the stream ended cleanly at a frame boundary."""


class MalformedStream(RecordIOError):
    """The stream ended or was inconsistent in the middle of a frame."""


class TargetBufferTooSmall(RecordIOError):
    """The next record did not fit the caller's buffer and was skipped.

    The stream has already been advanced past the skipped record, so the
    next read starts at the following frame.
    """

    def __init__(self, length: int, capacity: int):
        super().__init__(
            f"Target buffer is too small to hold record ({length} > {capacity} bytes), skipping record"
        )
        self.length = length
        self.capacity = capacity


class RecordTooLarge(RecordIOError, ValueError):
    """Payload length cannot be represented in the 4-byte length prefix."""


class IncompleteWrite(RecordIOError):
    """The sink accepted fewer bytes of the length prefix than were sent."""
