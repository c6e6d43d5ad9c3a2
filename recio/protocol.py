"""Wire protocol: 4-byte length prefix + payload.

Layout of one frame:
  Bytes 0-3: payload length, unsigned 32-bit, little-endian
  Bytes 4-:  payload, exactly `length` bytes

A stream is zero or more frames back to back, with no separators and no
trailer. Byte order is fixed; it is not negotiated or detected.

Examples:
  b""        -> 00 00 00 00
  b"short"   -> 05 00 00 00 73 68 6f 72 74
"""

import struct

from recio.errors import EndOfStream, MalformedStream

LENGTH_PREFIX_SIZE = 4
LENGTH_PREFIX_FORMAT = "<I"  # 4-byte uint32 little-endian
MAX_PAYLOAD_SIZE = 0xFFFFFFFF

DISCARD_CHUNK_SIZE = 64 * 1024


def encode_length_prefix(length: int) -> bytes:
    """Encode a payload length into its 4-byte prefix.

    Raises:
        ValueError: If length does not fit in an unsigned 32-bit integer.
    """
    if length < 0 or length > MAX_PAYLOAD_SIZE:
        raise ValueError(f"Length must be between 0 and {MAX_PAYLOAD_SIZE}, got {length}")
    return struct.pack(LENGTH_PREFIX_FORMAT, length)


def decode_length_prefix(prefix: bytes) -> int:
    """Decode a 4-byte prefix into the payload length.

    Raises:
        ValueError: If prefix is not exactly 4 bytes.
    """
    if len(prefix) != LENGTH_PREFIX_SIZE:
        raise ValueError(f"Prefix must be {LENGTH_PREFIX_SIZE} bytes, got {len(prefix)}")
    (length,) = struct.unpack(LENGTH_PREFIX_FORMAT, prefix)
    return length


def read_exact(source, n: int) -> bytes:
    """Read exactly n bytes from a stream.

    Args:
        source: Any object with a read(n) method returning bytes.
        n: Number of bytes to read.

    Returns:
        Exactly n bytes.

    Raises:
        EndOfStream: If the stream ends before the first byte.
        MalformedStream: If the stream ends after some but not all bytes.
    """
    data = b""
    while len(data) < n:
        chunk = source.read(n - len(data))
        if not chunk:
            if not data:
                raise EndOfStream("End of stream")
            raise MalformedStream(f"Stream ended after {len(data)} of {n} bytes")
        data += chunk
    return data


def read_length_prefix(source) -> int:
    """Read and decode the next length prefix from a stream."""
    try:
        prefix = read_exact(source, LENGTH_PREFIX_SIZE)
    except MalformedStream as exc:
        raise MalformedStream(f"Truncated length prefix: {exc}") from exc
    return decode_length_prefix(prefix)


def readinto_exact(source, view: memoryview) -> int:
    """Fill view completely from a stream, looping over short reads.

    Uses source.readinto when available and falls back to source.read.

    Returns:
        len(view).

    Raises:
        MalformedStream: If the stream ends before view is full.
    """
    filled = 0
    total = len(view)
    while filled < total:
        with view[filled:] as rest:
            got = readinto_once(source, rest)
        if not got:
            raise MalformedStream(f"Truncated payload: got {filled} of {total} bytes")
        filled += got
    return filled


def readinto_once(source, view: memoryview) -> int:
    """Issue a single underlying read into view. Returns bytes transferred."""
    if hasattr(source, "readinto"):
        return source.readinto(view) or 0
    chunk = source.read(len(view))
    view[:len(chunk)] = chunk
    return len(chunk)


def discard_exact(source, n: int) -> None:
    """Read and drop exactly n bytes from a stream (no seeking).

    Raises:
        MalformedStream: If the stream ends before n bytes were dropped.
    """
    remaining = n
    while remaining > 0:
        chunk = source.read(min(remaining, DISCARD_CHUNK_SIZE))
        if not chunk:
            raise MalformedStream(
                f"Stream ended while skipping record: {n - remaining} of {n} bytes skipped"
            )
        remaining -= len(chunk)
