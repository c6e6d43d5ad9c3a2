"""Inspector logic: summarize and dump record files."""

import os
from dataclasses import dataclass
from itertools import islice
from typing import Iterator

from recio.config import Config
from recio.errors import EndOfStream, TargetBufferTooSmall
from recio.files import open_from_config


@dataclass
class FileSummary:
    path: str
    records: int = 0
    payload_bytes: int = 0
    file_bytes: int = 0
    min_size: int | None = None
    max_size: int | None = None
    oversized: int = 0


def summarize(path: str, max_size: int, config: Config | None = None) -> FileSummary:
    """Walk every record in a file and collect size statistics.

    Records longer than max_size are counted as oversized and skipped.
    The file is opened with the buffer size and read mode from config.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    summary = FileSummary(path=path, file_bytes=os.path.getsize(path))
    buffer = bytearray(max_size)
    with open_from_config(path, "r", config or Config()) as reader:
        while True:
            try:
                n = reader.readinto(buffer)
            except EndOfStream:
                break
            except TargetBufferTooSmall:
                summary.oversized += 1
                continue
            summary.records += 1
            summary.payload_bytes += n
            summary.min_size = n if summary.min_size is None else min(summary.min_size, n)
            summary.max_size = n if summary.max_size is None else max(summary.max_size, n)
    return summary


def dump(path: str, max_size: int, limit: int | None = None,
         config: Config | None = None) -> Iterator[tuple[int, bytes]]:
    """Yield (index, payload) for records in a file, up to limit records.

    Nothing past the limit-th record is read from the file.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    if limit is not None and limit <= 0:
        return
    with open_from_config(path, "r", config or Config()) as reader:
        records = reader.records(max_size, skip_oversized=True)
        yield from enumerate(islice(records, limit))


def render_payload(payload: bytes, width: int = 80) -> str:
    """Render a payload as text if it is UTF-8, otherwise as a hex preview."""
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        preview = payload[: width // 2].hex()
        suffix = "..." if len(payload) > width // 2 else ""
        return f"<{len(payload)} bytes> {preview}{suffix}"
    if len(text) > width:
        return text[:width] + "..."
    return text


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
