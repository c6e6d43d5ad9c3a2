"""Record files on disk: buffered open helpers for writers and readers."""

import logging
import os

from recio.reader import RecordReader
from recio.writer import RecordWriter

logger = logging.getLogger(__name__)

DEFAULT_READ_BUFFER_SIZE = 1024 * 1024  # 1 MB
DEFAULT_WRITE_BUFFER_SIZE = 64 * 1024  # 64 KB


class RecordFile:
    """A record reader or writer bound to a file it opened and will close."""

    def __init__(self, file, framer):
        self._file = file
        self._framer = framer

    @property
    def name(self) -> str:
        return self._file.name

    @property
    def closed(self) -> bool:
        return self._file.closed

    def __getattr__(self, attr):
        if attr.startswith("_"):
            raise AttributeError(attr)
        return getattr(self._framer, attr)

    def __iter__(self):
        return iter(self._framer)

    def close(self):
        if not self._file.closed:
            self._file.close()
            logger.debug("Closed record file %s", self._file.name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def open_writer(path: str, append: bool = False,
                buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE) -> RecordFile:
    """Open path for writing records, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    f = open(path, "ab" if append else "wb", buffering=buffer_size)
    logger.debug("Opened %s for writing (append=%s)", path, append)
    return RecordFile(f, RecordWriter(f))


def open_reader(path: str, buffer_size: int = DEFAULT_READ_BUFFER_SIZE,
                exact: bool = True) -> RecordFile:
    """Open path for reading records through a buffered reader."""
    f = open(path, "rb", buffering=buffer_size)
    logger.debug("Opened %s for reading", path)
    return RecordFile(f, RecordReader(f, exact=exact))


def open_from_config(path: str, mode: str, config) -> RecordFile:
    """Open a record file using sizes from a Config. mode is "r", "w" or "a"."""
    if mode == "r":
        return open_reader(path, buffer_size=config.read_buffer_size, exact=config.exact_reads)
    if mode in ("w", "a"):
        return open_writer(path, append=mode == "a", buffer_size=config.write_buffer_size)
    raise ValueError(f"mode must be 'r', 'w' or 'a', got {mode!r}")
