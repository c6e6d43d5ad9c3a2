"""Tests for recio/writer.py — RecordWriter framing and sink error handling."""

import io
import struct
from unittest.mock import MagicMock

import pytest

from recio.errors import IncompleteWrite, RecordTooLarge
from recio.protocol import MAX_PAYLOAD_SIZE
from recio.writer import RecordWriter


class _HugePayload:
    """Stands in for a payload too large to allocate."""

    def __len__(self):
        return MAX_PAYLOAD_SIZE + 1


# ── Framing ───────────────────────────────────────────────────────


class TestFraming:
    def test_prefix_then_payload(self, sink):
        RecordWriter(sink).write(b"short")
        assert sink.getvalue() == b"\x05\x00\x00\x00short"

    def test_returns_payload_bytes_only(self, sink):
        n = RecordWriter(sink).write(b"this is test string 0")
        assert n == 21
        assert len(sink.getvalue()) == 25

    def test_empty_payload_writes_zero_prefix(self, sink):
        n = RecordWriter(sink).write(b"")
        assert n == 0
        assert sink.getvalue() == b"\x00\x00\x00\x00"

    def test_consecutive_records_concatenate(self, sink):
        w = RecordWriter(sink)
        w.write(b"a")
        w.write(b"bc")
        assert sink.getvalue() == b"\x01\x00\x00\x00a\x02\x00\x00\x00bc"

    @pytest.mark.parametrize("fill", [0x00, 0xFF])
    def test_length_independent_of_content(self, sink, fill):
        payload = bytes([fill]) * 300
        RecordWriter(sink).write(payload)
        (length,) = struct.unpack("<I", sink.getvalue()[:4])
        assert length == 300

    def test_accepts_bytearray_and_memoryview(self, sink):
        w = RecordWriter(sink)
        w.write(bytearray(b"xy"))
        w.write(memoryview(b"z"))
        assert sink.getvalue() == b"\x02\x00\x00\x00xy\x01\x00\x00\x00z"

    def test_large_payload_1mb(self, sink):
        payload = b"X" * (1024 * 1024)
        assert RecordWriter(sink).write(payload) == 1024 * 1024
        assert sink.getvalue()[:4] == b"\x00\x00\x10\x00"


# ── Sink interaction ──────────────────────────────────────────────


class TestSinkInteraction:
    def test_two_sink_writes_per_record(self):
        sink = MagicMock()
        sink.write.side_effect = [4, 3]
        RecordWriter(sink).write(b"abc")
        assert sink.write.call_count == 2
        assert sink.write.call_args_list[0].args[0] == b"\x03\x00\x00\x00"
        assert sink.write.call_args_list[1].args[0] == b"abc"

    def test_none_return_counts_full_payload(self):
        sink = MagicMock()
        sink.write.return_value = None
        assert RecordWriter(sink).write(b"abcd") == 4

    def test_reports_sink_short_payload_count(self):
        sink = MagicMock()
        sink.write.side_effect = [4, 2]
        assert RecordWriter(sink).write(b"abcd") == 2

    def test_flush_delegates(self):
        sink = MagicMock()
        RecordWriter(sink).flush()
        sink.flush.assert_called_once()

    def test_flush_without_sink_flush(self):
        class Sink:
            def write(self, b):
                return len(b)

        RecordWriter(Sink()).flush()

    def test_sink_property(self, sink):
        assert RecordWriter(sink).sink is sink


# ── Errors ────────────────────────────────────────────────────────


class TestWriterErrors:
    def test_prefix_failure_skips_payload(self):
        sink = MagicMock()
        sink.write.side_effect = OSError("disk full")
        with pytest.raises(OSError, match="disk full"):
            RecordWriter(sink).write(b"payload")
        sink.write.assert_called_once()

    def test_short_prefix_write_raises(self):
        sink = MagicMock()
        sink.write.return_value = 2
        with pytest.raises(IncompleteWrite, match="2 of 4"):
            RecordWriter(sink).write(b"payload")
        sink.write.assert_called_once()

    def test_payload_failure_propagates(self):
        sink = MagicMock()
        sink.write.side_effect = [4, OSError("broken pipe")]
        with pytest.raises(OSError, match="broken pipe"):
            RecordWriter(sink).write(b"payload")

    def test_payload_failure_logs_warning(self, caplog):
        sink = MagicMock()
        sink.write.side_effect = [4, OSError("broken pipe")]
        with caplog.at_level("WARNING", logger="recio.writer"):
            with pytest.raises(OSError):
                RecordWriter(sink).write(b"payload")
        assert "inconsistent" in caplog.text

    def test_oversized_payload_rejected_before_write(self):
        sink = MagicMock()
        with pytest.raises(RecordTooLarge):
            RecordWriter(sink).write(_HugePayload())
        sink.write.assert_not_called()

    def test_record_too_large_is_value_error(self):
        with pytest.raises(ValueError):
            RecordWriter(io.BytesIO()).write(_HugePayload())

    def test_non_os_payload_failure_logs_warning(self, caplog):
        sink = MagicMock()
        sink.write.side_effect = [4, ValueError("write to closed file")]
        with caplog.at_level("WARNING", logger="recio.writer"):
            with pytest.raises(ValueError, match="closed file"):
                RecordWriter(sink).write(b"payload")
        assert "inconsistent" in caplog.text
