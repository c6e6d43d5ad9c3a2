"""Benchmark: record write/read throughput in memory and on disk."""

import io
import os
import sys
import tempfile
import time

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from recio.files import open_reader, open_writer
from recio.reader import RecordReader
from recio.writer import RecordWriter


def _report(label: str, count: int, size: int, elapsed: float):
    rate = count / elapsed if elapsed else float("inf")
    mb_per_s = count * size / (1024 * 1024) / elapsed if elapsed else float("inf")
    print(f"{label:<14} {count:<10,} {elapsed * 1000:<12.1f} {rate:<14,.0f} {mb_per_s:<10.1f}")


def run_benchmark(count: int = 100_000, size: int = 500):
    payload = os.urandom(size)
    buffer = bytearray(size)

    print(f"\nBenchmark: {count:,} records of {size} bytes")
    print(f"{'Phase':<14} {'Records':<10} {'Time (ms)':<12} {'Records/s':<14} {'MB/s':<10}")
    print("-" * 60)

    sink = io.BytesIO()
    writer = RecordWriter(sink)
    start = time.perf_counter()
    for _ in range(count):
        writer.write(payload)
    _report("memory write", count, size, time.perf_counter() - start)

    reader = RecordReader(io.BytesIO(sink.getvalue()))
    start = time.perf_counter()
    for _ in range(count):
        reader.readinto(buffer)
    _report("memory read", count, size, time.perf_counter() - start)

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bench.seq")
        start = time.perf_counter()
        with open_writer(path) as w:
            for _ in range(count):
                w.write(payload)
        _report("disk write", count, size, time.perf_counter() - start)

        start = time.perf_counter()
        with open_reader(path) as r:
            for _ in range(count):
                r.readinto(buffer)
        _report("disk read", count, size, time.perf_counter() - start)

    print()


if __name__ == "__main__":
    run_benchmark()
