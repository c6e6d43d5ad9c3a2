"""CLI record inspector — summarize or dump length-prefixed record files."""

import argparse
import logging
import sys

from recio.config import load_config
from recio.errors import MalformedStream
from recio.inspector import dump, format_size, render_payload, summarize


def main(argv=None):
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [recio] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    parser = argparse.ArgumentParser(description="Inspect length-prefixed record files")
    parser.add_argument("path", help="Record file to inspect")
    parser.add_argument("--max-size", type=int, default=config.max_record_size,
                        help="Largest record to load, in bytes")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--summary", action="store_true", help="Print record count and sizes")
    group.add_argument("--dump", action="store_true", help="Print each record")
    parser.add_argument("--limit", type=int, default=None, help="Stop dumping after N records")
    parser.add_argument("--width", type=int, default=80, help="Truncate dumped records to N chars")
    args = parser.parse_args(argv)

    try:
        if args.summary:
            s = summarize(args.path, args.max_size, config=config)
            print(f"  file:      {s.path} ({format_size(s.file_bytes)})")
            print(f"  records:   {s.records}")
            print(f"  payload:   {format_size(s.payload_bytes)}")
            if s.records:
                print(f"  sizes:     min {s.min_size} B, max {s.max_size} B, "
                      f"avg {s.payload_bytes / s.records:.1f} B")
            if s.oversized:
                print(f"  oversized: {s.oversized} (larger than {args.max_size} B)")
        else:
            count = 0
            for index, payload in dump(args.path, args.max_size, args.limit, config=config):
                print(f"  [{index}] {render_payload(payload, args.width)}")
                count += 1
            if not count:
                print("No records found.")
    except (FileNotFoundError, MalformedStream) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
