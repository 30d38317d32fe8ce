#!/usr/bin/env python3
"""Replay rtl_433 JSON lines through the ingest pipeline.

Feeds each line of an ``rtl_433 -F json`` capture into
:class:`pyrtl433.Rtl433Ingestor` and prints the resulting device
snapshots.  Records are slotted by their ``time`` field when it parses,
otherwise by arrival.

Usage
-----
    rtl_433 -F json | python scripts/replay_json.py -
    python scripts/replay_json.py capture.jsonl --history --verbose
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pyrtl433 import Rtl433Config, Rtl433Ingestor, export_device


class _RecordClock:
    """Clock that follows the ``time`` field of the record being replayed."""

    def __init__(self) -> None:
        self.now = datetime.now().timestamp()

    def advance(self, record: dict[str, Any]) -> None:
        value = record.get("time")
        if not isinstance(value, str):
            return
        try:
            self.now = datetime.fromisoformat(value.strip()).timestamp()
        except ValueError:
            return

    def __call__(self) -> float:
        return self.now


def _replay(stream: TextIO, ingestor: Rtl433Ingestor, clock: _RecordClock) -> tuple[int, int, int]:
    accepted = rejected = skipped = 0
    for line_no, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            logging.getLogger(__name__).debug("Skipping non-JSON line %d", line_no)
            skipped += 1
            continue
        if isinstance(record, dict):
            clock.advance(record)
        result = ingestor.ingest(record)
        if result.accepted:
            accepted += 1
        else:
            rejected += 1
    return accepted, rejected, skipped


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay rtl_433 JSON lines into pyrtl433.")
    parser.add_argument("source", help="JSON lines file, or - for stdin")
    parser.add_argument("--history", action="store_true", help="Include per-attribute history rings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    clock = _RecordClock()
    ingestor = Rtl433Ingestor(config=Rtl433Config.from_env(), clock=clock)

    if args.source == "-":
        counts = _replay(sys.stdin, ingestor, clock)
    else:
        with Path(args.source).open(encoding="utf-8") as handle:
            counts = _replay(handle, ingestor, clock)

    devices = [export_device(state, include_history=args.history) for state in ingestor.inventory]  # type: ignore[attr-defined]
    print(json.dumps(devices, indent=2, sort_keys=True))

    accepted, rejected, skipped = counts
    print(f"accepted={accepted} rejected={rejected} skipped={skipped} devices={len(devices)}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
