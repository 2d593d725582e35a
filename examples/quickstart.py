"""Quickstart — stat two files and ask each strategy whether to sync.

Demonstrates:
- Describing local objects with ``objsync.stat``
- Choosing a strategy from ``SyncOptions``
- Reading the skip reason from the outcome
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from objsync import SyncOptions, decide, stat

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        src_path = Path(tmp) / "src.txt"
        dst_path = Path(tmp) / "dst.txt"
        src_path.write_bytes(b"Hello, world!")
        dst_path.write_bytes(b"Hello, world?")

        src = stat(src_path)
        dst = stat(dst_path)
        print(f"Sizes: {src.size} / {dst.size}")

        for options in (
            SyncOptions(size_only=True),
            SyncOptions(),
            SyncOptions(compare="hash"),
        ):
            strategy = options.strategy()
            decision = decide(strategy, src, dst)
            verdict = "copy" if decision.should_sync else f"skip ({decision.outcome.reason})"
            print(f"{strategy.name:>15}: {verdict}")

    print("Done!")
