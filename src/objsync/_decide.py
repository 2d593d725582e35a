"""Decision runner — evaluates a strategy over already-matched object pairs."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from objsync._models import ObjectRecord
    from objsync._strategy import SyncOutcome, SyncStrategy

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class SyncDecision:
    """Outcome of comparing one pair.

    :param src: The source record.
    :param dst: The destination record.
    :param outcome: ``PROCEED`` or the reason the copy is skipped.
    """

    src: ObjectRecord
    dst: ObjectRecord
    outcome: SyncOutcome

    @property
    def should_sync(self) -> bool:
        return self.outcome.should_sync


def decide(strategy: SyncStrategy, src: ObjectRecord, dst: ObjectRecord) -> SyncDecision:
    """Evaluate ``strategy`` for one pair and log why it is skipped, if it is."""
    outcome = strategy.should_sync(src, dst)
    if not outcome.should_sync:
        log.debug("Skipping %s -> %s: %s", src.url, dst.url, outcome.reason)
    return SyncDecision(src=src, dst=dst, outcome=outcome)


def decide_all(
    strategy: SyncStrategy,
    pairs: Iterable[tuple[ObjectRecord, ObjectRecord]],
    *,
    max_workers: int | None = None,
) -> Iterator[SyncDecision]:
    """Evaluate ``strategy`` for every pair on a thread pool.

    Decisions are yielded in input order. Each evaluation only reads its own
    records and opens its own file handles. ``pairs`` is consumed lazily: at
    most twice the pool size are in flight at any time.

    :param max_workers: Pool size, ``None`` for the executor default.
    """
    workers = max_workers or _default_workers()
    window = workers * 2
    pending: deque[Future[SyncDecision]] = deque()
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="objsync-decide") as pool:
        for src, dst in pairs:
            if len(pending) >= window:
                yield pending.popleft().result()
            pending.append(pool.submit(decide, strategy, src, dst))
        while pending:
            yield pending.popleft().result()


def _default_workers() -> int:
    # Same default as ThreadPoolExecutor.
    return min(32, (os.cpu_count() or 1) + 4)
