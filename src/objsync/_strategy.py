"""Sync strategies — decide whether a destination object must be overwritten."""

from __future__ import annotations

import abc
import enum
from typing import TYPE_CHECKING

from objsync._digest import is_composite, requires_read, resolve_digest

if TYPE_CHECKING:
    from objsync._models import ObjectRecord


class SyncOutcome(enum.Enum):
    """Result of a sync decision.

    ``PROCEED`` means the destination must be overwritten. Every other member
    means the pair is already equivalent; its value is the reason.
    """

    PROCEED = "proceed"
    SIZES_MATCH = "object size matches"
    NEWER_AND_SIZES_MATCH = "object is newer or same age and sizes match"
    DIGESTS_MATCH = "object digest matches"

    @property
    def should_sync(self) -> bool:
        return self is SyncOutcome.PROCEED

    @property
    def reason(self) -> str:
        return self.value


class SyncStrategy(abc.ABC):
    """A comparison policy for one (source, destination) pair."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Identifier of the policy (e.g. ``'size-only'``)."""

    @abc.abstractmethod
    def should_sync(self, src: ObjectRecord, dst: ObjectRecord) -> SyncOutcome:
        """Return ``PROCEED`` or the reason the pair can be skipped."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SizeOnlyStrategy(SyncStrategy):
    """Skip when sizes match; nothing else is inspected."""

    @property
    def name(self) -> str:
        return "size-only"

    def should_sync(self, src: ObjectRecord, dst: ObjectRecord) -> SyncOutcome:
        if src.size != dst.size:
            return SyncOutcome.PROCEED
        return SyncOutcome.SIZES_MATCH


class SizeAndModificationStrategy(SyncStrategy):
    """Skip when sizes match and the source is not newer than the destination.

    A missing modification time on either side proves nothing about age, so
    the pair is synced.
    """

    @property
    def name(self) -> str:
        return "size-and-mtime"

    def should_sync(self, src: ObjectRecord, dst: ObjectRecord) -> SyncOutcome:
        if src.size != dst.size:
            return SyncOutcome.PROCEED
        if src.mod_time is None or dst.mod_time is None:
            return SyncOutcome.PROCEED
        if src.mod_time > dst.mod_time:
            return SyncOutcome.PROCEED
        return SyncOutcome.NEWER_AND_SIZES_MATCH


class HashStrategy(SyncStrategy):
    """Skip only when both content digests are known, simple and equal."""

    @property
    def name(self) -> str:
        return "hash"

    def should_sync(self, src: ObjectRecord, dst: ObjectRecord) -> SyncOutcome:
        if src.size != dst.size:
            return SyncOutcome.PROCEED

        # Known digests first: a composite or missing one makes reading the other file pointless.
        digests: list[str] = []
        for record in sorted((src, dst), key=requires_read):
            digest = resolve_digest(record)
            if not digest or is_composite(digest):
                return SyncOutcome.PROCEED
            digests.append(digest)

        if digests[0] == digests[1]:
            return SyncOutcome.DIGESTS_MATCH
        return SyncOutcome.PROCEED


def select_strategy(size_only: bool, hash_only: bool) -> SyncStrategy:
    """Pick the strategy for the given switches.

    ``size_only`` takes precedence over ``hash_only``; with neither set the
    size-and-modification-time policy is used.
    """
    if size_only:
        return SizeOnlyStrategy()
    if hash_only:
        return HashStrategy()
    return SizeAndModificationStrategy()
