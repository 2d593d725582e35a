"""Immutable object metadata model."""

from __future__ import annotations

import dataclasses
from datetime import timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from objsync._url import ObjectURL


@dataclasses.dataclass(frozen=True, eq=False)
class ObjectRecord:
    """Immutable snapshot of the metadata compared during a sync decision.

    Records are created by a backend's ``stat`` (or by the caller) and live
    for one comparison. The digest is written once, at creation, and only
    read afterwards.

    :param url: Location of the object.
    :param size: Object size in bytes.
    :param mod_time: Last modification time, ``None`` when the store omits it.
        A time without a timezone is taken as UTC.
    :param digest: Content digest; empty means "not yet known". For remote
        objects this is the store-reported ETag and is authoritative. For
        local objects it is set only by a hash-caching ``stat``.
    :param extra: Backend-specific metadata.
    """

    url: ObjectURL
    size: int
    mod_time: datetime | None = None
    digest: str = ""
    extra: dict[str, object] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")
        if self.mod_time is not None and self.mod_time.tzinfo is None:
            object.__setattr__(self, "mod_time", self.mod_time.replace(tzinfo=timezone.utc))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjectRecord):
            return self.url == other.url
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.url)
