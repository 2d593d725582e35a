"""Content digests: streaming MD5, composite ETag detection and digest resolution."""

from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING

from objsync._errors import ObjSyncError

if TYPE_CHECKING:
    from typing import BinaryIO

    from objsync._models import ObjectRecord

log = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def hexdigest(stream: BinaryIO) -> str:
    """Return the lower-case hex MD5 of everything left in ``stream``.

    The stream is consumed in ``CHUNK_SIZE`` reads, never held whole.
    """
    h = hashlib.md5()
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        h.update(chunk)
    return h.hexdigest()


def is_composite(digest: str) -> bool:
    """Return ``True`` for multipart-upload ETags such as ``"<md5>-5"``.

    A composite digest is a hash of part hashes. It never equals the MD5 of
    the full content, so it cannot prove two objects are identical.
    """
    return "-" in digest


def normalize_etag(raw: str | None) -> str:
    """Strip whitespace and surrounding quotes from a store-reported ETag."""
    if not raw:
        return ""
    return raw.strip().strip('"')


def requires_read(record: ObjectRecord) -> bool:
    """Return ``True`` if resolving ``record`` would read local file content."""
    return not record.url.is_remote and not record.digest


def resolve_digest(record: ObjectRecord) -> str:
    """Return a comparable content digest for ``record``.

    Remote digests are returned as-is, even when empty. Local records reuse
    a digest cached at stat time, otherwise the file is streamed and hashed.

    Never raises: any failure to open or read the file yields ``""``, which
    callers treat as "unknown".
    """
    if record.url.is_remote or record.digest:
        return record.digest

    from objsync.backends._local import LocalBackend

    try:
        with LocalBackend().open(record.url) as stream:
            digest = hexdigest(stream)
    except (ObjSyncError, OSError) as exc:
        log.debug("Cannot compute digest of %s: %s", record.url, exc)
        return ""
    log.debug("Computed digest of %s: %s", record.url, digest)
    return digest
