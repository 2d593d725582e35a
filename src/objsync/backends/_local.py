"""Local filesystem backend — stdlib-only reference implementation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from objsync._backend import Backend
from objsync._config import StorageOptions
from objsync._digest import hexdigest
from objsync._errors import InvalidURL, NotFound, ObjSyncError, PermissionDenied
from objsync._models import ObjectRecord

if TYPE_CHECKING:
    from objsync._url import ObjectURL

log = logging.getLogger(__name__)


class LocalBackend(Backend):
    """Local filesystem backend using only the Python standard library.

    :param options: Storage options; ``cache_hashes`` makes ``stat`` compute
        the content digest up front.
    """

    def __init__(self, options: StorageOptions | None = None) -> None:
        self._cache_hashes = (options or StorageOptions()).cache_hashes

    @property
    def name(self) -> str:
        return "local"

    @property
    def cache_hashes(self) -> bool:
        return self._cache_hashes

    def _full_path(self, url: ObjectURL) -> Path:
        if url.is_remote:
            raise ObjSyncError(f"Not a local URL: {url}", path=str(url), backend=self.name)
        return Path(url.path)

    def _map_os_error(self, exc: OSError | ValueError, url: ObjectURL) -> ObjSyncError:
        path = str(url)
        if isinstance(exc, ValueError):
            # Paths the OS cannot encode, e.g. lone surrogates.
            return InvalidURL(f"Unusable local path: {path!r}", path=path, backend=self.name)
        if isinstance(exc, FileNotFoundError):
            return NotFound(f"File not found: {path}", path=path, backend=self.name)
        if isinstance(exc, PermissionError):
            return PermissionDenied(f"Permission denied: {path}", path=path, backend=self.name)
        return ObjSyncError(f"I/O error on {path}: {exc}", path=path, backend=self.name)

    def stat(self, url: ObjectURL) -> ObjectRecord:
        full = self._full_path(url)
        try:
            st = full.stat()
        except (OSError, ValueError) as exc:
            raise self._map_os_error(exc, url) from None
        if not full.is_file():
            raise NotFound(f"Not a file: {url}", path=str(url), backend=self.name)

        digest = ""
        if self._cache_hashes:
            with self.open(url) as stream:
                try:
                    digest = hexdigest(stream)
                except OSError as exc:
                    raise self._map_os_error(exc, url) from None
            log.debug("Cached digest of %s at stat: %s", url, digest)

        return ObjectRecord(
            url=url,
            size=st.st_size,
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            digest=digest,
        )

    def open(self, url: ObjectURL) -> BinaryIO:
        full = self._full_path(url)
        try:
            return full.open("rb")
        except (OSError, ValueError) as exc:
            raise self._map_os_error(exc, url) from None
