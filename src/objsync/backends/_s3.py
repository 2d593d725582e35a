"""S3-compatible object storage backend using s3fs."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, BinaryIO

from objsync._backend import Backend
from objsync._config import StorageOptions
from objsync._digest import normalize_etag
from objsync._errors import BackendUnavailable, NotFound, ObjSyncError, PermissionDenied
from objsync._models import ObjectRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

    from objsync._url import ObjectURL

log = logging.getLogger(__name__)


class S3Backend(Backend):
    """S3-compatible object storage backend using s3fs.

    Digests are the ETags reported by the store and are never computed
    locally. Objects uploaded in parts carry a composite ETag.

    :param options: Storage options (endpoint, region, anonymous access,
        extra s3fs options).
    """

    def __init__(self, options: StorageOptions | None = None) -> None:
        self._options = options or StorageOptions()
        self._fs_instance: Any = None

    @property
    def name(self) -> str:
        return "s3"

    # region: lazy filesystem

    @property
    def _fs(self) -> Any:
        if self._fs_instance is None:
            import s3fs  # type: ignore[import-untyped]

            opts: dict[str, Any] = dict(self._options.client_options)
            if self._options.endpoint_url is not None:
                opts["endpoint_url"] = self._options.endpoint_url
            if self._options.region_name is not None:
                client_kwargs: dict[str, Any] = opts.setdefault("client_kwargs", {})
                client_kwargs["region_name"] = self._options.region_name
            opts.setdefault("anon", self._options.no_sign_request)
            log.info("Creating S3 filesystem (endpoint=%s)", self._options.endpoint_url or "default")
            self._fs_instance = s3fs.S3FileSystem(**opts)
        return self._fs_instance

    # endregion

    # region: error mapping

    def _s3_path(self, url: ObjectURL) -> str:
        if url.is_remote and url.key:
            return url.path
        raise NotFound(f"Not an object URL: {url}", path=str(url), backend=self.name)

    @contextmanager
    def _errors(self, path: str = "") -> Iterator[None]:
        """Map s3fs/botocore exceptions to objsync errors."""
        try:
            yield
        except ObjSyncError:
            raise
        except FileNotFoundError:
            raise NotFound(f"Not found: {path}", path=path, backend=self.name) from None
        except PermissionError:  # pragma: no cover -- moto doesn't raise PermissionError
            raise PermissionDenied(f"Permission denied: {path}", path=path, backend=self.name) from None
        except Exception as exc:  # pragma: no cover -- moto raises standard errors
            raise self._classify_error(exc, path) from None

    def _classify_error(self, exc: Exception, path: str) -> ObjSyncError:  # pragma: no cover
        """Classify an unknown exception into an objsync error type."""
        msg = str(exc).lower()
        if "404" in msg or "nosuchkey" in msg or "nosuchbucket" in msg or "not found" in msg:
            return NotFound(f"Not found: {path}", path=path, backend=self.name)
        if "403" in msg or "accessdenied" in msg or "access denied" in msg:
            return PermissionDenied(f"Permission denied: {path}", path=path, backend=self.name)
        if any(kw in msg for kw in ("endpoint", "connect", "timeout", "dns", "name or service")):
            return BackendUnavailable(str(exc), path=path, backend=self.name)
        return ObjSyncError(str(exc), path=path, backend=self.name)

    # endregion

    # region: helpers

    @staticmethod
    def _info_to_record(info: dict[str, Any], url: ObjectURL) -> ObjectRecord:
        """Convert an s3fs info dict to an ObjectRecord."""
        size = info.get("size", info.get("Size", 0)) or 0
        modified = info.get("LastModified", info.get("last_modified"))
        if isinstance(modified, str):
            modified = datetime.fromisoformat(modified)
        if modified is not None and modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        extra: dict[str, object] = {}
        storage_class = info.get("StorageClass")
        if storage_class:
            extra["storage_class"] = storage_class
        return ObjectRecord(
            url=url,
            size=int(size),
            mod_time=modified,
            digest=normalize_etag(info.get("ETag", info.get("etag"))),
            extra=extra,
        )

    # endregion

    def stat(self, url: ObjectURL) -> ObjectRecord:
        path = str(url)
        with self._errors(path):
            info = self._fs.info(self._s3_path(url))
            if info.get("type") != "file":
                raise NotFound(f"Not an object: {path}", path=path, backend=self.name)
            return self._info_to_record(info, url)

    def open(self, url: ObjectURL) -> BinaryIO:
        path = str(url)
        with self._errors(path):
            return self._fs.open(self._s3_path(url), "rb")  # type: ignore[no-any-return]

    def close(self) -> None:
        if self._fs_instance is not None:
            self._fs_instance.clear_instance_cache()
            self._fs_instance = None
