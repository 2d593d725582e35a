"""ObjectURL — immutable location identifier for local paths and remote objects."""

from __future__ import annotations

import os
from typing import Final

from objsync._errors import InvalidURL

LOCAL_SCHEME: Final = "file"
_SCHEME_SEP: Final = "://"


class ObjectURL:
    """An immutable, parsed object location.

    ``s3://bucket/key`` style strings denote remote objects. ``file:///path``
    and everything without a scheme is a local filesystem path, used verbatim.

    :param raw: The location string or path-like object.
    :raises InvalidURL: If the location is empty or malformed.
    """

    __slots__ = ("_scheme", "_bucket", "_key", "_path")
    _scheme: Final[str]  # type: ignore[misc]
    _bucket: Final[str]  # type: ignore[misc]
    _key: Final[str]  # type: ignore[misc]
    _path: Final[str]  # type: ignore[misc]

    def __init__(self, raw: str | os.PathLike[str]) -> None:
        raw = os.fspath(raw)
        if not raw:
            raise InvalidURL("URL is empty", path=raw)
        if "\0" in raw:
            raise InvalidURL("URL contains null byte", path=raw)

        scheme, sep, rest = raw.partition(_SCHEME_SEP)
        if sep and scheme.lower() == LOCAL_SCHEME:
            host, slash, local = rest.partition("/")
            if host not in ("", "localhost"):
                raise InvalidURL(f"file URL with a remote host is not supported: {host!r}", path=raw)
            if not slash:
                raise InvalidURL("file URL has no path", path=raw)
            scheme, bucket, key, path = LOCAL_SCHEME, "", "", f"/{local}"
        elif sep and scheme:
            bucket, _, key = rest.partition("/")
            if not bucket:
                raise InvalidURL("Remote URL has no bucket", path=raw)
            scheme = scheme.lower()
            path = f"{bucket}/{key}" if key else bucket
        else:
            scheme, bucket, key, path = LOCAL_SCHEME, "", "", raw

        object.__setattr__(self, "_scheme", scheme)
        object.__setattr__(self, "_bucket", bucket)
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_path", path)

    @property
    def scheme(self) -> str:
        """URL scheme, ``"file"`` for local paths."""
        return self._scheme

    @property
    def is_remote(self) -> bool:
        return self._scheme != LOCAL_SCHEME

    @property
    def bucket(self) -> str:
        """Bucket name, or empty string for local paths."""
        return self._bucket

    @property
    def key(self) -> str:
        """Object key within the bucket, or empty string for local paths."""
        return self._key

    @property
    def path(self) -> str:
        """Filesystem path for local URLs, ``bucket/key`` for remote ones."""
        return self._path

    @property
    def name(self) -> str:
        """Final component of the location."""
        return self._path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]

    def __str__(self) -> str:
        if self.is_remote:
            return f"{self._scheme}{_SCHEME_SEP}{self._path}"
        return self._path

    def __repr__(self) -> str:
        return f"ObjectURL({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjectURL):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"ObjectURL is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ObjectURL is immutable: cannot delete '{name}'")
