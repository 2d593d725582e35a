"""Backend factory — maps URL schemes to backend classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from objsync._config import StorageOptions
from objsync._errors import UnsupportedScheme
from objsync._url import LOCAL_SCHEME, ObjectURL

if TYPE_CHECKING:
    import os

    from objsync._backend import Backend
    from objsync._models import ObjectRecord

# Global backend factory registry: maps URL schemes to backend classes.
_BACKEND_FACTORIES: dict[str, type[Backend]] = {}


def register_backend(scheme: str, cls: type[Backend]) -> None:
    """Register a backend class for a URL scheme.

    :param scheme: The scheme (e.g. ``"s3"``), ``"file"`` for local paths.
    :param cls: The backend class; instantiated with a ``StorageOptions``.
    """
    _BACKEND_FACTORIES[scheme.lower()] = cls


def _register_builtin_backends() -> None:
    """Register the built-in backends."""
    from objsync.backends._local import LocalBackend
    from objsync.backends._s3 import S3Backend

    _BACKEND_FACTORIES.setdefault(LOCAL_SCHEME, LocalBackend)
    _BACKEND_FACTORIES.setdefault("s3", S3Backend)


def new_client(url: ObjectURL, options: StorageOptions | None = None) -> Backend:
    """Create the backend that serves ``url``.

    :param url: Location whose scheme selects the backend.
    :param options: Storage options, defaults to ``StorageOptions()``.
    :raises UnsupportedScheme: If no backend is registered for the scheme.
    """
    _register_builtin_backends()
    if url.scheme not in _BACKEND_FACTORIES:
        raise UnsupportedScheme(
            f"No backend for scheme '{url.scheme}'. Registered schemes: {sorted(_BACKEND_FACTORIES.keys())}",
            path=str(url),
            scheme=url.scheme,
        )
    return _BACKEND_FACTORIES[url.scheme](options or StorageOptions())


def stat(url: ObjectURL | str | os.PathLike[str], options: StorageOptions | None = None) -> ObjectRecord:
    """Describe a single object with a short-lived backend.

    With ``options.cache_hashes`` set, local records come back with their
    content digest already computed.

    :raises NotFound: If the object does not exist.
    """
    if not isinstance(url, ObjectURL):
        url = ObjectURL(url)
    with new_client(url, options) as backend:
        return backend.stat(url)
