"""Normalized error hierarchy for objsync."""

from __future__ import annotations

from typing import Optional


class ObjSyncError(Exception):
    """Base class for all objsync errors.

    :param message: Human-readable error description.
    :param path: The location involved in the error, if any.
    :param backend: The backend name involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.backend is not None:
            parts.append(f"backend={self.backend!r}")
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.backend is not None:
            args.append(f"backend={self.backend!r}")
        return f"{cls}({', '.join(args)})"


class NotFound(ObjSyncError):
    """Raised when an object does not exist."""


class PermissionDenied(ObjSyncError):
    """Raised when access is denied by the storage backend."""


class InvalidURL(ObjSyncError):
    """Raised for malformed or empty location identifiers."""


class UnsupportedScheme(ObjSyncError):
    """Raised when no backend is registered for a URL scheme.

    :param scheme: The scheme that has no backend.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        scheme: str = "",
    ) -> None:
        self.scheme = scheme
        super().__init__(message, path=path, backend=backend)

    def __str__(self) -> str:
        base = super().__str__()
        if self.scheme:
            if base:
                return f"{base} | scheme={self.scheme!r}"
            return f"scheme={self.scheme!r}"
        return base

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else "")]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.backend is not None:
            args.append(f"backend={self.backend!r}")
        if self.scheme:
            args.append(f"scheme={self.scheme!r}")
        return f"{cls}({', '.join(args)})"


class BackendUnavailable(ObjSyncError):
    """Raised when the backend cannot be reached or initialized."""
