"""Sync decision engine for local and remote object collections."""

from objsync._backend import Backend
from objsync._config import StorageOptions, SyncOptions
from objsync._decide import SyncDecision, decide, decide_all
from objsync._digest import hexdigest, is_composite, resolve_digest
from objsync._errors import (
    BackendUnavailable,
    InvalidURL,
    NotFound,
    ObjSyncError,
    PermissionDenied,
    UnsupportedScheme,
)
from objsync._models import ObjectRecord
from objsync._registry import new_client, register_backend, stat
from objsync._strategy import (
    HashStrategy,
    SizeAndModificationStrategy,
    SizeOnlyStrategy,
    SyncOutcome,
    SyncStrategy,
    select_strategy,
)
from objsync._url import ObjectURL

__version__ = "0.1.0"

__all__ = [
    # Strategies
    "SyncStrategy",
    "SyncOutcome",
    "SizeOnlyStrategy",
    "SizeAndModificationStrategy",
    "HashStrategy",
    "select_strategy",
    # Decisions
    "SyncDecision",
    "decide",
    "decide_all",
    # Digests
    "resolve_digest",
    "is_composite",
    "hexdigest",
    # Storage
    "Backend",
    "new_client",
    "register_backend",
    "stat",
    # URL & Models
    "ObjectURL",
    "ObjectRecord",
    # Config
    "StorageOptions",
    "SyncOptions",
    # Errors
    "ObjSyncError",
    "NotFound",
    "PermissionDenied",
    "InvalidURL",
    "UnsupportedScheme",
    "BackendUnavailable",
    # Version
    "__version__",
]
