"""Backend implementations."""

from objsync.backends._local import LocalBackend
from objsync.backends._s3 import S3Backend

__all__ = ["LocalBackend", "S3Backend"]
