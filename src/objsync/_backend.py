"""Backend abstract base class — the storage contract the sync core consumes."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from types import TracebackType

    from objsync._models import ObjectRecord
    from objsync._url import ObjectURL


class Backend(abc.ABC):
    """Abstract base class for all storage backends.

    Backend-native exceptions must never leak — they must be mapped to
    ``objsync`` errors.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Unique identifier for this backend type (e.g. ``'local'``, ``'s3'``)."""

    @abc.abstractmethod
    def stat(self, url: ObjectURL) -> ObjectRecord:
        """Describe a single object.

        :raises NotFound: If the object does not exist.
        :raises PermissionDenied: If the object cannot be accessed.
        """

    @abc.abstractmethod
    def open(self, url: ObjectURL) -> BinaryIO:
        """Open an object for sequential reading. The caller closes the stream.

        :raises NotFound: If the object does not exist.
        :raises PermissionDenied: If the object cannot be read.
        """

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

    def __enter__(self) -> Backend:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
