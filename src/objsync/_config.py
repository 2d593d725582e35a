"""Configuration model — immutable data containers for storage and sync options."""

from __future__ import annotations

import dataclasses
from typing import Any

from objsync._strategy import SyncStrategy, select_strategy

COMPARE_SIZE_AND_MTIME = "size-and-mtime"
COMPARE_HASH = "hash"
COMPARE_MODES = (COMPARE_SIZE_AND_MTIME, COMPARE_HASH)


def _flag(data: dict[str, object], name: str) -> bool:
    value = data.get(name, False)
    if not isinstance(value, bool):
        msg = f"Expected '{name}' to be a bool, got {type(value).__name__}"
        raise TypeError(msg)
    return value


@dataclasses.dataclass(frozen=True)
class StorageOptions:
    """Options shared by all backends created for one sync run.

    :param cache_hashes: Compute local content digests during ``stat`` so later
        comparisons reuse them instead of re-reading the file.
    :param endpoint_url: Custom S3 endpoint URL (e.g. for MinIO).
    :param region_name: S3 region name.
    :param no_sign_request: Access S3 anonymously.
    :param client_options: Additional options passed to s3fs.
    """

    cache_hashes: bool = False
    endpoint_url: str | None = None
    region_name: str | None = None
    no_sign_request: bool = False
    client_options: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> StorageOptions:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Dict with any of the field names as keys.
        """
        client_options = data.get("client_options", {})
        if not isinstance(client_options, dict):
            msg = "Expected 'client_options' to be a dict"
            raise TypeError(msg)
        endpoint_url = data.get("endpoint_url")
        region_name = data.get("region_name")
        return cls(
            cache_hashes=_flag(data, "cache_hashes"),
            endpoint_url=str(endpoint_url) if endpoint_url is not None else None,
            region_name=str(region_name) if region_name is not None else None,
            no_sign_request=_flag(data, "no_sign_request"),
            client_options=dict(client_options),
        )


@dataclasses.dataclass(frozen=True)
class SyncOptions:
    """Switches that choose the sync comparison policy.

    :param size_only: Compare sizes only (``--size-only``). Takes precedence
        over ``compare``.
    :param compare: ``"size-and-mtime"`` (default) or ``"hash"``
        (``--compare=hash``).
    """

    size_only: bool = False
    compare: str = COMPARE_SIZE_AND_MTIME

    @property
    def hash_only(self) -> bool:
        return self.compare == COMPARE_HASH

    def validate(self) -> None:
        """Validate the comparison mode.

        :raises ValueError: If ``compare`` is not a known mode.
        """
        if self.compare not in COMPARE_MODES:
            raise ValueError(f"Unknown compare mode '{self.compare}'. Available modes: {list(COMPARE_MODES)}")

    def strategy(self) -> SyncStrategy:
        """Validate and build the strategy these options select."""
        self.validate()
        return select_strategy(self.size_only, self.hash_only)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> SyncOptions:
        """Construct from a plain dict.

        :param data: Dict with optional ``size_only`` and ``compare`` keys.
        """
        compare = data.get("compare", COMPARE_SIZE_AND_MTIME)
        if not isinstance(compare, str):
            msg = "Expected 'compare' to be a string"
            raise TypeError(msg)
        options = cls(size_only=_flag(data, "size_only"), compare=compare)
        options.validate()
        return options
