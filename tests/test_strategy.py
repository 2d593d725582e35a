"""Tests for sync strategies and strategy selection."""

from __future__ import annotations

import dataclasses
import hashlib
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable
from unittest import mock

import pytest

from objsync._config import StorageOptions
from objsync._models import ObjectRecord
from objsync._strategy import (
    HashStrategy,
    SizeAndModificationStrategy,
    SizeOnlyStrategy,
    SyncOutcome,
    SyncStrategy,
    select_strategy,
)
from objsync._url import ObjectURL
from objsync.backends._local import LocalBackend

if TYPE_CHECKING:
    from pathlib import Path

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
OLDER = NOW - timedelta(hours=1)
NEWER = NOW + timedelta(hours=1)


def _remote(size: int, digest: str = "", mod_time: datetime | None = None, key: str = "key") -> ObjectRecord:
    return ObjectRecord(url=ObjectURL(f"s3://bucket/{key}"), size=size, mod_time=mod_time, digest=digest)


class TestSyncOutcome:
    def test_only_proceed_syncs(self) -> None:
        assert SyncOutcome.PROCEED.should_sync is True
        for outcome in (SyncOutcome.SIZES_MATCH, SyncOutcome.NEWER_AND_SIZES_MATCH, SyncOutcome.DIGESTS_MATCH):
            assert outcome.should_sync is False

    def test_reasons(self) -> None:
        assert SyncOutcome.SIZES_MATCH.reason == "object size matches"
        assert SyncOutcome.NEWER_AND_SIZES_MATCH.reason == "object is newer or same age and sizes match"
        assert SyncOutcome.DIGESTS_MATCH.reason == "object digest matches"


class TestDifferentSizesAlwaysSync:
    @pytest.mark.parametrize("strategy", [SizeOnlyStrategy(), SizeAndModificationStrategy(), HashStrategy()])
    def test_proceeds(self, strategy: SyncStrategy) -> None:
        src = _remote(100, digest="same", mod_time=OLDER, key="a")
        dst = _remote(200, digest="same", mod_time=NEWER, key="b")
        assert strategy.should_sync(src, dst) is SyncOutcome.PROCEED


class TestSizeOnlyStrategy:
    def test_name(self) -> None:
        assert SizeOnlyStrategy().name == "size-only"

    def test_same_size_skips(self) -> None:
        src = _remote(100, key="a")
        dst = _remote(100, key="b")
        assert SizeOnlyStrategy().should_sync(src, dst) is SyncOutcome.SIZES_MATCH

    def test_ignores_digest_and_time(self) -> None:
        src = _remote(100, digest="aaa", mod_time=NEWER, key="a")
        dst = _remote(100, digest="bbb", mod_time=OLDER, key="b")
        assert SizeOnlyStrategy().should_sync(src, dst) is SyncOutcome.SIZES_MATCH


class TestSizeAndModificationStrategy:
    def test_name(self) -> None:
        assert SizeAndModificationStrategy().name == "size-and-mtime"

    @pytest.mark.parametrize(
        ("src_time", "dst_time", "src_size", "dst_size", "expected"),
        [
            pytest.param(NEWER, OLDER, 100, 200, SyncOutcome.PROCEED, id="newer source, different size"),
            pytest.param(NEWER, OLDER, 100, 100, SyncOutcome.PROCEED, id="newer source, same size"),
            pytest.param(OLDER, NEWER, 100, 200, SyncOutcome.PROCEED, id="older source, different size"),
            pytest.param(
                OLDER, NEWER, 100, 100, SyncOutcome.NEWER_AND_SIZES_MATCH, id="older source, same size"
            ),
            pytest.param(NOW, NOW, 100, 100, SyncOutcome.NEWER_AND_SIZES_MATCH, id="same time, same size"),
        ],
    )
    def test_cases(
        self,
        src_time: datetime,
        dst_time: datetime,
        src_size: int,
        dst_size: int,
        expected: SyncOutcome,
    ) -> None:
        src = _remote(src_size, mod_time=src_time, key="a")
        dst = _remote(dst_size, mod_time=dst_time, key="b")
        assert SizeAndModificationStrategy().should_sync(src, dst) is expected

    @pytest.mark.parametrize(
        ("src_time", "dst_time"),
        [(None, NOW), (NOW, None), (None, None)],
        ids=["missing source time", "missing destination time", "both missing"],
    )
    def test_missing_mod_time_syncs(self, src_time: datetime | None, dst_time: datetime | None) -> None:
        src = _remote(100, mod_time=src_time, key="a")
        dst = _remote(100, mod_time=dst_time, key="b")
        assert SizeAndModificationStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    def test_missing_mod_time_with_different_size(self) -> None:
        src = _remote(1, key="a")
        dst = _remote(2, key="b")
        assert SizeAndModificationStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    def test_naive_source_older_than_aware_destination(self) -> None:
        src = _remote(100, mod_time=datetime(2024, 1, 1), key="a")
        dst = _remote(100, mod_time=datetime(2024, 1, 2, tzinfo=timezone.utc), key="b")
        assert SizeAndModificationStrategy().should_sync(src, dst) is SyncOutcome.NEWER_AND_SIZES_MATCH

    def test_naive_source_newer_than_aware_destination(self) -> None:
        src = _remote(100, mod_time=datetime(2024, 1, 2), key="a")
        dst = _remote(100, mod_time=datetime(2024, 1, 1, tzinfo=timezone.utc), key="b")
        assert SizeAndModificationStrategy().should_sync(src, dst) is SyncOutcome.PROCEED


class TestHashStrategyRemote:
    def test_name(self) -> None:
        assert HashStrategy().name == "hash"

    def test_same_etags_skip(self) -> None:
        src = _remote(100, digest="sameetag", key="a")
        dst = _remote(100, digest="sameetag", key="b")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.DIGESTS_MATCH

    def test_different_etags_sync(self) -> None:
        src = _remote(100, digest="sameetag", key="a")
        dst = _remote(100, digest="differentetag", key="b")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    @pytest.mark.parametrize(
        ("src_etag", "dst_etag"),
        [("etag1-5", "etag2"), ("etag1", "etag2-3"), ("etag1-5", "etag2-3"), ("same-2", "same-2")],
    )
    def test_composite_etags_always_sync(self, src_etag: str, dst_etag: str) -> None:
        src = _remote(100, digest=src_etag, key="a")
        dst = _remote(100, digest=dst_etag, key="b")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    def test_empty_etags_sync(self) -> None:
        src = _remote(100, key="a")
        dst = _remote(100, key="b")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    def test_ignores_mod_time(self) -> None:
        src = _remote(100, digest="x", mod_time=NEWER, key="a")
        dst = _remote(100, digest="x", mod_time=OLDER, key="b")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.DIGESTS_MATCH


class TestHashStrategyLocal:
    def test_remote_to_local_identical(self, local_record: Callable[..., ObjectRecord]) -> None:
        content = b"Hello, World!"
        src = _remote(len(content), digest=hashlib.md5(content).hexdigest())
        dst = local_record(content)
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.DIGESTS_MATCH

    def test_identical_local_files(self, local_record: Callable[..., ObjectRecord]) -> None:
        src = local_record(b"same bytes", name="src")
        dst = local_record(b"same bytes", name="dst")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.DIGESTS_MATCH

    def test_one_byte_changed(self, local_record: Callable[..., ObjectRecord]) -> None:
        src = local_record(b"same bytes", name="src")
        dst = local_record(b"same bytez", name="dst")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    def test_empty_files(self, local_record: Callable[..., ObjectRecord]) -> None:
        src = local_record(b"", name="src")
        dst = local_record(b"", name="dst")
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.DIGESTS_MATCH

    def test_unreadable_file_syncs(self, local_record: Callable[..., ObjectRecord], tmp_path: Path) -> None:
        src = local_record(b"content", name="src")
        dst = ObjectRecord(url=ObjectURL(str(tmp_path / "gone")), size=src.size)
        assert HashStrategy().should_sync(src, dst) is SyncOutcome.PROCEED

    def test_composite_remote_skips_local_read(self, local_record: Callable[..., ObjectRecord]) -> None:
        dst = local_record(b"content")
        src = _remote(dst.size, digest="abc-2")
        with mock.patch.object(LocalBackend, "open") as opener:
            assert HashStrategy().should_sync(src, dst) is SyncOutcome.PROCEED
        opener.assert_not_called()

    def test_cached_digest_skips_local_read(self, local_record: Callable[..., ObjectRecord]) -> None:
        content = b"cached content"
        digest = hashlib.md5(content).hexdigest()
        dst = dataclasses.replace(local_record(content), digest=digest)
        src = _remote(len(content), digest=digest)
        with mock.patch.object(LocalBackend, "open") as opener:
            assert HashStrategy().should_sync(src, dst) is SyncOutcome.DIGESTS_MATCH
        opener.assert_not_called()


class TestHashCachingStatPath:
    def test_with_and_without_cache(self, tmp_path: Path) -> None:
        content = b"Hello, World! This is a performance test."
        expected = hashlib.md5(content).hexdigest()
        path = tmp_path / "testfile.txt"
        path.write_bytes(content)
        url = ObjectURL(str(path))

        dst_plain = LocalBackend(StorageOptions(cache_hashes=False)).stat(url)
        dst_cached = LocalBackend(StorageOptions(cache_hashes=True)).stat(url)
        src = _remote(len(content), digest=expected, key="testfile.txt")

        assert dst_plain.digest == ""
        assert dst_cached.digest == expected
        assert HashStrategy().should_sync(src, dst_plain) is SyncOutcome.DIGESTS_MATCH
        with mock.patch.object(LocalBackend, "open") as opener:
            assert HashStrategy().should_sync(src, dst_cached) is SyncOutcome.DIGESTS_MATCH
        opener.assert_not_called()


class TestSelectStrategy:
    @pytest.mark.parametrize(
        ("size_only", "hash_only", "expected"),
        [
            (True, False, SizeOnlyStrategy),
            (False, True, HashStrategy),
            (False, False, SizeAndModificationStrategy),
            (True, True, SizeOnlyStrategy),
        ],
    )
    def test_selection(self, size_only: bool, hash_only: bool, expected: type[SyncStrategy]) -> None:
        assert type(select_strategy(size_only, hash_only)) is expected

    def test_repr(self) -> None:
        assert repr(select_strategy(False, False)) == "SizeAndModificationStrategy()"
