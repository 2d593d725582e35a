"""Shared test fixtures and marker registration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import pytest

from objsync._models import ObjectRecord
from objsync._url import ObjectURL

if TYPE_CHECKING:
    from pathlib import Path


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires external services")


@pytest.fixture
def local_record(tmp_path: Path) -> Callable[..., ObjectRecord]:
    """Write ``content`` to a temp file and return a record for it (empty digest)."""

    def _make(content: bytes, name: str = "file.bin", **kwargs: object) -> ObjectRecord:
        path = tmp_path / name
        path.write_bytes(content)
        return ObjectRecord(url=ObjectURL(str(path)), size=len(content), **kwargs)  # type: ignore[arg-type]

    return _make
