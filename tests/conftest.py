from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import os
from pathlib import Path

import pytest

from core.models import MediaFile


class FakeCaptureReader:
    """Capture reader returning canned timestamps keyed by file name."""

    def __init__(self, dates: dict[str, datetime] | None = None, fail: set[str] | None = None):
        self.dates = dates or {}
        self.fail = fail or set()
        self.calls: list[Path] = []

    def read_capture_timestamp(self, path: Path) -> datetime | None:
        self.calls.append(Path(path))
        if Path(path).name in self.fail:
            raise OSError(f"cannot decode {path}")
        return self.dates.get(Path(path).name)


def write_file(path: Path, modified: datetime, content: bytes | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content if content is not None else path.name.encode("utf-8"))
    ts = modified.timestamp()
    os.utime(path, (ts, ts))
    return path


def media_file(path: Path, modified: datetime, size: int | None = 10) -> MediaFile:
    return MediaFile(
        path=path,
        name=path.name,
        extension=path.suffix.lower(),
        modified_time=modified,
        size_bytes=size,
    )


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file and directory under `root` to its content."""
    result: dict[str, bytes] = {}
    if not root.exists():
        return result
    for p in sorted(root.rglob("*")):
        rel = p.relative_to(root).as_posix()
        result[rel] = p.read_bytes() if p.is_file() else b"<dir>"
    return result


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., Path]:
    def _make(relative: str, modified: datetime, content: bytes | None = None) -> Path:
        return write_file(tmp_path / relative, modified, content)

    return _make


@pytest.fixture
def fake_reader() -> FakeCaptureReader:
    return FakeCaptureReader()
