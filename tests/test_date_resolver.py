"""Tests for metadata-first date resolution."""

from datetime import datetime
from pathlib import Path

from conftest import FakeCaptureReader, media_file

from core.models import DateSource
from core.services.date_resolver import DateResolver

MTIME = datetime(2024, 1, 5, 9, 0, 0)


def test_metadata_date_wins():
    reader = FakeCaptureReader({"IMG_1.jpg": datetime(2019, 6, 1, 12, 0, 0)})
    resolved = DateResolver(reader).resolve(media_file(Path("/hot/IMG_1.jpg"), MTIME))
    assert resolved.value == datetime(2019, 6, 1, 12, 0, 0)
    assert resolved.source is DateSource.METADATA


def test_missing_metadata_falls_back_to_modification_time():
    resolved = DateResolver(FakeCaptureReader()).resolve(media_file(Path("/hot/clip.mp4"), MTIME))
    assert resolved.value == MTIME
    assert resolved.source is DateSource.FILESYSTEM_FALLBACK


def test_reader_exception_never_propagates():
    reader = FakeCaptureReader(fail={"broken.jpg"})
    resolved = DateResolver(reader).resolve(media_file(Path("/hot/broken.jpg"), MTIME))
    assert resolved.value == MTIME
    assert resolved.source is DateSource.FILESYSTEM_FALLBACK
    assert reader.calls == [Path("/hot/broken.jpg")]


def test_unexpected_exception_type_is_swallowed():
    class ExplodingReader:
        def read_capture_timestamp(self, path):
            raise RuntimeError("decoder crashed")

    resolved = DateResolver(ExplodingReader()).resolve(media_file(Path("/hot/x.heic"), MTIME))
    assert resolved.source is DateSource.FILESYSTEM_FALLBACK


def test_without_reader_uses_filesystem():
    resolved = DateResolver().resolve(media_file(Path("/hot/a.png"), MTIME))
    assert resolved.source is DateSource.FILESYSTEM_FALLBACK
