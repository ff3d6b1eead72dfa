"""Capture timestamp extraction from embedded image metadata.

Reads EXIF `DateTimeOriginal` via Pillow, with optional pillow-heif support
for HEIC/HEIF. Video containers are not decoded and always report no capture
timestamp, which makes callers fall back to the filesystem date.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError
from loguru import logger

from infrastructure.utils import parse_exif_datetime

try:  # pragma: no cover - optional dependency
    from pillow_heif import register_heif_opener  # type: ignore

    register_heif_opener()
    PIL_HEIF_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    PIL_HEIF_AVAILABLE = False

EXIF_IFD_POINTER = 0x8769
TAG_DATETIME_ORIGINAL = 36867

VIDEO_EXTENSIONS = {".mp4", ".mov", ".webm", ".avi", ".mkv", ".m4v", ".3gp", ".mts"}


class PillowCaptureReader:
    """`CaptureTimestampReader` backed by Pillow EXIF parsing."""

    def __init__(self, skip_extensions: set[str] | None = None) -> None:
        self._skip = {e.lower() for e in (skip_extensions or VIDEO_EXTENSIONS)}

    def read_capture_timestamp(self, path: Path) -> datetime | None:
        """Return EXIF DateTimeOriginal for `path`, or None when absent or malformed."""
        if Path(path).suffix.lower() in self._skip:
            return None
        try:
            with Image.open(path) as im:
                exif = im.getexif()
                if not exif:
                    return None
                raw = self._datetime_original(exif)
        except (UnidentifiedImageError, OSError, ValueError, TypeError, SyntaxError) as ex:
            logger.debug("EXIF read failed for {}: {}", path, ex)
            return None
        if raw is None:
            return None
        parsed = parse_exif_datetime(raw)
        if parsed is None:
            logger.debug("Ignoring malformed DateTimeOriginal {!r} in {}", raw, path)
        return parsed

    @staticmethod
    def _datetime_original(exif: Any) -> Any:
        # Cameras store DateTimeOriginal in the Exif sub-IFD; some writers put it in IFD0
        try:
            sub_ifd = exif.get_ifd(EXIF_IFD_POINTER)
        except (KeyError, ValueError, TypeError, OSError):
            sub_ifd = None
        if sub_ifd:
            value = sub_ifd.get(TAG_DATETIME_ORIGINAL)
            if value:
                return value
        return exif.get(TAG_DATETIME_ORIGINAL)
