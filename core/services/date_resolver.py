"""Canonical date resolution for media files.

Dates come from embedded capture metadata when the reader can supply it and
fall back to the filesystem modification time otherwise. Resolution never
raises; reader failures are logged at debug level and treated as "not found".
"""

from __future__ import annotations

from loguru import logger

from core.models import DateSource, MediaFile, ResolvedDate
from core.services.interfaces import CaptureTimestampReader


class DateResolver:
    """Resolves a single authoritative timestamp per file."""

    def __init__(self, reader: CaptureTimestampReader | None = None) -> None:
        self._reader = reader

    def resolve(self, media: MediaFile) -> ResolvedDate:
        """Return the metadata capture date if available, else the modification time."""
        if self._reader is not None:
            try:
                captured = self._reader.read_capture_timestamp(media.path)
            except Exception as ex:  # pylint: disable=broad-exception-caught
                logger.debug("Capture metadata read failed for {}: {}", media.path, ex)
                captured = None
            if captured is not None:
                return ResolvedDate(value=captured, source=DateSource.METADATA)
        return ResolvedDate(value=media.modified_time, source=DateSource.FILESYSTEM_FALLBACK)
