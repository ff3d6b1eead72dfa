"""Utilities for date parsing (EXIF and CSV), formatting and extension lists.

This module centralizes date parsing/formatting so the rest of the app can
depend on a single behavior. Parsing is best-effort and does not raise;
callers should expect `None` when data is not available.
"""

from __future__ import annotations

from datetime import datetime
import re

CSV_DT_FMT = "%Y-%m-%d %H:%M:%S"
EXIF_DT_FMT = "%Y:%m:%d %H:%M:%S"

_EXIF_DT_RE = re.compile(r"\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2}")


def parse_exif_datetime(value: object) -> datetime | None:
    """Parse an EXIF `YYYY:MM:DD HH:MM:SS` value strictly; None on any deviation."""
    if value is None:
        return None
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            return None
    if not isinstance(value, str):
        return None
    # EXIF ASCII fields are NUL terminated/padded
    text = value.rstrip("\x00").strip()
    if not _EXIF_DT_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, EXIF_DT_FMT)
    except ValueError:
        return None


def parse_csv_datetime(value: str | None) -> datetime | None:
    """Parse timestamp from CSV using CSV_DT_FMT; return None on failure."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), CSV_DT_FMT)
    except (ValueError, TypeError):
        return None


def format_csv_datetime(dt: datetime | None) -> str:
    """Format datetime for CSV; empty string when None."""
    try:
        return dt.strftime(CSV_DT_FMT) if dt else ""
    except (ValueError, TypeError, AttributeError):
        return ""


def normalize_extensions(extensions: object) -> frozenset[str]:
    """Normalize an allow-list to lower-cased `.ext` entries.

    Accepts an iterable of strings or a single comma separated string.
    """
    if extensions is None:
        return frozenset()
    if isinstance(extensions, str):
        items = extensions.split(",")
    else:
        items = [str(e) for e in extensions]  # type: ignore[union-attr]
    result: set[str] = set()
    for item in items:
        ext = item.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        result.add(ext)
    return frozenset(result)
