"""Retention window arithmetic.

The cutoff is the first instant of the current month shifted back by
`keep_months - 1` calendar months, so the current month is always part of the
retained range. Month arithmetic is done on (year, month) pairs rather than
day counts.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from core.errors import ConfigurationError
from core.models import RetentionCutoff

MIN_KEEP_MONTHS = 1
MAX_KEEP_MONTHS = 24


def validate_keep_months(value: object) -> int:
    """Return `value` as an int within the supported range or raise ConfigurationError."""
    try:
        months = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as ex:
        raise ConfigurationError(f"keep months must be an integer, got {value!r}") from ex
    if isinstance(value, float) and value != months:
        raise ConfigurationError(f"keep months must be an integer, got {value!r}")
    if not MIN_KEEP_MONTHS <= months <= MAX_KEEP_MONTHS:
        raise ConfigurationError(
            f"keep months must be between {MIN_KEEP_MONTHS} and {MAX_KEEP_MONTHS}, got {months}"
        )
    return months


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def shift_months(value: datetime, months: int) -> datetime:
    """Shift a first-of-month `value` by `months` calendar months (negative goes back)."""
    index = value.year * 12 + (value.month - 1) + months
    year, month0 = divmod(index, 12)
    return value.replace(year=year, month=month0 + 1)


def compute_cutoff(keep_months: int, now: datetime) -> RetentionCutoff:
    """Compute the retention boundary for `keep_months` evaluated at `now`.

    Example: keep_months=6 on 2026-03-15 gives 2025-10-01 00:00:00, so October
    through March are retained.
    """
    boundary = shift_months(start_of_month(now), -(keep_months - 1))
    return RetentionCutoff(boundary=boundary, keep_months=keep_months)


def year_month_bucket(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def archive_directory_for(archive_root: Path, value: datetime) -> Path:
    """Return `archive_root/YYYY/YYYY-MM` for `value` without touching the filesystem."""
    return Path(archive_root) / f"{value.year:04d}" / year_month_bucket(value)
