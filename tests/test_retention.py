"""Tests for retention cutoff arithmetic."""

from datetime import datetime
from pathlib import Path

import pytest

from core.errors import ConfigurationError
from core.services.retention import (
    archive_directory_for,
    compute_cutoff,
    validate_keep_months,
    year_month_bucket,
)


class TestComputeCutoff:
    def test_six_months_in_march(self):
        cutoff = compute_cutoff(6, datetime(2026, 3, 15, 13, 45, 10))
        assert cutoff.boundary == datetime(2025, 10, 1, 0, 0, 0)
        assert cutoff.keep_months == 6

    def test_boundary_is_strict(self):
        cutoff = compute_cutoff(6, datetime(2026, 3, 15))
        assert cutoff.is_archivable(datetime(2025, 9, 30, 23, 59, 59))
        assert not cutoff.is_archivable(datetime(2025, 10, 1, 0, 0, 0))

    def test_one_month_keeps_only_current_month(self):
        cutoff = compute_cutoff(1, datetime(2024, 2, 29, 23, 59))
        assert cutoff.boundary == datetime(2024, 2, 1)

    def test_month_end_reference_dates(self):
        # Day-of-month of `now` must not leak into the result
        assert compute_cutoff(2, datetime(2024, 3, 31)).boundary == datetime(2024, 2, 1)
        assert compute_cutoff(12, datetime(2024, 1, 31)).boundary == datetime(2023, 2, 1)
        assert compute_cutoff(24, datetime(2026, 1, 1)).boundary == datetime(2024, 2, 1)

    @pytest.mark.parametrize("keep_months", range(1, 25))
    @pytest.mark.parametrize(
        "now",
        [
            datetime(2026, 3, 15, 8, 30),
            datetime(2024, 2, 29, 12, 0),
            datetime(2025, 12, 31, 23, 59, 59),
            datetime(2023, 1, 1, 0, 0),
        ],
    )
    def test_cutoff_is_keep_minus_one_calendar_months_before_month_start(self, keep_months, now):
        boundary = compute_cutoff(keep_months, now).boundary
        assert boundary.day == 1
        assert (boundary.hour, boundary.minute, boundary.second, boundary.microsecond) == (
            0,
            0,
            0,
            0,
        )
        months_back = (now.year * 12 + now.month) - (boundary.year * 12 + boundary.month)
        assert months_back == keep_months - 1


class TestValidateKeepMonths:
    @pytest.mark.parametrize("value", [1, 6, 24, "12"])
    def test_accepts_valid_values(self, value):
        assert validate_keep_months(value) == int(value)

    @pytest.mark.parametrize("value", [0, 25, -3, "abc", None, 2.5])
    def test_rejects_invalid_values(self, value):
        with pytest.raises(ConfigurationError):
            validate_keep_months(value)


def test_year_month_bucket_is_zero_padded():
    assert year_month_bucket(datetime(2024, 1, 5)) == "2024-01"
    assert year_month_bucket(datetime(987, 11, 5)) == "0987-11"


def test_archive_directory_for_is_pure(tmp_path):
    root = tmp_path / "archive"
    target = archive_directory_for(root, datetime(2024, 1, 5, 10, 0))
    assert target == Path(root) / "2024" / "2024-01"
    assert not root.exists()
