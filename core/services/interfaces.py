"""Core service interfaces and shared summary structures.

Capabilities the planning engine calls through (metadata reading and
per-file confirmation) are declared here as protocols so infrastructure and
UI layers can provide interchangeable implementations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Protocol

from core.models import OutcomeStatus


class CaptureTimestampReader(Protocol):
    """Reads an embedded "original capture" timestamp from a media file."""

    def read_capture_timestamp(self, path: Path) -> datetime | None:
        """Return the capture timestamp, or None when unavailable."""
        ...


class ConfirmationGate(Protocol):
    """Decides whether a destructive per-file action may proceed."""

    def __call__(self, source_path: Path, description: str) -> bool: ...


@dataclass
class BucketSummary:
    """Outcome counts for a single year-month bucket.

    Attributes:
        year_month: `YYYY-MM` bucket label.
        counts: Number of outcomes per status.
        total_bytes: Sum of known file sizes in the bucket.
    """

    year_month: str
    counts: dict[OutcomeStatus, int] = field(default_factory=dict)
    total_bytes: int = 0

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def count(self, status: OutcomeStatus) -> int:
        return self.counts.get(status, 0)


@dataclass
class RunSummary:
    """Aggregate over all buckets of a run."""

    buckets: list[BucketSummary]

    def count(self, status: OutcomeStatus) -> int:
        return sum(b.count(status) for b in self.buckets)

    @property
    def total(self) -> int:
        return sum(b.total for b in self.buckets)

    @property
    def errors(self) -> int:
        return self.count(OutcomeStatus.ERROR)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeStatus.SKIPPED_BY_CONFIRMATION)

    @property
    def processed(self) -> int:
        return self.count(OutcomeStatus.COPIED) + self.count(OutcomeStatus.MOVED)
