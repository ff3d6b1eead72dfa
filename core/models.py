"""Core domain models for media files, archive plans and outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class DateSource(str, Enum):
    """Where a resolved date came from."""

    METADATA = "metadata"
    FILESYSTEM_FALLBACK = "filesystem-fallback"


class PlannedAction(str, Enum):
    KEEP = "Keep"
    COPY_TO_ARCHIVE = "CopyToArchive"
    MOVE_TO_ARCHIVE = "MoveToArchive"


class OutcomeStatus(str, Enum):
    KEPT = "Kept"
    WOULD_COPY = "WouldCopy"
    WOULD_MOVE = "WouldMove"
    COPIED = "Copied"
    MOVED = "Moved"
    SKIPPED_BY_CONFIRMATION = "SkippedByConfirmation"
    ERROR = "Error"


@dataclass(frozen=True)
class MediaFile:
    """A file discovered in the source directory."""

    path: Path
    name: str
    extension: str
    modified_time: datetime
    size_bytes: int | None = None


@dataclass(frozen=True)
class ResolvedDate:
    value: datetime
    source: DateSource


@dataclass(frozen=True)
class RetentionCutoff:
    """First instant that is still retained; anything strictly earlier is archivable."""

    boundary: datetime
    keep_months: int

    def is_archivable(self, value: datetime) -> bool:
        return value < self.boundary


@dataclass(frozen=True)
class PlanRow:
    """Planned disposition for a single media file.

    Attributes:
        source_path: Absolute path of the file in the source directory.
        name: File name including extension.
        extension: Lower-cased extension with leading dot.
        resolved_date: Canonical date used for bucketing and disposition.
        date_source: Provenance of `resolved_date`.
        year_month: `YYYY-MM` bucket of `resolved_date`.
        cutoff: Retention boundary the row was planned against.
        is_archivable: Whether `resolved_date` is earlier than `cutoff`.
        planned_action: Keep, copy or move.
        target_directory: Derived archive directory; None for kept files.
        size_bytes: File size when known.
    """

    source_path: Path
    name: str
    extension: str
    resolved_date: datetime
    date_source: DateSource
    year_month: str
    cutoff: datetime
    is_archivable: bool
    planned_action: PlannedAction
    target_directory: Path | None = None
    size_bytes: int | None = None


@dataclass(frozen=True)
class OutcomeRow:
    """Result of executing a single plan row."""

    plan: PlanRow
    status: OutcomeStatus
    target_path: Path | None = None
    note: str | None = None

    @property
    def source_path(self) -> Path:
        return self.plan.source_path

    @property
    def year_month(self) -> str:
        return self.plan.year_month


@dataclass(frozen=True)
class ExecutionMode:
    """Dry-run/apply combined with copy/move."""

    apply: bool = False
    move: bool = False

    @property
    def dry_run(self) -> bool:
        return not self.apply

    def describe(self) -> str:
        verb = "move" if self.move else "copy"
        return f"{'apply' if self.apply else 'dry-run'}/{verb}"
