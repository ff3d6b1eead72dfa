"""Archive planning service.

Builds one immutable `PlanRow` per media file, in input order. Planning is
side-effect free: target directories are derived from the resolved date but
never created or checked on disk.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from core.models import DateSource, MediaFile, PlannedAction, PlanRow, RetentionCutoff
from core.services.date_resolver import DateResolver
from core.services.retention import archive_directory_for, year_month_bucket


def planned_action_for(is_archivable: bool, move: bool) -> PlannedAction:
    """Map archivability and the copy/move choice to a planned action."""
    if not is_archivable:
        return PlannedAction.KEEP
    return PlannedAction.MOVE_TO_ARCHIVE if move else PlannedAction.COPY_TO_ARCHIVE


class PlanService:
    """Produces archive plans from discovered media files."""

    def __init__(self, date_resolver: DateResolver | None = None) -> None:
        self._resolver = date_resolver or DateResolver()

    def build(
        self,
        files: Iterable[MediaFile],
        cutoff: RetentionCutoff,
        archive_root: str | Path,
        move: bool = False,
    ) -> list[PlanRow]:
        """Build the plan for `files` against `cutoff`.

        Args:
            files: Media files in enumeration order; the plan keeps this order.
            cutoff: Retention boundary for the run.
            archive_root: Root of the `YYYY/YYYY-MM` archive tree.
            move: Plan moves instead of copies for archivable files.
        """
        root = Path(archive_root)
        rows: list[PlanRow] = []
        for media in files:
            resolved = self._resolver.resolve(media)
            archivable = cutoff.is_archivable(resolved.value)
            action = planned_action_for(archivable, move)
            rows.append(
                PlanRow(
                    source_path=media.path,
                    name=media.name,
                    extension=media.extension,
                    resolved_date=resolved.value,
                    date_source=resolved.source,
                    year_month=year_month_bucket(resolved.value),
                    cutoff=cutoff.boundary,
                    is_archivable=archivable,
                    planned_action=action,
                    target_directory=(
                        archive_directory_for(root, resolved.value) if archivable else None
                    ),
                    size_bytes=media.size_bytes,
                )
            )

        archivable_count = sum(1 for r in rows if r.is_archivable)
        fallback_count = sum(1 for r in rows if r.date_source is DateSource.FILESYSTEM_FALLBACK)
        logger.info(
            "Plan built: {} files | archivable={} kept={} fallback_dates={} cutoff={}",
            len(rows),
            archivable_count,
            len(rows) - archivable_count,
            fallback_count,
            cutoff.boundary.isoformat(),
        )
        return rows
