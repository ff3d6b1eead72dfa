"""Archive plan execution service.

Interprets a plan under dry-run/apply and copy/move modes and produces one
outcome per plan row. This is the only place files are created, copied or
moved. Rows are processed strictly in order: destination names depend on the
archive state left behind by earlier rows of the same run.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import shutil

from loguru import logger

from core.errors import CollisionExhaustedError
from core.models import ExecutionMode, OutcomeRow, OutcomeStatus, PlannedAction, PlanRow
from core.services.interfaces import ConfirmationGate
from core.services.plan_service import planned_action_for
from infrastructure.collision_resolver import CollisionResolver

_DRY_RUN_STATUS = {
    PlannedAction.COPY_TO_ARCHIVE: OutcomeStatus.WOULD_COPY,
    PlannedAction.MOVE_TO_ARCHIVE: OutcomeStatus.WOULD_MOVE,
}
_APPLIED_STATUS = {
    PlannedAction.COPY_TO_ARCHIVE: OutcomeStatus.COPIED,
    PlannedAction.MOVE_TO_ARCHIVE: OutcomeStatus.MOVED,
}


def always_confirm(source_path: Path, description: str) -> bool:  # pylint: disable=unused-argument
    return True


def never_confirm(source_path: Path, description: str) -> bool:  # pylint: disable=unused-argument
    return False


class ArchiveService:
    """Executes archive plans with per-file failure isolation."""

    def __init__(self, collision_resolver: CollisionResolver | None = None) -> None:
        self._resolver = collision_resolver or CollisionResolver()

    def execute(
        self,
        plan: Iterable[PlanRow],
        mode: ExecutionMode,
        gate: ConfirmationGate | None = None,
    ) -> list[OutcomeRow]:
        """Execute `plan` and return one outcome per row, in plan order.

        Args:
            plan: Rows produced by `PlanService.build`.
            mode: Dry-run or apply, copy or move. Archivable rows whose planned action
                disagrees with `mode.move` become `Error` outcomes and are not touched.
            gate: Per-file confirmation used in apply mode; defaults to always-yes.
        """
        confirm = gate or always_confirm
        reserved: set[Path] = set()
        outcomes: list[OutcomeRow] = []
        for row in plan:
            if row.planned_action is PlannedAction.KEEP:
                outcomes.append(OutcomeRow(plan=row, status=OutcomeStatus.KEPT))
                continue
            outcomes.append(self._archive_one(row, mode, confirm, reserved))

        failed = sum(1 for o in outcomes if o.status is OutcomeStatus.ERROR)
        logger.info(
            "Executed plan ({}): {} rows, {} errors", mode.describe(), len(outcomes), failed
        )
        return outcomes

    def _archive_one(
        self,
        row: PlanRow,
        mode: ExecutionMode,
        confirm: ConfirmationGate,
        reserved: set[Path],
    ) -> OutcomeRow:
        target_dir = row.target_directory
        if target_dir is None:
            return OutcomeRow(plan=row, status=OutcomeStatus.ERROR, note="No target directory")
        if row.planned_action is not planned_action_for(True, mode.move):
            note = f"Planned action {row.planned_action.value} does not match mode {mode.describe()}"
            logger.error("{}: {}", note, row.source_path)
            return OutcomeRow(plan=row, status=OutcomeStatus.ERROR, note=note)

        try:
            if mode.apply:
                target_dir.mkdir(parents=True, exist_ok=True)
            elif target_dir.exists() and not target_dir.is_dir():
                raise NotADirectoryError(f"Target exists and is not a directory: {target_dir}")
            target = self._resolver.resolve(target_dir, row.name, reserved)
        except (CollisionExhaustedError, OSError) as ex:
            logger.error("Cannot resolve archive target for {}: {}", row.source_path, ex)
            return OutcomeRow(plan=row, status=OutcomeStatus.ERROR, note=str(ex) or repr(ex))
        reserved.add(target)

        if mode.dry_run:
            return OutcomeRow(
                plan=row, status=_DRY_RUN_STATUS[row.planned_action], target_path=target
            )

        verb = "Move" if row.planned_action is PlannedAction.MOVE_TO_ARCHIVE else "Copy"
        try:
            granted = confirm(row.source_path, f"{verb} {row.source_path} -> {target}")
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.error("Confirmation failed for {}: {}", row.source_path, ex)
            return OutcomeRow(
                plan=row,
                status=OutcomeStatus.ERROR,
                target_path=target,
                note=f"Confirmation failed: {ex}",
            )
        if not granted:
            logger.info("Skipped by confirmation: {}", row.source_path)
            return OutcomeRow(
                plan=row, status=OutcomeStatus.SKIPPED_BY_CONFIRMATION, target_path=target
            )

        try:
            self._transfer(row, target)
        except OSError as ex:
            logger.error("{} failed for {} -> {}: {}", verb, row.source_path, target, ex)
            return OutcomeRow(
                plan=row,
                status=OutcomeStatus.ERROR,
                target_path=target,
                note=f"{verb} failed: {ex}",
            )
        logger.info("{}: {} -> {}", "Moved" if verb == "Move" else "Copied", row.source_path, target)
        return OutcomeRow(plan=row, status=_APPLIED_STATUS[row.planned_action], target_path=target)

    @staticmethod
    def _transfer(row: PlanRow, target: Path) -> None:
        if target.exists():
            raise FileExistsError(f"Destination appeared during run: {target}")
        if row.planned_action is PlannedAction.MOVE_TO_ARCHIVE:
            shutil.move(str(row.source_path), str(target))
        else:
            shutil.copy2(str(row.source_path), str(target))
