"""ViewModel orchestrating scan, planning, execution and reporting of an archive run."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from loguru import logger

from core.models import ExecutionMode, OutcomeRow, PlanRow
from core.services.date_resolver import DateResolver
from core.services.interfaces import ConfirmationGate, RunSummary
from core.services.plan_service import PlanService
from core.services.retention import compute_cutoff
from core.services.summary_service import SummaryService
from infrastructure.archive_service import ArchiveService
from infrastructure.csv_repository import CsvArchiveLogRepository, write_run_reports
from infrastructure.metadata_service import PillowCaptureReader
from infrastructure.scanner import scan_media_files
from infrastructure.settings import ArchiveConfig

EXIT_OK = 0
EXIT_FILE_ERRORS = 1
EXIT_FATAL = 2
EXIT_SKIPPED = 3


@dataclass
class RunResult:
    plan: list[PlanRow]
    outcomes: list[OutcomeRow]
    summary: RunSummary
    report_paths: tuple[Path, Path] | None = None


def exit_code_for(summary: RunSummary) -> int:
    """Map a run summary to a process exit status."""
    if summary.errors:
        return EXIT_FILE_ERRORS
    if summary.skipped:
        return EXIT_SKIPPED
    return EXIT_OK


class ArchiveVM:
    """Application view-model for one archive configuration.

    Mediates between discovery, the planning engine and the executor, and
    optionally writes plan/outcome CSV reports.
    """

    def __init__(
        self,
        config: ArchiveConfig,
        planner: PlanService | None = None,
        archiver: ArchiveService | None = None,
        summarizer: SummaryService | None = None,
        repo: CsvArchiveLogRepository | None = None,
        report_dir: str | Path | None = None,
    ) -> None:
        """Create an ArchiveVM.

        Args:
            config: Validated run configuration.
            planner: Plan service (defaults to Pillow-backed date resolution).
            archiver: Executor (defaults to `ArchiveService`).
            summarizer: Outcome aggregation (defaults to `SummaryService`).
            repo: CSV repository used for reports.
            report_dir: Directory for plan/outcome CSVs; None disables reports.
        """
        self.config = config
        self._planner = planner or PlanService(DateResolver(PillowCaptureReader()))
        self._archiver = archiver or ArchiveService()
        self._summarizer = summarizer or SummaryService()
        self._repo = repo or CsvArchiveLogRepository()
        self._report_dir = Path(report_dir) if report_dir is not None else None

    def build_plan(self, now: datetime, move: bool | None = None) -> list[PlanRow]:
        """Scan the source directory and plan every allowed file against the cutoff at `now`."""
        files = scan_media_files(self.config.source_dir, self.config.extensions)
        cutoff = compute_cutoff(self.config.keep_months, now)
        return self._planner.build(
            files,
            cutoff,
            self.config.archive_root,
            move=self.config.move if move is None else move,
        )

    def run(
        self, mode: ExecutionMode, now: datetime, gate: ConfirmationGate | None = None
    ) -> RunResult:
        """Plan and execute one run under `mode`."""
        logger.info(
            "Archive run: source={} archive={} keep_months={} mode={}",
            self.config.source_dir,
            self.config.archive_root,
            self.config.keep_months,
            mode.describe(),
        )
        plan = self.build_plan(now, move=mode.move)
        outcomes = self._archiver.execute(plan, mode, gate)
        summary = self._summarizer.summarize(outcomes)

        report_paths = None
        if self._report_dir is not None:
            try:
                report_paths = write_run_reports(self._report_dir, plan, outcomes, now, self._repo)
            except OSError as ex:
                logger.error("Write run reports failed: {}", ex)
        return RunResult(plan=plan, outcomes=outcomes, summary=summary, report_paths=report_paths)
