"""CSV persistence for archive plans and outcomes.

Column order is fixed by `PLAN_HEADERS` and `OUTCOME_HEADERS`; optional fields
that are absent on a row are written as empty strings so every run produces
the same column set.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import csv
from datetime import datetime
from pathlib import Path

from loguru import logger

from core.models import OutcomeRow, PlanRow
from infrastructure.utils import format_csv_datetime, parse_csv_datetime

PLAN_HEADERS = [
    "SourcePath",
    "Name",
    "Extension",
    "ResolvedDate",
    "DateSource",
    "YearMonth",
    "Cutoff",
    "IsArchivable",
    "PlannedAction",
    "TargetDirectory",
    "FileSize",
]

OUTCOME_HEADERS = PLAN_HEADERS + ["TargetPath", "Result", "Note"]


def plan_row_record(row: PlanRow) -> dict[str, str | int]:
    """Flatten a plan row into a CSV record keyed by `PLAN_HEADERS`."""
    return {
        "SourcePath": str(row.source_path),
        "Name": row.name,
        "Extension": row.extension,
        "ResolvedDate": format_csv_datetime(row.resolved_date),
        "DateSource": row.date_source.value,
        "YearMonth": row.year_month,
        "Cutoff": format_csv_datetime(row.cutoff),
        "IsArchivable": 1 if row.is_archivable else 0,
        "PlannedAction": row.planned_action.value,
        "TargetDirectory": str(row.target_directory) if row.target_directory else "",
        "FileSize": row.size_bytes if row.size_bytes is not None else "",
    }


def outcome_row_record(row: OutcomeRow) -> dict[str, str | int]:
    """Flatten an outcome row into a CSV record keyed by `OUTCOME_HEADERS`."""
    record = plan_row_record(row.plan)
    record["TargetPath"] = str(row.target_path) if row.target_path else ""
    record["Result"] = row.status.value
    record["Note"] = row.note or ""
    return record


class CsvArchiveLogRepository:
    """Write plan/outcome logs and read outcome logs back."""

    def save_plan(self, csv_path: str | Path, rows: Iterable[PlanRow]) -> None:
        """Write plan rows to `csv_path` using `PLAN_HEADERS`."""
        self._write(csv_path, PLAN_HEADERS, (plan_row_record(r) for r in rows))

    def save_outcomes(self, csv_path: str | Path, rows: Iterable[OutcomeRow]) -> None:
        """Write outcome rows to `csv_path` using `OUTCOME_HEADERS`."""
        self._write(csv_path, OUTCOME_HEADERS, (outcome_row_record(r) for r in rows))

    def load_outcomes(self, csv_path: str | Path) -> Iterator[dict[str, object]]:
        """Yield outcome records from `csv_path` with dates parsed back to datetimes."""
        path = Path(csv_path)
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            missing = [h for h in OUTCOME_HEADERS if h not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"CSV missing required headers: {missing}")
            for row in reader:
                record: dict[str, object] = dict(row)
                record["ResolvedDate"] = parse_csv_datetime(row.get("ResolvedDate"))
                record["Cutoff"] = parse_csv_datetime(row.get("Cutoff"))
                record["IsArchivable"] = str(row.get("IsArchivable", "")).strip() in {"1", "true"}
                yield record

    @staticmethod
    def _write(
        csv_path: str | Path, headers: list[str], records: Iterable[dict[str, str | int]]
    ) -> None:
        path = Path(csv_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=headers)
            writer.writeheader()
            for record in records:
                writer.writerow(record)


def write_run_reports(
    report_dir: str | Path,
    plan: list[PlanRow],
    outcomes: list[OutcomeRow],
    now: datetime,
    repo: CsvArchiveLogRepository | None = None,
) -> tuple[Path, Path]:
    """Write `plan_<ts>.csv` and `outcome_<ts>.csv` under `report_dir`."""
    repo = repo or CsvArchiveLogRepository()
    ts = now.strftime("%Y%m%d_%H%M%S")
    base = Path(report_dir)
    plan_path = base / f"plan_{ts}.csv"
    outcome_path = base / f"outcome_{ts}.csv"
    repo.save_plan(plan_path, plan)
    repo.save_outcomes(outcome_path, outcomes)
    logger.info("Run reports written: {} | {}", plan_path, outcome_path)
    return plan_path, outcome_path
