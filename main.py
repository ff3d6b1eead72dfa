from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
import sys

from loguru import logger

from app.confirmation import GATE_CHOICES, make_confirmation_gate
from app.viewmodels.archive_vm import EXIT_FATAL, ArchiveVM, exit_code_for
from core.errors import ArchiverError
from core.models import ExecutionMode, OutcomeStatus
from core.services.interfaces import RunSummary
from infrastructure.logging import (
    find_latest_log_file,
    get_log_directory,
    get_report_directory,
    init_logging,
)
from infrastructure.settings import JsonSettings, load_archive_config

BASE_DIR = Path(__file__).parent

_SUMMARY_COLUMNS = [
    ("Kept", OutcomeStatus.KEPT),
    ("WouldCopy", OutcomeStatus.WOULD_COPY),
    ("WouldMove", OutcomeStatus.WOULD_MOVE),
    ("Copied", OutcomeStatus.COPIED),
    ("Moved", OutcomeStatus.MOVED),
    ("Skipped", OutcomeStatus.SKIPPED_BY_CONFIRMATION),
    ("Error", OutcomeStatus.ERROR),
]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="media-archiver",
        description="Archive old media from a hot folder into archive/YYYY/YYYY-MM.",
    )
    p.add_argument("--source", help="Hot source directory")
    p.add_argument("--archive", help="Archive root directory")
    p.add_argument("--keep-months", type=int, help="Months to keep in the source (1-24)")
    p.add_argument("--extensions", help="Comma separated extension allow-list, e.g. jpg,heic,mp4")
    p.add_argument("--apply", action="store_true", help="Perform changes (default is dry-run)")
    p.add_argument("--move", action="store_true", default=None, help="Move instead of copy")
    p.add_argument(
        "--confirm",
        choices=GATE_CHOICES,
        default="auto",
        help="Per-file confirmation when applying (default: auto, no prompt)",
    )
    p.add_argument("--settings", help="Path to settings.json")
    p.add_argument("--log-dir", help="Directory for rotating log files")
    p.add_argument("--report-dir", help="Directory for plan/outcome CSV reports")
    p.add_argument("--no-reports", action="store_true", help="Do not write CSV reports")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def _load_settings(path: str | None) -> JsonSettings | None:
    if path:
        return JsonSettings(path)
    default = BASE_DIR / "settings.json"
    return JsonSettings(default) if default.exists() else None


def format_summary(summary: RunSummary) -> str:
    header = ["Bucket"] + [name for name, _ in _SUMMARY_COLUMNS] + ["Bytes"]
    lines = ["  ".join(f"{h:>9}" for h in header)]
    for b in summary.buckets:
        cells = [b.year_month] + [str(b.count(s)) for _, s in _SUMMARY_COLUMNS]
        cells.append(str(b.total_bytes))
        lines.append("  ".join(f"{c:>9}" for c in cells))
    totals = ["Total"] + [str(summary.count(s)) for _, s in _SUMMARY_COLUMNS]
    totals.append(str(sum(b.total_bytes for b in summary.buckets)))
    lines.append("  ".join(f"{c:>9}" for c in totals))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = _load_settings(args.settings)
    except (OSError, ValueError) as ex:
        print(f"Cannot read settings: {ex}", file=sys.stderr)
        return EXIT_FATAL

    log_dir = args.log_dir or (settings.get("logging.log_dir") if settings else None)
    level = settings.get("logging.level", "INFO") if settings else "INFO"
    if args.verbose:
        level = "DEBUG"
    log_dir = log_dir or get_log_directory()
    init_logging(log_dir, level=level)

    try:
        config = load_archive_config(
            settings,
            {
                "source_dir": args.source,
                "archive_root": args.archive,
                "keep_months": args.keep_months,
                "extensions": args.extensions,
                "move": args.move,
            },
        )
    except ArchiverError as ex:
        logger.error("Configuration error: {}", ex)
        return EXIT_FATAL

    report_dir = None
    if not args.no_reports:
        report_dir = args.report_dir or (settings.get("reports.output_dir") if settings else None)
        report_dir = report_dir or get_report_directory()

    mode = ExecutionMode(apply=args.apply, move=config.move)
    gate = make_confirmation_gate(args.confirm, mode)
    vm = ArchiveVM(config, report_dir=report_dir)
    try:
        result = vm.run(mode, now=datetime.now(), gate=gate)
    except ArchiverError as ex:
        logger.error("Archive run aborted: {}", ex)
        return EXIT_FATAL

    print(format_summary(result.summary))
    if result.report_paths:
        print(f"Plan: {result.report_paths[0]}")
        print(f"Outcome: {result.report_paths[1]}")
    latest_log = find_latest_log_file(log_dir)
    if latest_log:
        print(f"Log: {latest_log}")
    if mode.dry_run:
        print("Dry run: no files were changed. Re-run with --apply to archive.")
    return exit_code_for(result.summary)


if __name__ == "__main__":
    raise SystemExit(main())
