"""Tests for the command-line entry point."""

from datetime import datetime, timedelta

import pytest
from conftest import snapshot, write_file
from loguru import logger

import main
from app.viewmodels.archive_vm import EXIT_FATAL, EXIT_OK


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()


@pytest.fixture
def dirs(tmp_path):
    hot = tmp_path / "hot"
    write_file(hot / "old.jpg", datetime.now() - timedelta(days=800), b"old")
    write_file(hot / "new.jpg", datetime.now(), b"new")
    return hot, tmp_path / "archive", tmp_path / "logs", tmp_path / "reports"


def _args(hot, archive, logs, reports, *extra):
    return [
        "--source",
        str(hot),
        "--archive",
        str(archive),
        "--keep-months",
        "6",
        "--extensions",
        "jpg",
        "--log-dir",
        str(logs),
        "--report-dir",
        str(reports),
        *extra,
    ]


def test_dry_run_by_default(dirs, capsys):
    hot, archive, logs, reports = dirs
    before = snapshot(hot)
    assert main.main(_args(hot, archive, logs, reports)) == EXIT_OK
    assert snapshot(hot) == before
    assert not archive.exists()
    out = capsys.readouterr().out
    assert "Dry run" in out
    assert len(list(reports.glob("outcome_*.csv"))) == 1


def test_apply_move(dirs):
    hot, archive, logs, reports = dirs
    code = main.main(_args(hot, archive, logs, reports, "--apply", "--move", "--no-reports"))
    assert code == EXIT_OK
    assert not (hot / "old.jpg").exists()
    assert len(list(archive.rglob("old.jpg"))) == 1
    assert not reports.exists()


def test_missing_source_is_fatal(dirs, tmp_path):
    _, archive, logs, reports = dirs
    assert main.main(_args(tmp_path / "nope", archive, logs, reports)) == EXIT_FATAL


def test_invalid_keep_months_is_fatal(dirs):
    hot, archive, logs, reports = dirs
    args = _args(hot, archive, logs, reports)
    args[args.index("--keep-months") + 1] = "30"
    assert main.main(args) == EXIT_FATAL
