import json
from pathlib import Path

import pytest

from core.errors import ConfigurationError
from infrastructure.settings import (
    DEFAULT_KEEP_MONTHS,
    JsonSettings,
    load_archive_config,
)


@pytest.fixture
def settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "archive": {
                    "source_dir": str(tmp_path / "hot"),
                    "archive_root": str(tmp_path / "arc"),
                    "keep_months": 3,
                    "extensions": ["JPG", ".mov"],
                    "move": True,
                },
                "logging": {"level": "DEBUG"},
            }
        ),
        encoding="utf-8",
    )
    return JsonSettings(path)


def test_dotted_get(settings):
    assert settings.get("logging.level") == "DEBUG"
    assert settings.get("logging.missing", "x") == "x"
    assert settings.get("archive.keep_months.deeper") is None


def test_missing_settings_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonSettings(tmp_path / "absent.json")


def test_settings_are_used(settings, tmp_path):
    config = load_archive_config(settings)
    assert config.source_dir == tmp_path / "hot"
    assert config.archive_root == tmp_path / "arc"
    assert config.keep_months == 3
    assert config.extensions == {".jpg", ".mov"}
    assert config.move is True


def test_overrides_win_and_none_is_ignored(settings):
    config = load_archive_config(
        settings, {"keep_months": 12, "extensions": "png,heic", "move": None}
    )
    assert config.keep_months == 12
    assert config.extensions == {".png", ".heic"}
    assert config.move is True


def test_defaults_without_settings(tmp_path):
    config = load_archive_config(
        None, {"source_dir": str(tmp_path), "archive_root": str(tmp_path / "a")}
    )
    assert config.keep_months == DEFAULT_KEEP_MONTHS
    assert ".jpg" in config.extensions
    assert config.move is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"archive_root": "/arc"},
        {"source_dir": "/hot"},
        {"source_dir": "/hot", "archive_root": "/arc", "keep_months": 25},
        {"source_dir": "/hot", "archive_root": "/arc", "extensions": ""},
    ],
)
def test_invalid_configuration(overrides):
    with pytest.raises(ConfigurationError):
        load_archive_config(None, overrides)


def test_repository_settings_file_is_valid():
    repo_settings = JsonSettings(Path(__file__).parent.parent / "settings.json")
    assert repo_settings.get("archive.keep_months") == DEFAULT_KEEP_MONTHS


@pytest.mark.parametrize(
    "raw, expected",
    [(False, False), ("false", False), ("No", False), ("0", False), ("yes", True), (" TRUE ", True)],
)
def test_move_flag_parses_common_words(tmp_path, raw, expected):
    config = load_archive_config(
        None, {"source_dir": str(tmp_path), "archive_root": str(tmp_path / "a"), "move": raw}
    )
    assert config.move is expected


@pytest.mark.parametrize("raw", ["maybe", 1, 0.0, ["true"]])
def test_move_flag_rejects_non_boolean_values(tmp_path, raw):
    with pytest.raises(ConfigurationError, match="move"):
        load_archive_config(
            None, {"source_dir": str(tmp_path), "archive_root": str(tmp_path / "a"), "move": raw}
        )


def test_string_false_in_settings_file_means_copy(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"archive": {"source_dir": "/hot", "archive_root": "/arc", "move": "false"}}),
        encoding="utf-8",
    )
    assert load_archive_config(JsonSettings(path)).move is False
