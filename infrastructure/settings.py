"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

from core.errors import ConfigurationError
from core.services.retention import validate_keep_months
from infrastructure.utils import normalize_extensions

DEFAULT_KEEP_MONTHS = 6
DEFAULT_EXTENSIONS = (
    ".jpg",
    ".jpeg",
    ".png",
    ".heic",
    ".heif",
    ".gif",
    ".tif",
    ".tiff",
    ".dng",
    ".mp4",
    ".mov",
)


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass(frozen=True)
class ArchiveConfig:
    """Validated inputs for a single archive run."""

    source_dir: Path
    archive_root: Path
    keep_months: int = DEFAULT_KEEP_MONTHS
    extensions: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_EXTENSIONS))
    move: bool = False


_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})


def parse_bool(value: Any, key: str) -> bool:
    """Accept a real bool or a common yes/no word; anything else is a ConfigurationError."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ConfigurationError(f"{key} must be true or false, got {value!r}")


def _expand(value: Any) -> Path | None:
    if value in (None, ""):
        return None
    return Path(os.path.expandvars(str(value))).expanduser()


def load_archive_config(
    settings: JsonSettings | None, overrides: dict[str, Any] | None = None
) -> ArchiveConfig:
    """Merge built-in defaults, `settings` and non-None `overrides` into an ArchiveConfig.

    Recognised override keys: source_dir, archive_root, keep_months,
    extensions, move.
    """
    ov = {k: v for k, v in (overrides or {}).items() if v is not None}

    def pick(key: str, setting_key: str, default: Any) -> Any:
        if key in ov:
            return ov[key]
        if settings is not None:
            return settings.get(setting_key, default)
        return default

    source = _expand(pick("source_dir", "archive.source_dir", None))
    if source is None:
        raise ConfigurationError("source directory is not configured")
    archive_root = _expand(pick("archive_root", "archive.archive_root", None))
    if archive_root is None:
        raise ConfigurationError("archive root is not configured")

    keep_months = validate_keep_months(
        pick("keep_months", "archive.keep_months", DEFAULT_KEEP_MONTHS)
    )
    extensions = normalize_extensions(pick("extensions", "archive.extensions", DEFAULT_EXTENSIONS))
    if not extensions:
        raise ConfigurationError("extension allow-list is empty")

    return ArchiveConfig(
        source_dir=source,
        archive_root=archive_root,
        keep_months=keep_months,
        extensions=extensions,
        move=parse_bool(pick("move", "archive.move", False), "move"),
    )
