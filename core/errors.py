"""Exception hierarchy for the archiver."""

from __future__ import annotations

from pathlib import Path


class ArchiverError(Exception):
    """Base error for the project."""


class ConfigurationError(ArchiverError):
    """Invalid or missing configuration detected before planning."""


class SourceDirectoryError(ArchiverError):
    """The source directory is missing or not a directory; fatal for the whole run."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Source folder invalid: {path} ({reason})")
        self.path = path
        self.reason = reason


class CollisionExhaustedError(ArchiverError):
    """No free destination name was found within the attempt ceiling."""

    def __init__(self, directory: Path, desired_name: str, attempts: int) -> None:
        super().__init__(
            f"No free name for {desired_name!r} in {directory} after {attempts} attempts"
        )
        self.directory = directory
        self.desired_name = desired_name
        self.attempts = attempts
