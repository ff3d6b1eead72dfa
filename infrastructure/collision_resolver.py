"""Deterministic, non-clobbering destination naming."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from core.errors import CollisionExhaustedError

MAX_COLLISION_ATTEMPTS = 9999


class CollisionResolver:
    """Finds a free destination path for a file name inside a directory.

    If `directory/name` is taken, tries `stem (1).ext`, `stem (2).ext`, ... in
    increasing order. A slot is taken when it exists on disk or appears in the
    caller-supplied `reserved` collection.
    """

    def __init__(self, max_attempts: int = MAX_COLLISION_ATTEMPTS) -> None:
        self.max_attempts = max(1, int(max_attempts))

    def resolve(
        self,
        directory: str | Path,
        desired_name: str,
        reserved: Collection[Path] | None = None,
    ) -> Path:
        """Return a path in `directory` that is currently free.

        Raises:
            CollisionExhaustedError: if no free slot is found within `max_attempts`.
        """
        folder = Path(directory)
        taken = reserved or ()
        candidate = folder / desired_name
        if not self._is_taken(candidate, taken):
            return candidate

        stem = Path(desired_name).stem
        suffix = Path(desired_name).suffix
        for i in range(1, self.max_attempts + 1):
            candidate = folder / f"{stem} ({i}){suffix}"
            if not self._is_taken(candidate, taken):
                return candidate
        raise CollisionExhaustedError(folder, desired_name, self.max_attempts)

    @staticmethod
    def _is_taken(candidate: Path, reserved: Collection[Path]) -> bool:
        return candidate in reserved or candidate.exists() or candidate.is_symlink()
