"""Discovery of media files in the hot source directory."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
import stat

from loguru import logger

from core.errors import SourceDirectoryError
from core.models import MediaFile
from infrastructure.utils import normalize_extensions


def scan_media_files(source_dir: str | Path, extensions: Iterable[str] | str) -> list[MediaFile]:
    """List regular files directly under `source_dir` whose extension is allowed.

    Files are returned sorted by name so repeated runs see the same order.
    Extensions match case-insensitively. Raises `SourceDirectoryError` before
    anything is read when the source is missing or not a directory. Allowed files
    that cannot be stat'ed are not discovered; they are counted as unreadable
    in the scan log.
    """
    root = Path(source_dir).expanduser()
    if not root.exists():
        raise SourceDirectoryError(root, "does not exist")
    if not root.is_dir():
        raise SourceDirectoryError(root, "not a directory")
    root = root.resolve()

    allowed = normalize_extensions(extensions)
    files: list[MediaFile] = []
    skipped = 0
    unreadable = 0
    for p in sorted(root.iterdir(), key=lambda x: x.name):
        ext = p.suffix.lower()
        try:
            st = p.stat()
        except OSError as ex:
            if ext in allowed:
                unreadable += 1
                logger.warning("stat failed for {}: {}", p, ex)
            continue
        if not stat.S_ISREG(st.st_mode):
            continue
        if ext not in allowed:
            skipped += 1
            continue
        files.append(
            MediaFile(
                path=p,
                name=p.name,
                extension=ext,
                modified_time=datetime.fromtimestamp(st.st_mtime),
                size_bytes=int(st.st_size),
            )
        )
    logger.info(
        "Scanned {}: {} media files, {} skipped by extension filter, {} unreadable",
        root,
        len(files),
        skipped,
        unreadable,
    )
    return files
