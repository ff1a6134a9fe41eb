"""Metadata extraction for scanned files."""

import os
from datetime import UTC, datetime
from pathlib import Path

from dirscan.scanning.errors import StatUnavailableError
from dirscan.scanning.models import FileRecord


def _creation_time(stat: os.stat_result) -> float:
    """Birth time where the platform records it, else the inode change time."""
    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime is not None:
        return float(birthtime)
    return stat.st_ctime


def extract_metadata(path: Path, root: Path, *, follow_symlinks: bool = True) -> FileRecord:
    """Stat a file into a FileRecord.

    Args:
        path: File to describe; must lie under ``root``.
        root: Scan root that relative paths are computed against.
        follow_symlinks: Stat the link target instead of the link itself.

    Returns:
        FileRecord for the entry.

    Raises:
        StatUnavailableError: If the entry vanished or cannot be stat'ed.
    """
    try:
        stat = path.stat() if follow_symlinks else path.lstat()
    except OSError as e:
        msg = f"Cannot stat {path}: {e.strerror or e}"
        raise StatUnavailableError(msg) from e

    try:
        relative = path.relative_to(root)
    except ValueError as e:
        msg = f"{path} is not under scan root {root}"
        raise StatUnavailableError(msg) from e

    return FileRecord(
        name=path.name,
        absolute_path=str(path),
        relative_path=str(relative),
        size_bytes=stat.st_size,
        extension=path.suffix.lower(),
        modified_at=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        created_at=datetime.fromtimestamp(_creation_time(stat), tz=UTC),
    )
