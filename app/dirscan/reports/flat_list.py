"""Numbered flat listing of matched files."""

from collections.abc import Sequence

from dirscan.scanning.models import FileRecord

EMPTY_MESSAGE = "No files found matching the criteria."


def render_flat_list(records: Sequence[FileRecord]) -> list[str]:
    """Render ``NNN: relative/path (size)`` lines in result order."""
    if not records:
        return [EMPTY_MESSAGE]
    return [
        f"{index:03d}: {record.relative_path} ({record.size_human})"
        for index, record in enumerate(records, start=1)
    ]
