"""Tabular (CSV) dump of a matched file set.

String fields are wrapped in double quotes but embedded quotes are not
escaped, so a file name containing ``"`` yields a malformed row.
"""

from collections.abc import Sequence

from dirscan.scanning.models import FileRecord
from dirscan.utils.formatting import format_timestamp

CSV_HEADER: tuple[str, ...] = ("name", "relativePath", "size", "extension", "modified", "created")


def _quoted(value: str) -> str:
    return f'"{value}"'


def render_tabular_row(record: FileRecord) -> str:
    """Render one record as a CSV row."""
    return ",".join(
        (
            _quoted(record.name),
            _quoted(record.relative_path),
            str(record.size_bytes),
            _quoted(record.extension),
            _quoted(format_timestamp(record.modified_at)),
            _quoted(format_timestamp(record.created_at)),
        )
    )


def render_tabular_dump(records: Sequence[FileRecord]) -> list[str]:
    """Render the header row followed by one row per record."""
    return [",".join(CSV_HEADER), *(render_tabular_row(r) for r in records)]
