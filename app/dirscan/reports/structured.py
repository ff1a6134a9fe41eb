"""Structured (JSON) dump of a matched file set."""

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from dirscan.scanning.models import FileRecord
from dirscan.utils.formatting import format_timestamp


def record_to_dict(record: FileRecord) -> dict[str, Any]:
    """Convert a FileRecord to a JSON-ready dictionary."""
    return {
        "name": record.name,
        "path": record.absolute_path,
        "relativePath": record.relative_path,
        "size": record.size_bytes,
        "sizeHuman": record.size_human,
        "extension": record.extension,
        "modified": format_timestamp(record.modified_at),
        "created": format_timestamp(record.created_at),
    }


def build_structured_dump(
    records: Sequence[FileRecord],
    root: str,
    scanned_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the dump document.

    Args:
        records: Matched records in result order.
        root: Scan root directory.
        scanned_at: Capture time; defaults to now.

    Returns:
        Dictionary with directory, scannedAt, totalFiles, totalSize and files.
    """
    return {
        "directory": root,
        "scannedAt": format_timestamp(scanned_at or datetime.now(UTC)),
        "totalFiles": len(records),
        "totalSize": sum(r.size_bytes for r in records),
        "files": [record_to_dict(r) for r in records],
    }


def render_structured_dump(
    records: Sequence[FileRecord],
    root: str,
    scanned_at: datetime | None = None,
) -> str:
    """Render the dump document as indented JSON text."""
    return json.dumps(
        build_structured_dump(records, root, scanned_at), indent=2, ensure_ascii=False
    )
