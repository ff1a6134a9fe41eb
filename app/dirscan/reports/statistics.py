"""Aggregate statistics over a matched file set.

The extension histogram and the size distribution each partition the
matched set, so both always sum to ``total_files``.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from dirscan.scanning.models import FileRecord
from dirscan.utils.formatting import format_bytes

NO_EXTENSION = "(no extension)"

KB = 1024
MB = 1024 * KB
GB = 1024 * MB

# (label, inclusive lower bound, exclusive upper bound or None)
SIZE_BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("< 1KB", 0, KB),
    ("1KB - 1MB", KB, MB),
    ("1MB - 1GB", MB, GB),
    (">= 1GB", GB, None),
)


def size_bucket(size_bytes: int) -> str:
    """Return the size-distribution label a byte count falls into."""
    for label, lower, upper in SIZE_BUCKETS:
        if size_bytes >= lower and (upper is None or size_bytes < upper):
            return label
    return SIZE_BUCKETS[0][0]


@dataclass(frozen=True, slots=True)
class ScanStatistics:
    """Statistics of one scan.

    Attributes:
        total_files: Number of matched files.
        total_size: Sum of matched file sizes in bytes.
        average_size: Mean size in bytes (0 when nothing matched).
        extension_counts: (extension, count) pairs, most common first.
        size_distribution: (bucket label, count) pairs in bucket order.
    """

    total_files: int
    total_size: int
    average_size: float
    extension_counts: tuple[tuple[str, int], ...]
    size_distribution: tuple[tuple[str, int], ...]


def compute_statistics(records: Sequence[FileRecord]) -> ScanStatistics:
    """Aggregate counts, sizes and distributions over matched records."""
    total_files = len(records)
    total_size = sum(r.size_bytes for r in records)

    # Counter.most_common keeps first-seen order among equal counts
    extensions = Counter(r.extension or NO_EXTENSION for r in records)
    buckets = Counter(size_bucket(r.size_bytes) for r in records)

    return ScanStatistics(
        total_files=total_files,
        total_size=total_size,
        average_size=total_size / total_files if total_files else 0,
        extension_counts=tuple(extensions.most_common()),
        size_distribution=tuple((label, buckets[label]) for label, _, _ in SIZE_BUCKETS),
    )


def render_statistics(stats: ScanStatistics, root: str) -> list[str]:
    """Render statistics as human-readable lines."""
    lines = [
        f"Directory: {root}",
        f"Total Files: {stats.total_files}",
        f"Total Size: {format_bytes(stats.total_size)}",
        f"Average File Size: {format_bytes(stats.average_size)}",
        "",
        "File Extensions:",
    ]
    lines.extend(f"{ext}: {count} files" for ext, count in stats.extension_counts)
    lines.extend(["", "Size Distribution:"])
    lines.extend(f"{label}: {count} files" for label, count in stats.size_distribution)
    return lines
