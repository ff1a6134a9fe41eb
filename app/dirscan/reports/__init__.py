"""Report renderers for matched file sets.

Each renderer consumes the ordered record list and is independent of
the others.
"""

from dirscan.reports.flat_list import EMPTY_MESSAGE, render_flat_list
from dirscan.reports.statistics import (
    NO_EXTENSION,
    SIZE_BUCKETS,
    ScanStatistics,
    compute_statistics,
    render_statistics,
    size_bucket,
)
from dirscan.reports.structured import (
    build_structured_dump,
    record_to_dict,
    render_structured_dump,
)
from dirscan.reports.tabular import CSV_HEADER, render_tabular_dump, render_tabular_row

__all__ = [
    "CSV_HEADER",
    "EMPTY_MESSAGE",
    "NO_EXTENSION",
    "SIZE_BUCKETS",
    "ScanStatistics",
    "build_structured_dump",
    "compute_statistics",
    "record_to_dict",
    "render_flat_list",
    "render_statistics",
    "render_structured_dump",
    "render_tabular_dump",
    "render_tabular_row",
    "size_bucket",
]
