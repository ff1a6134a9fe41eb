"""Scanning domain models.

This module defines the data structures shared by the filter pipeline,
the traversal engine and the report renderers: the immutable scan
configuration, matched file records, and the per-scan result.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePath
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dirscan.scanning.errors import ConfigurationError
from dirscan.utils.formatting import format_bytes

T = TypeVar("T")


class SizeOperator(str, Enum):
    """Comparison operator of a size filter."""

    GREATER = ">"
    LESS = "<"
    EQUAL = "="
    GREATER_EQUAL = ">="
    LESS_EQUAL = "<="

    def compare(self, size: int, threshold: int) -> bool:
        """Apply the operator as ``size <op> threshold``."""
        if self is SizeOperator.GREATER:
            return size > threshold
        if self is SizeOperator.LESS:
            return size < threshold
        if self is SizeOperator.EQUAL:
            return size == threshold
        if self is SizeOperator.GREATER_EQUAL:
            return size >= threshold
        return size <= threshold


class OutputMode(str, Enum):
    """Report formats a scan can be rendered in.

    Attributes:
        TREE: Directory hierarchy, independent of filters.
        STATS: Aggregate statistics over the matched files.
        JSON: Structured dump of the matched files.
        CSV: Tabular dump of the matched files.
        LIST: Numbered flat list, the fallback when nothing else is selected.
    """

    TREE = "tree"
    STATS = "stats"
    JSON = "json"
    CSV = "csv"
    LIST = "list"


class SizeFilter(BaseModel):
    """Parsed size constraint, e.g. ``>1MB`` -> (``>``, 1048576)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    operator: SizeOperator
    threshold_bytes: Annotated[int, Field(ge=0)]

    def matches(self, size: int) -> bool:
        """Check whether a byte size satisfies this constraint."""
        return self.operator.compare(size, self.threshold_bytes)


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Outcome of parsing one textual option.

    Exactly one of ``value`` and ``error`` is meaningful: parsers never
    raise, so configuration assembly can collect every failure first.

    Attributes:
        value: Parsed value on success.
        error: The configuration error on failure.
    """

    value: T | None = None
    error: ConfigurationError | None = None

    @property
    def success(self) -> bool:
        """Check if parsing succeeded."""
        return self.error is None

    @classmethod
    def ok(cls, value: T | None) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: ConfigurationError) -> "ParseResult[T]":
        return cls(error=error)


class ScanConfig(BaseModel):
    """Immutable configuration of one scan invocation.

    Attributes:
        root_path: Absolute path of the directory to scan.
        max_depth: Directory levels descended below the root (None = unbounded).
            Depth 0 covers only the root's direct children.
        extensions: Lowercase extensions with leading dot; empty allows all.
        name_pattern: Case-insensitive glob applied to file base names.
        size_filter: Optional size constraint.
        search_text: Optional case-insensitive content substring.
        output_modes: Report formats requested.
        follow_symlinks: Follow symbolic links to files and directories.
        encoding: Text encoding used by the content search.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_path: Path
    max_depth: Annotated[int | None, Field(ge=0)] = None
    extensions: frozenset[str] = frozenset()
    name_pattern: str | None = None
    size_filter: SizeFilter | None = None
    search_text: str | None = None
    output_modes: frozenset[OutputMode] = frozenset()
    follow_symlinks: bool = True
    encoding: str = "utf-8"

    @field_validator("root_path")
    @classmethod
    def validate_root_path(cls, v: Path) -> Path:
        """Require an absolute root so relative paths are well defined."""
        if not v.is_absolute():
            msg = f"root_path must be absolute, got {v}"
            raise ValueError(msg)
        return v

    @field_validator("extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: object) -> frozenset[str]:
        """Trim, lowercase and dot-prefix extensions, dropping empty items."""
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple, set, frozenset)):
            msg = "extensions must be a collection of strings"
            raise ValueError(msg)
        normalized: set[str] = set()
        for item in v:
            ext = str(item).strip().lower()
            if not ext:
                continue
            normalized.add(ext if ext.startswith(".") else f".{ext}")
        return frozenset(normalized)

    @property
    def is_unbounded(self) -> bool:
        """True when no depth bound is set."""
        return self.max_depth is None

    @property
    def effective_modes(self) -> frozenset[OutputMode]:
        """Requested modes, falling back to the flat list."""
        modes = self.output_modes - {OutputMode.LIST}
        if not modes:
            return frozenset({OutputMode.LIST})
        return modes

    def allows_depth(self, depth: int) -> bool:
        """Check whether a directory at ``depth`` below the root may be listed."""
        return self.max_depth is None or depth <= self.max_depth


@dataclass(frozen=True, slots=True)
class FileRecord:
    """A regular file that passed the filter pipeline.

    Attributes:
        name: Base name of the file.
        absolute_path: Absolute filesystem path.
        relative_path: Path relative to the scan root.
        size_bytes: Size in bytes.
        extension: Lowercase extension with leading dot, "" if none.
        modified_at: Last modification time (UTC).
        created_at: Creation time (UTC), or inode change time where the
            platform does not record creation.
    """

    name: str
    absolute_path: str
    relative_path: str
    size_bytes: int
    extension: str
    modified_at: datetime
    created_at: datetime

    def __post_init__(self) -> None:
        """Validate record invariants after initialization."""
        if not self.name:
            msg = "File name cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size must be non-negative, got {self.size_bytes}"
            raise ValueError(msg)
        if self.extension != self.extension.lower():
            msg = f"Extension must be lowercase, got {self.extension!r}"
            raise ValueError(msg)
        relative = PurePath(self.relative_path)
        if relative.is_absolute() or (relative.parts and relative.parts[0] == ".."):
            msg = f"Relative path must stay under the root, got {self.relative_path}"
            raise ValueError(msg)

    @property
    def size_human(self) -> str:
        """Return human-readable size string."""
        return format_bytes(self.size_bytes)


class WarningKind(str, Enum):
    """Why part of the tree was skipped."""

    UNREADABLE = "unreadable"
    SYMLINK_LOOP = "symlink_loop"


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """A recovered problem reported on the diagnostics side-channel.

    Attributes:
        path: Directory that was skipped.
        message: Human-readable reason.
        kind: Whether the directory could not be listed or closes a loop.
    """

    path: str
    message: str
    kind: WarningKind = WarningKind.UNREADABLE

    def __str__(self) -> str:
        if self.kind is WarningKind.SYMLINK_LOOP:
            return f"Not descending into {self.path}: {self.message}"
        return f"Cannot read directory {self.path}: {self.message}"


@dataclass(slots=True)
class ScanResult:
    """Matched records of one scan, in enumeration order, plus warnings."""

    records: list[FileRecord] = field(default_factory=lambda: [])
    warnings: list[ScanWarning] = field(default_factory=lambda: [])

    def extend(self, other: "ScanResult") -> None:
        """Append another result's records and warnings to this one."""
        self.records.extend(other.records)
        self.warnings.extend(other.warnings)

    @property
    def total_files(self) -> int:
        return len(self.records)

    @property
    def total_size(self) -> int:
        return sum(r.size_bytes for r in self.records)
