"""Directory scanning module.

This module provides the scan data model, the filter pipeline, the
recursive traversal engine and the tree walker.
"""

from dirscan.scanning.engine import DirectoryScanner, scan_directory
from dirscan.scanning.errors import (
    ConfigurationError,
    ConfigurationErrors,
    DirscanError,
    InvalidDepthError,
    InvalidSizeFilterFormatError,
    MissingPathError,
    RootPathError,
    SettingsError,
    StatUnavailableError,
    UnknownOptionError,
)
from dirscan.scanning.filters import (
    FilterPipeline,
    NamedPredicate,
    compile_name_pattern,
    contains_text,
    matches_extension,
    matches_name,
    matches_size,
    parse_size_filter,
)
from dirscan.scanning.metadata import extract_metadata
from dirscan.scanning.models import (
    FileRecord,
    OutputMode,
    ParseResult,
    ScanConfig,
    ScanResult,
    ScanWarning,
    SizeFilter,
    SizeOperator,
    WarningKind,
)
from dirscan.scanning.tree import iter_tree, render_tree

__all__ = [
    "ConfigurationError",
    "ConfigurationErrors",
    "DirectoryScanner",
    "DirscanError",
    "FileRecord",
    "FilterPipeline",
    "InvalidDepthError",
    "InvalidSizeFilterFormatError",
    "MissingPathError",
    "NamedPredicate",
    "OutputMode",
    "ParseResult",
    "RootPathError",
    "ScanConfig",
    "ScanResult",
    "ScanWarning",
    "SettingsError",
    "SizeFilter",
    "SizeOperator",
    "StatUnavailableError",
    "UnknownOptionError",
    "WarningKind",
    "compile_name_pattern",
    "contains_text",
    "extract_metadata",
    "iter_tree",
    "matches_extension",
    "matches_name",
    "matches_size",
    "parse_size_filter",
    "render_tree",
    "scan_directory",
]
