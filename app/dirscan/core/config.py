"""Scan configuration assembly.

Turns raw command-line values into a validated, immutable ScanConfig.
Every option is parsed into a ParseResult first, so all configuration
problems are reported together before the root path is even looked at.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from dirscan.core.settings import DirscanSettings
from dirscan.scanning.errors import (
    ConfigurationError,
    ConfigurationErrors,
    InvalidDepthError,
    MissingPathError,
    RootPathError,
    UnknownOptionError,
)
from dirscan.scanning.filters import parse_size_filter
from dirscan.scanning.models import OutputMode, ParseResult, ScanConfig, SizeFilter

logger = logging.getLogger(__name__)

_DEPTH_RE = re.compile(r"^\d+$")


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Raw option values as received from the command line.

    Attributes:
        path: Positional root directory argument.
        depth: ``--depth`` value.
        ext: ``--ext`` comma-separated extensions.
        name: ``--name`` glob pattern.
        size: ``--size`` filter expression.
        search: ``--search`` text.
        tree: ``--tree`` flag.
        stats: ``--stats`` flag.
        json: ``--json`` flag.
        csv: ``--csv`` flag.
        extra_args: Unrecognized tokens left over by the option parser.
    """

    path: str | None = None
    depth: str | None = None
    ext: str | None = None
    name: str | None = None
    size: str | None = None
    search: str | None = None
    tree: bool = False
    stats: bool = False
    json: bool = False
    csv: bool = False
    extra_args: tuple[str, ...] = ()

    @property
    def output_modes(self) -> frozenset[OutputMode]:
        modes: set[OutputMode] = set()
        if self.tree:
            modes.add(OutputMode.TREE)
        if self.stats:
            modes.add(OutputMode.STATS)
        if self.json:
            modes.add(OutputMode.JSON)
        if self.csv:
            modes.add(OutputMode.CSV)
        return frozenset(modes)


def parse_depth(text: str) -> ParseResult[int]:
    """Parse a ``--depth`` value into a non-negative integer."""
    value = text.strip()
    if not _DEPTH_RE.match(value):
        return ParseResult.fail(
            InvalidDepthError(f"Depth must be a non-negative integer, got {text!r}.")
        )
    return ParseResult.ok(int(value))


def parse_extensions(text: str) -> ParseResult[frozenset[str]]:
    """Split a comma-separated extension list, trimmed and lowercased."""
    extensions = frozenset(item.strip().lower() for item in text.split(",") if item.strip())
    if not extensions:
        return ParseResult.fail(ConfigurationError("The --ext option requires extensions."))
    return ParseResult.ok(extensions)


def _parse_text(text: str, option: str, what: str) -> ParseResult[str]:
    if not text:
        return ParseResult.fail(ConfigurationError(f"The {option} option requires {what}."))
    return ParseResult.ok(text)


def _check_extra_args(extra_args: tuple[str, ...]) -> list[ConfigurationError]:
    errors: list[ConfigurationError] = []
    for arg in extra_args:
        if arg.startswith("-"):
            errors.append(UnknownOptionError(f"Unknown option: {arg}"))
        else:
            errors.append(UnknownOptionError(f"Unexpected argument: {arg}"))
    return errors


def resolve_root(path: str, cwd: Path | None = None) -> Path:
    """Resolve the root argument to an absolute directory path.

    Symlinks in the path are kept as given; only ``.``/``..`` segments
    and ``~`` are normalized.

    Raises:
        RootPathError: If the path does not exist or is not a directory.
    """
    base = cwd if cwd is not None else Path.cwd()
    absolute = Path(os.path.normpath(base / Path(path).expanduser()))

    if not absolute.exists():
        raise RootPathError(f"Directory not found -> {absolute}")
    if not absolute.is_dir():
        raise RootPathError(f"The provided path is not a directory: {absolute}")
    return absolute


def build_scan_config(
    options: ScanOptions,
    settings: DirscanSettings | None = None,
    *,
    cwd: Path | None = None,
) -> ScanConfig:
    """Validate raw options and build the scan configuration.

    Command-line values take precedence over settings-file defaults.

    Args:
        options: Raw command-line values.
        settings: Persistent defaults; built-in defaults when None.
        cwd: Directory relative root paths are resolved against.

    Returns:
        Frozen ScanConfig.

    Raises:
        ConfigurationError: For a single invalid option.
        ConfigurationErrors: When several options are invalid.
        RootPathError: If the root path is missing or not a directory.
    """
    defaults = (settings or DirscanSettings()).scan
    errors = _check_extra_args(options.extra_args)

    if options.path is None:
        errors.append(
            MissingPathError("Missing directory path. Use --help for usage information.")
        )

    depth: ParseResult[int] = (
        parse_depth(options.depth) if options.depth is not None else ParseResult.ok(defaults.depth)
    )
    extensions: ParseResult[frozenset[str]] = (
        parse_extensions(options.ext)
        if options.ext is not None
        else ParseResult.ok(frozenset(defaults.extensions))
    )
    size_filter: ParseResult[SizeFilter] = (
        parse_size_filter(options.size) if options.size is not None else ParseResult.ok(None)
    )
    name = (
        _parse_text(options.name, "--name", "a pattern")
        if options.name is not None
        else ParseResult.ok(None)
    )
    search = (
        _parse_text(options.search, "--search", "search text")
        if options.search is not None
        else ParseResult.ok(None)
    )

    for parsed in (depth, extensions, size_filter, name, search):
        if parsed.error is not None:
            errors.append(parsed.error)

    if errors:
        logger.debug("Rejected options: %s", "; ".join(str(e) for e in errors))
        if len(errors) == 1:
            raise errors[0]
        raise ConfigurationErrors(errors)

    root = resolve_root(cast(str, options.path), cwd)

    try:
        return ScanConfig(
            root_path=root,
            max_depth=depth.value,
            extensions=extensions.value or frozenset(),
            name_pattern=name.value,
            size_filter=size_filter.value,
            search_text=search.value,
            output_modes=options.output_modes,
            follow_symlinks=defaults.follow_symlinks,
            encoding=defaults.encoding,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid scan configuration: {e}") from e
