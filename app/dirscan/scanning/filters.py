"""Filter pipeline for matched-file selection.

A file is matched when it passes every predicate of the pipeline:

1. extension  - exact, case-insensitive membership in the allow-list
2. name       - glob pattern against the base name
3. size       - comparator against the byte size
4. content    - case-insensitive substring of the decoded text

Each predicate passes when its option is not set. The content predicate
is the only one that touches the file and always runs last.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from dirscan.scanning.errors import InvalidSizeFilterFormatError
from dirscan.scanning.models import FileRecord, ParseResult, ScanConfig, SizeFilter, SizeOperator

logger = logging.getLogger(__name__)

_SIZE_FILTER_RE = re.compile(r"^(>=|<=|>|<|=)(\d+(?:\.\d+)?)(B|KB|MB|GB)?$", re.IGNORECASE)

SIZE_MULTIPLIERS: dict[str, int] = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}

Predicate = Callable[[FileRecord], bool]


def parse_size_filter(text: str) -> ParseResult[SizeFilter]:
    """Parse a size constraint such as ``>1MB`` or ``<=500``.

    The unit is optional (bytes by default) and case-insensitive;
    multipliers are 1024-based. Fractional byte counts are truncated.

    Args:
        text: Expression of the form ``<op><number>[<unit>]``.

    Returns:
        ParseResult holding the SizeFilter, or an
        InvalidSizeFilterFormatError when the expression is malformed.
    """
    match = _SIZE_FILTER_RE.match(text.strip())
    if match is None:
        return ParseResult.fail(
            InvalidSizeFilterFormatError(
                f"Invalid size filter format: {text!r}. Use >, <, =, >= or <= "
                "followed by a number and an optional unit (B, KB, MB, GB)."
            )
        )

    operator, number, unit = match.groups()
    multiplier = SIZE_MULTIPLIERS[(unit or "B").upper()]
    threshold = int(Decimal(number) * multiplier)
    return ParseResult.ok(SizeFilter(operator=SizeOperator(operator), threshold_bytes=threshold))


def compile_name_pattern(pattern: str | None) -> re.Pattern[str] | None:
    """Compile a glob into a case-insensitive whole-name regex.

    ``*`` matches any run of characters (including none) and ``?``
    exactly one character; every other character is literal.

    Args:
        pattern: Glob pattern, or None/empty for "match everything".

    Returns:
        Compiled pattern, or None when no pattern was given.
    """
    if not pattern:
        return None

    parts: list[str] = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def matches_extension(extension: str, allowed: frozenset[str]) -> bool:
    """Check an extension against the allow-list (empty allows all)."""
    if not allowed:
        return True
    return extension.lower() in allowed


def matches_name(name: str, pattern: re.Pattern[str] | None) -> bool:
    """Check a base name against a compiled glob (None matches all)."""
    if pattern is None:
        return True
    return pattern.fullmatch(name) is not None


def matches_size(size_bytes: int, size_filter: SizeFilter | None) -> bool:
    """Check a byte size against a size filter (None matches all)."""
    if size_filter is None:
        return True
    return size_filter.matches(size_bytes)


def contains_text(path: str | Path, search_text: str | None, encoding: str = "utf-8") -> bool:
    """Check whether a file's text contains ``search_text``, ignoring case.

    Any read or decode failure counts as a non-match; it is never raised.

    Args:
        path: File to read.
        search_text: Substring to look for, or None to match all.
        encoding: Text encoding of the file.

    Returns:
        True if the text contains the substring.
    """
    if not search_text:
        return True

    try:
        with open(path, encoding=encoding) as f:
            content = f.read()
    except (OSError, UnicodeError, LookupError) as e:
        logger.debug("Excluding unreadable file %s from content search: %s", path, e)
        return False

    return search_text.lower() in content.lower()


@dataclass(frozen=True, slots=True)
class NamedPredicate:
    """A single pipeline stage.

    Attributes:
        name: Stage name, used in debug logging.
        test: Predicate over a FileRecord.
    """

    name: str
    test: Predicate

    def __call__(self, record: FileRecord) -> bool:
        return self.test(record)


class FilterPipeline:
    """Conjunction of named predicates, short-circuiting on first failure.

    Args:
        predicates: Stages in evaluation order; put expensive ones last.
    """

    def __init__(self, predicates: Sequence[NamedPredicate]) -> None:
        self._predicates = tuple(predicates)

    @classmethod
    def from_config(cls, config: ScanConfig) -> "FilterPipeline":
        """Build the standard four-stage pipeline for a scan configuration."""
        extensions = config.extensions
        pattern = compile_name_pattern(config.name_pattern)
        size_filter = config.size_filter
        search_text = config.search_text
        encoding = config.encoding

        return cls(
            (
                NamedPredicate("extension", lambda r: matches_extension(r.extension, extensions)),
                NamedPredicate("name", lambda r: matches_name(r.name, pattern)),
                NamedPredicate("size", lambda r: matches_size(r.size_bytes, size_filter)),
                NamedPredicate(
                    "content",
                    lambda r: contains_text(r.absolute_path, search_text, encoding),
                ),
            )
        )

    @property
    def names(self) -> tuple[str, ...]:
        """Stage names in evaluation order."""
        return tuple(p.name for p in self._predicates)

    def first_failure(self, record: FileRecord) -> str | None:
        """Return the name of the first failing stage, or None if all pass."""
        for predicate in self._predicates:
            if not predicate(record):
                return predicate.name
        return None

    def matches(self, record: FileRecord) -> bool:
        """Check whether a record passes every stage."""
        return self.first_failure(record) is None

    def __call__(self, record: FileRecord) -> bool:
        return self.matches(record)
