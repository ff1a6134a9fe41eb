"""Rich console formatting utilities.

Provides the shared consoles, message printers and the byte/timestamp
formatters used by every report renderer.
"""

from __future__ import annotations

import sys
from datetime import UTC, datetime

from rich.console import Console
from rich.markup import escape

from dirscan.core.theme import get_theme

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise so piped reports stay free of escape codes.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system(), emoji=False)
err_console = Console(
    theme=get_theme(), stderr=True, color_system=_detect_color_system(), emoji=False
)


def format_bytes(size_bytes: float) -> str:
    """Format a byte count with the largest unit that keeps it below 1024.

    GB is the largest unit; bigger values stay in GB.

    Args:
        size_bytes: Byte count (may be fractional, e.g. an average).

    Returns:
        Size with two decimals, e.g. ``"1.50 KB"``.
    """
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.2f} {_SIZE_UNITS[unit_index]}"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO 8601 UTC with milliseconds and a ``Z`` suffix.

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    utc = moment.astimezone(UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def safe_text(text: str) -> str:
    """Make text containing undecodable file-name bytes printable.

    ``os.scandir`` returns such bytes as lone surrogates, which no UTF-8
    stream accepts; each one becomes U+FFFD.
    """
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


def print_plain(line: str) -> None:
    """Write report text verbatim.

    The line bypasses Rich rendering, so file names are never rewritten
    as markup or emoji codes.
    """
    console.file.write(safe_text(line) + "\n")


def print_heading(title: str) -> None:
    """Print a report section heading with a rule underneath."""
    console.print(f"\n[bold_header]{title}[/]")
    console.print(f"[border]{'-' * 32}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(
        f"[warning]Warning:[/] {escape(safe_text(message))}",
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(
        f"[error]Error:[/] {escape(safe_text(message))}",
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
