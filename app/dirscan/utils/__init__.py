"""Utility modules for dirscan.

This module exports commonly used utility functions.
"""

from dirscan.utils.formatting import (
    console,
    err_console,
    format_bytes,
    format_timestamp,
    print_error,
    print_heading,
    print_plain,
    print_success,
    print_warning,
    safe_text,
)

__all__ = [
    "console",
    "err_console",
    "format_bytes",
    "format_timestamp",
    "print_error",
    "print_heading",
    "print_plain",
    "print_success",
    "print_warning",
    "safe_text",
]
