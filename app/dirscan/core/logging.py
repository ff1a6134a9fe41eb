"""Logging setup for the dirscan CLI.

Library modules only create module loggers; handlers are installed once
by the CLI. Records go to stderr through Rich so they never mix with
report output on stdout.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from dirscan.utils.formatting import err_console

LOGGER_NAME = "dirscan"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure and return the package logger.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    Returns:
        The ``dirscan`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Avoid adding duplicate handlers
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=err_console,
            rich_tracebacks=True,
            markup=False,
            show_time=verbose,
            show_path=False,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    logger.debug("Logging configured - verbose: %s", verbose)
    return logger
