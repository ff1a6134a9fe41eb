"""dirscan - recursive directory scanning, filtering and reporting."""

__version__ = "0.1.0"
