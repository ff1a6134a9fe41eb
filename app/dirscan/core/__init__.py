"""Core services for dirscan: paths, theme, settings, logging and config assembly."""
