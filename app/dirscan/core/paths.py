"""Locations of the optional user files dirscan reads.

Nothing is written between runs. The only inputs outside the command line
are ``config.toml`` (scan defaults) and ``theme.toml`` (colour overrides),
both kept in the XDG config directory::

    $XDG_CONFIG_HOME/dirscan/    (falls back to ~/.config/dirscan/)
"""

import os
from pathlib import Path

APP_NAME = "dirscan"

SETTINGS_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"


def get_config_dir() -> Path:
    """Return the dirscan config directory.

    ``XDG_CONFIG_HOME`` is honoured only when it holds an absolute path;
    an empty or relative value falls back to ``~/.config``.
    """
    base = os.environ.get("XDG_CONFIG_HOME", "")
    if base and os.path.isabs(base):
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_settings_path() -> Path:
    """Return the path of the scan defaults file."""
    return get_config_dir() / SETTINGS_FILENAME


def get_user_theme_path() -> Path:
    """Return the path of the user colour overrides."""
    return get_config_dir() / THEME_FILENAME
