"""User settings for dirscan.

Persistent scan defaults are read from ``~/.config/dirscan/config.toml``::

    [scan]
    depth = 3
    extensions = [".py", ".md"]
    follow_symlinks = true
    encoding = "utf-8"

Every value is optional; command-line options override them.
"""

import codecs
import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dirscan.core.paths import get_settings_path
from dirscan.scanning.errors import SettingsError

logger = logging.getLogger(__name__)


class ScanDefaults(BaseModel):
    """Defaults applied to every scan unless overridden on the command line."""

    model_config = ConfigDict(extra="forbid")

    depth: Annotated[
        int | None,
        Field(ge=0, description="Default depth bound (None = unbounded)"),
    ] = None
    extensions: Annotated[
        list[str],
        Field(description="Default extension allow-list"),
    ] = []
    follow_symlinks: Annotated[
        bool,
        Field(description="Follow symbolic links while scanning"),
    ] = True
    encoding: Annotated[
        str,
        Field(min_length=1, description="Text encoding used by content search"),
    ] = "utf-8"

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject codec names Python does not know."""
        try:
            codecs.lookup(v)
        except LookupError:
            msg = f"unknown encoding '{v}'"
            raise ValueError(msg) from None
        return v


class DirscanSettings(BaseModel):
    """Top-level settings file model."""

    model_config = ConfigDict(extra="forbid")

    scan: ScanDefaults = Field(default_factory=ScanDefaults)


def load_settings(path: Path | None = None) -> DirscanSettings:
    """Load settings from a TOML file.

    A missing file is not an error: built-in defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default settings path.

    Returns:
        Validated DirscanSettings object.

    Raises:
        SettingsError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return DirscanSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings {settings_path}: {e}") from e

    try:
        settings = DirscanSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e

    logger.debug("Loaded settings from %s", settings_path)
    return settings
