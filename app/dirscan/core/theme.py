"""Colour theme for dirscan output.

The bundled ``dirscan/data/theme.toml`` provides every colour; a user
``theme.toml`` in the config directory may override any subset of its
``[colors]`` table. Invalid overrides are ignored with a warning so a bad
theme never prevents a scan.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from dirscan.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _hex_color(value: object) -> str:
    if not isinstance(value, str):
        msg = "color must be a string"
        raise ValueError(msg)
    color = value.strip()
    if not color.startswith("#"):
        msg = "color must start with '#'"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = "color must be #RGB or #RRGGBB format"
        raise ValueError(msg)
    if not set(digits) <= _HEX_DIGITS:
        msg = f"invalid hex color '{color}'"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, BeforeValidator(_hex_color)]


class ThemeColors(BaseModel):
    """Colours used by banners, messages and report sections."""

    model_config = ConfigDict(extra="forbid")

    # Banner and headings
    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    # Messages
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Tree entries
    directory: HexColor = "#0e8ac8"
    file: HexColor = "#ffffff"
    size: HexColor = "#0ec1c8"


def get_bundled_theme_path() -> Path:
    """Return the path of the theme shipped with the package."""
    return Path(str(resources.files("dirscan.data").joinpath("theme.toml")))


def read_color_table(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are dropped. Returns None when the file is missing,
    unreadable or not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled colours with the user overrides.

    Args:
        user_path: Override file; defaults to the config-directory theme.

    Returns:
        Validated colours, or the built-in defaults if the merge is invalid.
    """
    colors = read_color_table(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing, using built-in colours")
        colors = {}

    overrides = read_color_table(user_path or get_user_theme_path())
    if overrides:
        logger.debug("Applying %d user colour overrides", len(overrides))
        colors = {**colors, **overrides}

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colours, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme from a set of colours (loaded when omitted)."""
    if colors is None:
        colors = load_theme()
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "directory": f"bold {colors.directory}",
            "file": colors.file,
            "size": colors.size,
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the process-wide Rich theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
