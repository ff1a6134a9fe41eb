"""Unit tests for XDG path management."""

from pathlib import Path

import pytest
from dirscan.core.paths import (
    APP_NAME,
    get_config_dir,
    get_settings_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Falls back to ~/.config when XDG_CONFIG_HOME is not set."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_empty_xdg_config_home_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", "")

        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_relative_xdg_config_home_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", "relative/config")

        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / APP_NAME


class TestConfigFiles:
    """Tests for files inside the config directory."""

    def test_settings_path(self, isolated_config_home: Path) -> None:
        assert get_settings_path() == isolated_config_home / "dirscan" / "config.toml"

    def test_user_theme_path(self, isolated_config_home: Path) -> None:
        assert get_user_theme_path() == isolated_config_home / "dirscan" / "theme.toml"
