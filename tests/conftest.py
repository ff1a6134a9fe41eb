"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from dirscan.scanning.models import FileRecord


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Root with a.txt (10 B), b.log (2048 B, contains ERROR) and c/d.txt (5 B)."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("0123456789")
    (root / "b.log").write_text("ERROR: disk full\n".ljust(2048, "."))
    (root / "c").mkdir()
    (root / "c" / "d.txt").write_text("hello")
    return root


@pytest.fixture
def make_record() -> Callable[..., FileRecord]:
    """Factory for FileRecord instances with fixed timestamps."""

    def _make(
        relative_path: str = "a.txt",
        size: int = 10,
        extension: str | None = None,
        root: str = "/data",
    ) -> FileRecord:
        name = Path(relative_path).name
        return FileRecord(
            name=name,
            absolute_path=f"{root}/{relative_path}",
            relative_path=relative_path,
            size_bytes=size,
            extension=Path(name).suffix.lower() if extension is None else extension,
            modified_at=datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC),
            created_at=datetime(2024, 1, 15, 9, 0, 0, tzinfo=UTC),
        )

    return _make
