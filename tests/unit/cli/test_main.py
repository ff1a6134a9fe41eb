"""Unit tests for the scan command.

Tests for the CLI entry point, option handling and exit statuses.
"""

import json
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from dirscan import __version__
from dirscan.cli.main import _split_tokens, app, run
from typer.testing import CliRunner

runner = CliRunner()


class TestScanCommand:
    """Tests for the default scan invocation."""

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output
        assert "--depth" in result.output

    def test_short_help(self) -> None:
        result = runner.invoke(app, ["-h"])
        assert result.exit_code == 0
        assert "--search" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"dirscan version {__version__}" in result.output

    def test_default_flat_list(self, sample_tree: Path) -> None:
        """Without report flags the numbered list is printed."""
        result = runner.invoke(app, [str(sample_tree)])

        assert result.exit_code == 0
        assert "Directory Scanner" in result.output
        assert f"Scanning: {sample_tree}" in result.output
        assert "Found Files" in result.output
        assert "a.txt (10.00 B)" in result.output
        assert f"{os.path.join('c', 'd.txt')} (5.00 B)" in result.output
        assert "Found 3 files" in result.output

    def test_filters_combine(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--depth", "1", "--ext", ".txt", "-q"])

        assert result.exit_code == 0
        entries = sorted(line.split(": ", 1)[1] for line in result.output.splitlines())
        assert entries == ["a.txt (10.00 B)", f"{os.path.join('c', 'd.txt')} (5.00 B)"]

    def test_max_depth_in_banner(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--depth", "0"])

        assert result.exit_code == 0
        assert "Max Depth: 0" in result.output
        assert "Found 2 files" in result.output

    def test_no_matches(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--name", "*.nothing"])

        assert result.exit_code == 0
        assert "No files found matching the criteria." in result.output
        assert "Found 0 files" in result.output

    def test_search_and_size(self, sample_tree: Path) -> None:
        result = runner.invoke(
            app, [str(sample_tree), "--search", "error", "--size", ">1KB", "-q"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "001: b.log (2.00 KB)"

    def test_json_output(self, sample_tree: Path) -> None:
        result = runner.invoke(app, ["-q", "--json", str(sample_tree)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["directory"] == str(sample_tree)
        assert data["totalFiles"] == 3
        assert data["totalSize"] == 2063
        assert {f["name"] for f in data["files"]} == {"a.txt", "b.log", "d.txt"}
        assert data["scannedAt"].endswith("Z")

    def test_csv_output(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--csv", "-q", "--ext", "txt"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "name,relativePath,size,extension,modified,created"
        assert sorted(line.split(",")[0] for line in lines[1:]) == ['"a.txt"', '"d.txt"']

    def test_stats_output(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--stats"])

        assert result.exit_code == 0
        assert "Statistics" in result.output
        assert "Total Files: 3" in result.output
        assert "Total Size: 2.01 KB" in result.output
        assert ".txt: 2 files" in result.output
        assert "Found Files" not in result.output

    def test_tree_output(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--tree", "-q"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "├── c/",
            "│   └── d.txt (5.00 B)",
            "├── a.txt (10.00 B)",
            "└── b.log (2.00 KB)",
        ]

    def test_tree_ignores_filters(self, sample_tree: Path) -> None:
        """The hierarchy shows every entry; filters only affect the summary."""
        result = runner.invoke(app, [str(sample_tree), "--tree", "--ext", ".log"])

        assert result.exit_code == 0
        assert "a.txt (10.00 B)" in result.output
        assert "Found 1 files" in result.output

    def test_sections_render_in_fixed_order(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--csv", "--stats", "--tree", "--json"])

        assert result.exit_code == 0
        output = result.output
        positions = [
            output.index(title)
            for title in ("Directory Tree", "Statistics", "JSON Output", "CSV Output")
        ]
        assert positions == sorted(positions)

    def test_relative_path_resolved(
        self, sample_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(sample_tree.parent)

        result = runner.invoke(app, ["root", "--json", "-q"])

        assert result.exit_code == 0
        assert json.loads(result.output)["directory"] == str(sample_tree)

    def test_settings_file_defaults(
        self, sample_tree: Path, isolated_config_home: Path
    ) -> None:
        settings_dir = isolated_config_home / "dirscan"
        settings_dir.mkdir()
        (settings_dir / "config.toml").write_text('[scan]\nextensions = [".log"]\n')

        result = runner.invoke(app, [str(sample_tree), "-q"])

        assert result.exit_code == 0
        assert result.output.strip() == "001: b.log (2.00 KB)"


class TestScanCommandErrors:
    """Tests for configuration and root errors."""

    def test_missing_path(self) -> None:
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Missing directory path. Use --help for usage information." in result.output

    def test_invalid_depth(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--depth", "abc"])

        assert result.exit_code == 1
        assert "Depth must be a non-negative integer" in result.output
        assert "Usage" in result.output
        assert "Directory Scanner" not in result.output

    def test_invalid_size(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--size", "huge"])

        assert result.exit_code == 1
        assert "Invalid size filter format" in result.output

    def test_unknown_option(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree), "--colour"])

        assert result.exit_code == 1
        assert "Unknown option: --colour" in result.output

    def test_several_errors_reported_together(self) -> None:
        result = runner.invoke(app, ["--depth", "x", "--size", "y"])

        assert result.exit_code == 1
        assert "Missing directory path" in result.output
        assert "Depth must be a non-negative integer" in result.output
        assert "Invalid size filter format" in result.output

    def test_directory_not_found(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Directory not found" in result.output

    def test_path_is_a_file(self, sample_tree: Path) -> None:
        result = runner.invoke(app, [str(sample_tree / "a.txt")])

        assert result.exit_code == 1
        assert "not a directory" in result.output

    def test_invalid_settings_file(self, sample_tree: Path, isolated_config_home: Path) -> None:
        settings_dir = isolated_config_home / "dirscan"
        settings_dir.mkdir()
        (settings_dir / "config.toml").write_text("[scan]\ndepth = -3\n")

        result = runner.invoke(app, [str(sample_tree)])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output

    def test_unknown_encoding_in_settings(
        self, sample_tree: Path, isolated_config_home: Path
    ) -> None:
        settings_dir = isolated_config_home / "dirscan"
        settings_dir.mkdir()
        (settings_dir / "config.toml").write_text('[scan]\nencoding = "no-such-codec"\n')

        result = runner.invoke(app, [str(sample_tree), "--search", "error"])

        assert result.exit_code == 1
        assert "unknown encoding" in result.output

    def test_unreadable_subdirectory_warns_and_continues(self, sample_tree: Path) -> None:
        blocked = sample_tree / "c"
        real_scandir = os.scandir

        def fake_scandir(path: Path) -> object:
            if Path(path) == blocked:
                raise PermissionError(13, "Permission denied")
            return real_scandir(path)

        with patch("dirscan.scanning.engine.os.scandir", side_effect=fake_scandir):
            result = runner.invoke(app, [str(sample_tree)])

        assert result.exit_code == 0
        assert f"Warning: Cannot read directory {blocked}: Permission denied" in result.output
        assert "Found 2 files" in result.output

    @pytest.mark.skipif(sys.platform != "linux", reason="needs byte file names")
    def test_undecodable_file_name(self, tmp_path: Path) -> None:
        """A name that is not valid UTF-8 is reported, not fatal."""
        with open(os.path.join(os.fsencode(tmp_path), b"bad\xff.txt"), "wb") as f:
            f.write(b"x")

        for flags in (["-q"], ["-q", "--csv"], ["-q", "--json"], ["--tree"]):
            result = runner.invoke(app, [str(tmp_path), *flags])

            assert result.exit_code == 0, flags
            assert "bad�.txt" in result.output

    def test_emoji_codes_in_names_are_literal(self, tmp_path: Path) -> None:
        (tmp_path / "report:thumbs_up:.csv").write_text("x")

        result = runner.invoke(app, [str(tmp_path), "--csv", "--quiet"])

        assert result.exit_code == 0
        assert '"report:thumbs_up:.csv","report:thumbs_up:.csv",1,".csv",' in result.output


class TestSplitTokens:
    """Tests for _split_tokens."""

    def test_first_plain_token_is_path(self) -> None:
        assert _split_tokens(["--x", "dir", "more"]) == ("dir", ("--x", "more"))

    def test_empty(self) -> None:
        assert _split_tokens([]) == (None, ())


class TestRun:
    """Tests for the console-script entry point."""

    def test_success_exits_zero(self, sample_tree: Path) -> None:
        with (
            patch("sys.argv", ["dirscan", str(sample_tree), "-q"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            run()

        assert exc_info.value.code == 0

    def test_configuration_error_exits_one(self, sample_tree: Path) -> None:
        with (
            patch("sys.argv", ["dirscan", str(sample_tree), "--depth", "abc"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            run()

        assert exc_info.value.code == 1

    def test_option_without_value_exits_one(
        self, sample_tree: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with (
            patch("sys.argv", ["dirscan", str(sample_tree), "--depth"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            run()

        assert exc_info.value.code == 1
        assert "--depth" in capsys.readouterr().err

    def test_help_exits_zero(self) -> None:
        with (
            patch("sys.argv", ["dirscan", "--help"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            run()

        assert exc_info.value.code == 0

    def test_interrupt_exits_130(self) -> None:
        with (
            patch("dirscan.cli.main.app", side_effect=KeyboardInterrupt),
            pytest.raises(SystemExit) as exc_info,
        ):
            run()

        assert exc_info.value.code == 130
