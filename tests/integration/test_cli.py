"""
CLI Integration Tests
=====================

Tests the complete CLI interface against generated font directories.
"""

import json
import logging
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from fontfinder.cli import cli
from fontfinder.core.exceptions import InstallTimeoutError


@pytest.mark.integration
class TestCLIIntegration:
    """CLI integration tests."""

    @pytest.fixture
    def runner(self):
        """Click test runner."""
        return CliRunner()

    @pytest.fixture
    def system_dir(self, font_factory, temp_dir):
        font_factory("system/Alpha-Regular.ttf", "Alpha", "Regular")
        font_factory("system/Alpha-Bold.ttf", "Alpha", "Bold")
        font_factory(
            "system/Foo-Bold.ttf",
            "Foo Bold",
            "Regular",
            typographic_family="Foo",
            typographic_subfamily="Bold",
        )
        (temp_dir / "system" / "Legacy.dfont").write_bytes(b"\x00" * 16)
        return temp_dir / "system"

    @pytest.fixture
    def custom_dir(self, font_factory, temp_dir):
        font_factory("custom/Beta-Italic.ttf", "Beta", "Italic")
        return temp_dir / "custom"

    @pytest.fixture(autouse=True)
    def isolated_fonts(self, system_dir, temp_dir, monkeypatch):
        """Point discovery and installation at the temporary directory."""
        monkeypatch.setenv("FONTFINDER_INSTALL_DIR", str(temp_dir / "installed"))
        with patch(
            "fontfinder.fonts.manager.get_system_font_directories", return_value=[system_dir]
        ):
            yield

    @pytest.fixture(autouse=True)
    def restore_log_level(self):
        """The CLI sets the package logger level; put it back afterwards."""
        logger = logging.getLogger("fontfinder")
        previous = logger.level
        yield logger
        logger.setLevel(previous)

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("families", "files", "list", "find", "install"):
            assert command in result.output

    def test_families(self, runner, custom_dir):
        result = runner.invoke(cli, ["--custom-dir", str(custom_dir), "families"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Alpha", "Beta", "Foo"]

    def test_ignore_system_fonts(self, runner, custom_dir):
        result = runner.invoke(
            cli, ["--custom-dir", str(custom_dir), "--ignore-system-fonts", "families"]
        )

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Beta"]

    def test_files(self, runner):
        parseable = runner.invoke(cli, ["files"])
        everything = runner.invoke(cli, ["files", "--all"])

        assert parseable.exit_code == 0
        assert not any(line.endswith(".dfont") for line in parseable.stdout.splitlines())
        assert any(line.endswith("Legacy.dfont") for line in everything.stdout.splitlines())

    def test_list_json(self, runner, custom_dir):
        result = runner.invoke(cli, ["--custom-dir", str(custom_dir), "list", "--json"])

        assert result.exit_code == 0
        data = {entry["family"]: entry for entry in json.loads(result.stdout)}
        assert set(data["Alpha"]["files"]) == {"Regular", "Bold"}
        assert data["Beta"]["is_system_font"] is False

    def test_list_text(self, runner, custom_dir):
        result = runner.invoke(cli, ["--custom-dir", str(custom_dir), "list"])

        assert result.exit_code == 0
        assert "Beta [custom]" in result.stdout
        assert "    Bold: " in result.stdout

    def test_find(self, runner):
        result = runner.invoke(cli, ["find", "Alpha", "-s", "Bold"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [(f["family"], f["style"]) for f in data["found"]] == [("Alpha", "Bold")]
        assert data["missing"] == []

    def test_find_missing_exits_with_error(self, runner):
        result = runner.invoke(cli, ["find", "Alpha", "-s", "Black"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["missing"] == [{"family": "Alpha", "style": "Black"}]

    def test_find_is_case_sensitive(self, runner):
        result = runner.invoke(cli, ["find", "alpha"])

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"found": [], "missing": [{"family": "alpha"}]}

    def test_config_file(self, runner, custom_dir, temp_dir):
        config_path = temp_dir / "fontfinder.yaml"
        config_path.write_text(
            yaml.safe_dump({"custom_dirs": [str(custom_dir)], "ignore_system_fonts": True})
        )

        result = runner.invoke(cli, ["--config", str(config_path), "families"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Beta"]

    def test_invalid_config_file(self, runner, temp_dir):
        config_path = temp_dir / "bad.yaml"
        config_path.write_text("parsers: [fontkit]\n")

        result = runner.invoke(cli, ["--config", str(config_path), "families"])

        assert result.exit_code == 1

    def test_install(self, runner, font_factory, temp_dir):
        new_font = font_factory("downloads/Gamma-Regular.ttf", "Gamma")

        with patch("fontfinder.fonts.installer.FontInstaller.refresh_font_cache"):
            result = runner.invoke(cli, ["install", str(new_font), "--timeout", "5"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["success"] is True
        assert data["installed_count"] == 1
        assert [(f["family"], f["style"]) for f in data["installed"]] == [("Gamma", "Regular")]
        assert (temp_dir / "installed" / "Gamma-Regular.ttf").exists()

    def test_install_timeout_exits_with_error(self, runner, font_factory):
        new_font = font_factory("downloads/Delta-Regular.ttf", "Delta")

        with patch(
            "fontfinder.fonts.installer.FontInstaller.refresh_font_cache",
            side_effect=InstallTimeoutError("fc-cache", 5.0),
        ):
            result = runner.invoke(cli, ["install", str(new_font)])

        assert result.exit_code == 1

    def test_log_level_from_environment(self, runner, monkeypatch, restore_log_level):
        monkeypatch.setenv("FONTFINDER_LOG_LEVEL", "warning")

        result = runner.invoke(cli, ["families"])

        assert result.exit_code == 0
        assert restore_log_level.level == logging.WARNING

    def test_verbose_overrides_log_level(self, runner, monkeypatch, restore_log_level):
        monkeypatch.setenv("FONTFINDER_LOG_LEVEL", "ERROR")

        result = runner.invoke(cli, ["--verbose", "families"])

        assert result.exit_code == 0
        assert restore_log_level.level == logging.DEBUG
