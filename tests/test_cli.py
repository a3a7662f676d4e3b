# tests/test_cli.py
"""Tests for the CLI."""

import pytest

pytest.importorskip("typer", reason="Tests require typer package (pip install atomlayout[cli])")

from typer.testing import CliRunner

from atomlayout import __version__
from atomlayout.cli import app


@pytest.fixture
def runner(tmp_path, monkeypatch):
    # Keep any config file or env override on the host out of the way
    monkeypatch.chdir(tmp_path)
    for key in ("NUCLEON_RADIUS", "PRESET", "ELECTRON_ADD_MODE", "RANDOM_SEED"):
        monkeypatch.delenv(f"ATOMLAYOUT_{key}", raising=False)
    return CliRunner()


class TestCliBasics:
    def test_help(self, runner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "atomlayout" in result.output.lower()

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestLayoutCommand:
    def test_layout_summary(self, runner):
        result = runner.invoke(app, ["layout", "-p", "5", "-n", "5", "-e", "3"])
        assert result.exit_code == 0
        assert "Mass number: 10" in result.output
        assert "Charge: +2" in result.output
        assert "proton" in result.output

    def test_layout_empty_atom(self, runner):
        result = runner.invoke(app, ["layout"])
        assert result.exit_code == 0
        assert "Protons: 0" in result.output

    def test_too_many_electrons(self, runner):
        result = runner.invoke(app, ["layout", "-e", "11"])
        assert result.exit_code != 0
        assert "no open positions" in result.output.lower()

    def test_nucleon_radius_override(self, runner):
        result = runner.invoke(app, ["layout", "-p", "1", "-r", "4"])
        assert result.exit_code == 0
        assert "Nucleus radius: 4.000" in result.output

    def test_invalid_nucleon_radius(self, runner):
        result = runner.invoke(app, ["layout", "-p", "1", "-r", "0"])
        assert result.exit_code != 0
        assert "invalid settings" in result.output.lower()


class TestShellsCommand:
    def test_lists_both_shells(self, runner):
        result = runner.invoke(app, ["shells"])
        assert result.exit_code == 0
        assert "inner" in result.output
        assert "outer" in result.output


class TestConfigCommand:
    def test_config_shows_settings(self, runner):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "nucleon_radius" in result.output
        assert "electron_add_mode" in result.output

    def test_config_file(self, runner, tmp_path):
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("preset: compact\n")
        result = runner.invoke(app, ["config", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "3.0" in result.output

    def test_unknown_keys_warn(self, runner, tmp_path):
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("colour: blue\n")
        result = runner.invoke(app, ["config", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "colour" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(app, ["config", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "could not load config" in result.output.lower()
