"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from visrange.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "visrange.yaml"
    path.write_text(
        """
min: 0
max: 200
precision: 1
inRange:
  color: [blue, red]
"""
    )
    return path


@pytest.fixture
def sources_file(tmp_path: Path) -> Path:
    path = tmp_path / "sources.yaml"
    path.write_text("- kind: list\n- kind: tree\n- kind: list\n")
    return path


class TestResolveCommand:
    """Test the resolve CLI command."""

    def test_yaml_output(self, config_file: Path) -> None:
        result = runner.invoke(app, ["resolve", str(config_file)])

        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["extent"] == [0, 200]
        assert data["item_size"] == [20, 140]
        assert data["mappings"]["target"]["inRange"]["color"] == {
            "domain": [0, 200],
            "visual": ["blue", "red"],
        }
        assert data["mappings"]["target"]["outOfRange"]["color"]["visual"] == ["rgba(0,0,0,0)"]
        assert data["mappings"]["controller"]["outOfRange"]["symbol"]["visual"] == ["roundRect"]

    def test_json_output_with_sources(self, config_file: Path, sources_file: Path) -> None:
        result = runner.invoke(
            app,
            ["resolve", str(config_file), "--sources", str(sources_file), "--format", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["targets"] == [0, 2]
        assert data["auto_targets"] is True

    def test_missing_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["resolve", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_config(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("precision: -1\n")
        result = runner.invoke(app, ["resolve", str(path)])

        assert result.exit_code == 1

    def test_verbose_reports_changes(self, config_file: Path) -> None:
        result = runner.invoke(app, ["-v", "1", "resolve", str(config_file)])

        assert result.exit_code == 0


class TestLabelCommand:
    """Test the label CLI command."""

    def test_closed_range(self, config_file: Path) -> None:
        result = runner.invoke(app, ["label", str(config_file), "1.234", "5.678"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "1.2 - 5.7"

    def test_open_bounds(self, config_file: Path) -> None:
        result = runner.invoke(app, ["label", str(config_file), "min", "10"])
        assert result.stdout.strip() == "< 10.0"

        result = runner.invoke(app, ["label", str(config_file), "10", "max"])
        assert result.stdout.strip() == "> 10.0"

    def test_single_value(self, config_file: Path) -> None:
        result = runner.invoke(app, ["label", str(config_file), "3"])
        assert result.stdout.strip() == "3.0"

    def test_bad_number(self, config_file: Path) -> None:
        result = runner.invoke(app, ["label", str(config_file), "abc"])
        assert result.exit_code == 1
