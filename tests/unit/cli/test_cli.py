"""Tests for the afas-update command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
import pytest
from rich.console import Console

from afas_update.cli import app
from afas_update.cli.commands import show as show_module
from afas_update.cli.commands import types as types_module


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Render tables without wrapping so cell values can be matched."""
    monkeypatch.setattr(show_module, "console", Console(width=200))
    monkeypatch.setattr(types_module, "console", Console(width=200))


def _write_request(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestTypesCommand:
    def test_lists_builtin_types(self, runner):
        result = runner.invoke(app, ["types"])

        assert result.exit_code == 0
        assert "KnSubject" in result.output
        assert "KnOrganisation" in result.output
        assert "FbSalesLines" in result.output


class TestShowCommand:
    def test_shows_fields_and_objects(self, runner):
        result = runner.invoke(app, ["show", "KnSubject"])

        assert result.exit_code == 0
        assert "StId" in result.output
        assert "KnSubjectLink" in result.output

    def test_parent_adjusts_schema(self, runner):
        standalone = runner.invoke(app, ["show", "KnContact"])
        embedded = runner.invoke(app, ["show", "KnContact", "--parent", "KnOrganisation"])

        assert standalone.exit_code == 0 and embedded.exit_code == 0
        assert "BcCoOga" in standalone.output
        assert "ViKc" not in standalone.output
        assert "BcCoOga" not in embedded.output
        assert "ViKc" in embedded.output

    def test_unknown_type(self, runner):
        result = runner.invoke(app, ["show", "Nope"])

        assert result.exit_code == 1
        assert "Unknown object type 'Nope'" in result.output

    def test_bad_action(self, runner):
        result = runner.invoke(app, ["show", "KnSubject", "--action", "upsert"])

        assert result.exit_code == 2


class TestRenderCommand:
    def test_render_help(self, runner):
        result = runner.invoke(app, ["render", "--help"])

        assert result.exit_code == 0
        assert "REQUEST_FILE" in result.output
        assert "--format" in result.output
        assert "--pretty / --compact" in result.output

    def test_renders_json(self, runner):
        with runner.isolated_filesystem():
            request = _write_request(
                Path("request.json"),
                {"type": "KnSubject", "action": "insert", "elements": {"type": 1, "Ds": "x"}},
            )
            result = runner.invoke(app, ["render", str(request)])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == (
            '{"KnSubject":{"Element":{"Fields":{"StId":1,"Ds":"x"}}}}'
        )

    def test_renders_xml(self, runner):
        with runner.isolated_filesystem():
            request = _write_request(
                Path("request.json"),
                {"type": "KnSubject", "action": "post", "elements": [{"#id": 3, "Ds": "x", "StId": 1}]},
            )
            result = runner.invoke(app, ["render", str(request), "--format", "xml"])

        assert result.exit_code == 0, result.output
        assert '<Element SbId="3"><Fields Action="insert">' in result.output

    def test_config_file_sets_format(self, runner):
        with runner.isolated_filesystem():
            request = _write_request(
                Path("request.json"), {"type": "KnSubject", "action": "insert", "elements": {"Ds": "x", "StId": 1}}
            )
            Path("afas_update.toml").write_text('[output]\nformat = "xml"\n', encoding="utf-8")
            result = runner.invoke(app, ["render", str(request)])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("<KnSubject ")

    def test_invalid_request_file(self, runner):
        with runner.isolated_filesystem():
            request = _write_request(Path("request.json"), {"action": "insert", "elements": {}})
            result = runner.invoke(app, ["render", str(request)])

        assert result.exit_code == 1
        assert "Invalid request file" in result.output

    def test_validation_failure(self, runner):
        with runner.isolated_filesystem():
            request = _write_request(
                Path("request.json"),
                {"type": "KnSubject", "action": "insert", "elements": {"Ds": "x"}},
            )
            result = runner.invoke(app, ["render", str(request)])

        assert result.exit_code == 1
        assert "Could not render 'KnSubject' payload" in result.output
