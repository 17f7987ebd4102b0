"""Integration tests for the generate CLI command.

These tests run `cutlist generate` end-to-end through the Typer CliRunner:
- Table, CSV and JSON output
- Consolidation across cabinets
- Writing to an output file
- Exit codes for broken projects
"""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from cutlist.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


def _write(tmp_path: Path, data: dict[str, Any]) -> Path:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data))
    return path


class TestGenerateTable:
    """Default table output."""

    def test_table_per_cabinet(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["generate", str(project_file)])

        assert result.exit_code == 0
        assert "CUT LIST: Left box (box)" in result.output
        assert "CUT LIST: Right box (box)" in result.output
        assert "684mm" in result.output
        assert "364mm" in result.output

    def test_table_consolidated(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["generate", str(project_file), "--consolidate"])

        assert result.exit_code == 0
        assert "CONSOLIDATED CUT LIST" in result.output
        assert "CUT LIST: Left box" not in result.output

    def test_inch_display(
        self, runner: CliRunner, tmp_path: Path, project_data: dict[str, Any]
    ) -> None:
        project_data["settings"]["units"] = "inches"
        result = runner.invoke(app, ["generate", str(_write(tmp_path, project_data))])

        assert result.exit_code == 0
        assert '26.93"' in result.output  # 684mm


class TestGenerateCsv:
    """CSV output formats."""

    def test_optimizer_csv(self, runner: CliRunner, project_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "cuts.csv"
        result = runner.invoke(
            app, ["generate", str(project_file), "--format", "csv", "-o", str(out)]
        )

        assert result.exit_code == 0
        assert f"Cut list written to {out}" in result.output
        assert out.read_text().splitlines() == [
            "Name,Length,Width,Qty,Label",
            "Side,684,554,2,Left box",
            "Shelf,564,530,1,Left box",
            "Side,684,554,2,Right box",
            "Shelf,364,530,1,Right box",
        ]

    def test_generic_csv_consolidated(
        self, runner: CliRunner, project_file: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "cuts.csv"
        result = runner.invoke(
            app,
            ["generate", str(project_file), "-f", "csv-generic", "--consolidate", "-o", str(out)],
        )

        assert result.exit_code == 0
        lines = out.read_text().splitlines()
        assert lines[1] == "Side,684,554,4,Main Material,none,,"
        assert len(lines) == 4

    def test_format_from_project_file(
        self, runner: CliRunner, tmp_path: Path, project_data: dict[str, Any]
    ) -> None:
        project_data["output"] = {"format": "csv", "consolidate": True}
        result = runner.invoke(app, ["generate", str(_write(tmp_path, project_data))])

        assert result.exit_code == 0
        assert "Side,684,554,4," in result.output


class TestGenerateJson:
    """JSON output."""

    def test_json_file(self, runner: CliRunner, project_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "cuts.json"
        result = runner.invoke(
            app, ["generate", str(project_file), "--format", "json", "--output", str(out)]
        )

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["project"] == "Test kitchen"
        assert [c["id"] for c in data["cabinets"]] == ["c1", "c2"]
        side = data["cabinets"][0]["parts"][0]
        assert (side["length"], side["width"], side["quantity"]) == (684, 554, 2)
        assert side["cabinet_name"] == "Left box"
        assert data["total_pieces"] == 6


class TestGenerateErrors:
    """Exit codes and messages for broken input."""

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["generate", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_schema_error(
        self, runner: CliRunner, tmp_path: Path, project_data: dict[str, Any]
    ) -> None:
        project_data["cabinets"][0]["dimensions"] = {"height": -1, "width": 600, "depth": 560}
        result = runner.invoke(app, ["generate", str(_write(tmp_path, project_data))])

        assert result.exit_code == 1
        assert "cabinets[0].dimensions.height" in result.output

    def test_unknown_format(self, runner: CliRunner, project_file: Path) -> None:
        result = runner.invoke(app, ["generate", str(project_file), "--format", "dxf"])

        assert result.exit_code == 1
        assert "Unknown format: dxf" in result.output

    def test_unknown_pattern_still_prints_other_cabinets(
        self, runner: CliRunner, tmp_path: Path, project_data: dict[str, Any]
    ) -> None:
        project_data["cabinets"].append({"id": "ghost", "pattern": "missing"})
        result = runner.invoke(app, ["generate", str(_write(tmp_path, project_data))])

        assert result.exit_code == 1
        assert "CUT LIST: Left box (box)" in result.output
        assert "unknown pattern 'missing'" in result.output
