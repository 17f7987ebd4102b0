"""Unit tests for the table formatter and the CSV and JSON exporters."""

from __future__ import annotations

import json

import pytest

from cutlist.application.dtos import CabinetCutList, CutListOutput
from cutlist.domain import CutPart, GrainDirection
from cutlist.infrastructure import CsvExporter, CutListFormatter, JsonExporter


@pytest.fixture
def parts() -> list[CutPart]:
    return [
        CutPart("Side", 684, 554, 2, material_id="board-18", thickness=18, cabinet_name="Sink"),
        CutPart(
            "Shelf",
            564,
            530,
            1,
            material="Oak",
            thickness=18,
            edge_banding="L1",
            grain=GrainDirection.LENGTH,
            cabinet_name="Sink",
        ),
    ]


@pytest.fixture
def output(parts: list[CutPart]) -> CutListOutput:
    linked = [p.with_cabinet("c1", "Sink") for p in parts]
    return CutListOutput(
        project_name="Kitchen",
        cabinets=[CabinetCutList("c1", "Sink", "base", linked)],
        cut_list=linked,
        consolidated=linked,
    )


class TestCutListFormatter:
    """Tests for the text table."""

    def test_empty(self) -> None:
        assert CutListFormatter().format([]) == "No parts in cut list."

    def test_table_rows(self, parts: list[CutPart]) -> None:
        text = CutListFormatter().format(parts)
        lines = text.splitlines()
        assert lines[0] == "CUT LIST"
        assert "Notes" in lines[2]
        assert lines[4].startswith("Side")
        assert "684mm" in lines[4]
        assert "board-18" in lines[4]
        assert "Grain: length; Edges: L1" in lines[5]

    def test_total(self, parts: list[CutPart]) -> None:
        text = CutListFormatter().format(parts)
        area = (684 * 554 * 2 + 564 * 530) / 1_000_000
        assert text.splitlines()[-1] == f"{'TOTAL':<22} 3 pieces, {area:.2f} m²"

    def test_no_notes_column_without_notes(self) -> None:
        text = CutListFormatter().format([CutPart("Side", 684, 554, 2)])
        assert "Notes" not in text

    def test_inches(self) -> None:
        text = CutListFormatter(units="inches").format([CutPart("Side", 609, 254, 1)])
        assert '23.98"' in text
        assert '10.00"' in text

    def test_format_output_per_cabinet(self, output: CutListOutput) -> None:
        text = CutListFormatter().format_output(output)
        assert "CUT LIST: Sink (base)" in text
        assert "CONSOLIDATED" not in text

    def test_format_output_consolidated(self, output: CutListOutput) -> None:
        text = CutListFormatter().format_output(output, consolidate=True)
        assert text.startswith("CONSOLIDATED CUT LIST")

    def test_format_output_errors(self) -> None:
        output = CutListOutput(project_name="P", errors=["Cabinet 'x' references unknown pattern 'y'"])
        text = CutListFormatter().format_output(output)
        assert text.startswith("ERRORS")
        assert "unknown pattern 'y'" in text

    def test_format_output_empty(self) -> None:
        assert CutListFormatter().format_output(CutListOutput("P")) == "No cabinets in project."


class TestCsvExporter:
    """Tests for CSV export."""

    def test_optimizer_layout(self, parts: list[CutPart]) -> None:
        lines = CsvExporter().export(parts).splitlines()
        assert lines == [
            "Name,Length,Width,Qty,Label",
            "Side,684,554,2,Sink",
            "Shelf,564,530,1,Sink",
        ]

    def test_optimizer_without_labels(self, parts: list[CutPart]) -> None:
        lines = CsvExporter(include_labels=False).export(parts).splitlines()
        assert lines[0] == "Name,Length,Width,Qty"
        assert lines[1] == "Side,684,554,2"

    def test_generic_layout(self, parts: list[CutPart]) -> None:
        lines = CsvExporter(layout="generic").export(parts).splitlines()
        assert lines[0] == (
            "Part Name,Length (mm),Width (mm),Quantity,Material,Grain,Edge Banding,Cabinet"
        )
        assert lines[1] == "Side,684,554,2,board-18,none,,Sink"
        assert lines[2] == "Shelf,564,530,1,Oak,length,L1,Sink"

    def test_generic_without_edge_banding(self, parts: list[CutPart]) -> None:
        lines = CsvExporter(layout="generic", include_edge_banding=False).export(parts).splitlines()
        assert lines[2] == "Shelf,564,530,1,Oak,length,,Sink"

    def test_group_by_material(self, parts: list[CutPart]) -> None:
        lines = CsvExporter(group_by_material=True).export(list(reversed(parts))).splitlines()
        # Parts without a material label sort under "Main"
        assert [line.split(",")[0] for line in lines[1:]] == ["Side", "Shelf"]

    def test_quotes_names_with_commas(self) -> None:
        text = CsvExporter(include_labels=False).export([CutPart("Rail, front", 564, 100, 1)])
        assert text.splitlines()[1] == '"Rail, front",564,100,1'


class TestJsonExporter:
    """Tests for JSON export."""

    def test_per_cabinet(self, output: CutListOutput) -> None:
        data = json.loads(JsonExporter().export(output))
        assert data["project"] == "Kitchen"
        assert "consolidated" not in data
        assert data["cabinets"][0]["parts"][0]["part_name"] == "Side"
        assert data["total_pieces"] == 3

    def test_consolidated(self, output: CutListOutput) -> None:
        data = json.loads(JsonExporter().export(output, consolidate=True))
        assert "cabinets" not in data
        assert "cut_list" not in data
        assert len(data["consolidated"]) == 2
