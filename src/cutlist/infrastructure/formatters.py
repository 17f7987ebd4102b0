"""Output formatters and exporters for cut lists."""

from __future__ import annotations

import csv
import io
import json
from typing import Literal

from cutlist.application.dtos import CutListOutput
from cutlist.domain import CutPart, format_dimension

CsvLayout = Literal["cutlist-optimizer", "generic"]


class CutListFormatter:
    """Formats cut lists as a text table.

    Dimensions are shown in the project's display units. A Notes column is
    added when any part carries edge banding, a grain constraint or the
    optional flag.
    """

    def __init__(self, units: str = "mm") -> None:
        self._units = units

    def format(self, cut_list: list[CutPart], title: str = "CUT LIST") -> str:
        """Format a cut list as a table."""
        if not cut_list:
            return "No parts in cut list."

        has_notes = any(self._get_notes(part) for part in cut_list)
        width = 100 if has_notes else 80
        header = (
            f"{'Part':<22} {'Length':<10} {'Width':<10} {'Qty':<5} "
            f"{'Thick':<7} {'Material':<20}"
        )
        lines = [title, "=" * width, header + (" Notes" if has_notes else ""), "-" * width]

        for part in cut_list:
            thickness = format_dimension(part.thickness, self._units) if part.thickness else ""
            line = (
                f"{part.part_name:<22} "
                f"{format_dimension(part.length, self._units):<10} "
                f"{format_dimension(part.width, self._units):<10} "
                f"{part.quantity:<5} {thickness:<7} "
                f"{(part.material_id or part.material or ''):<20}"
            )
            if has_notes:
                line += f" {self._get_notes(part)}"
            lines.append(line.rstrip())

        total_pieces = sum(part.quantity for part in cut_list)
        total_area = sum(part.area for part in cut_list)
        lines.append("-" * width)
        lines.append(f"{'TOTAL':<22} {total_pieces} pieces, {total_area / 1_000_000:.2f} m²")
        return "\n".join(lines)

    def format_output(self, output: CutListOutput, consolidate: bool = False) -> str:
        """Format a project: one table per cabinet, or one consolidated table."""
        sections: list[str] = []
        if consolidate:
            sections.append(self.format(output.consolidated, title="CONSOLIDATED CUT LIST"))
        else:
            for cabinet in output.cabinets:
                sections.append(
                    self.format(
                        cabinet.parts,
                        title=f"CUT LIST: {cabinet.cabinet_name} ({cabinet.pattern_id})",
                    )
                )
        if output.errors:
            sections.append("ERRORS\n" + "\n".join(f"  - {e}" for e in output.errors))
        return "\n\n".join(sections) if sections else "No cabinets in project."

    def _get_notes(self, part: CutPart) -> str:
        notes: list[str] = []
        if part.grain is not None and part.grain.value != "none":
            notes.append(f"Grain: {part.grain.value}")
        if part.edge_banding:
            notes.append(f"Edges: {part.edge_banding}")
        if part.optional:
            notes.append("Optional")
        return "; ".join(notes)


class CsvExporter:
    """Exports cut lists as CSV for cutting optimizers and spreadsheets.

    Two layouts are supported:
    - "cutlist-optimizer": Name, Length, Width, Qty and an optional Label
      column holding the cabinet name.
    - "generic": Part Name, Length (mm), Width (mm), Quantity, Material,
      Grain, Edge Banding, Cabinet.
    """

    def __init__(
        self,
        layout: CsvLayout = "cutlist-optimizer",
        include_labels: bool = True,
        include_edge_banding: bool = True,
        group_by_material: bool = False,
    ) -> None:
        self.layout = layout
        self.include_labels = include_labels
        self.include_edge_banding = include_edge_banding
        self.group_by_material = group_by_material

    def export(self, cut_list: list[CutPart]) -> str:
        """Export a cut list as a CSV string."""
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")

        parts = list(cut_list)
        if self.group_by_material:
            parts.sort(key=lambda p: p.material or "Main")

        if self.layout == "cutlist-optimizer":
            headers = ["Name", "Length", "Width", "Qty"]
            if self.include_labels:
                headers.append("Label")
            writer.writerow(headers)
            for part in parts:
                row: list[str | int] = [part.part_name, part.length, part.width, part.quantity]
                if self.include_labels:
                    row.append(part.cabinet_name or "")
                writer.writerow(row)
        else:
            writer.writerow(
                [
                    "Part Name",
                    "Length (mm)",
                    "Width (mm)",
                    "Quantity",
                    "Material",
                    "Grain",
                    "Edge Banding",
                    "Cabinet",
                ]
            )
            for part in parts:
                writer.writerow(
                    [
                        part.part_name,
                        part.length,
                        part.width,
                        part.quantity,
                        part.material or part.material_id or "Main Material",
                        part.grain.value if part.grain else "none",
                        (part.edge_banding or "") if self.include_edge_banding else "",
                        part.cabinet_name or "",
                    ]
                )

        return output.getvalue().rstrip("\n")


class JsonExporter:
    """Exports cut list output as JSON."""

    def export(self, output: CutListOutput, consolidate: bool = False) -> str:
        """Export output as a JSON string.

        With ``consolidate`` only the consolidated list is included in place
        of the per-cabinet lists.
        """
        data = output.to_dict()
        if consolidate:
            data.pop("cabinets")
            data.pop("cut_list")
        else:
            data.pop("consolidated")
        return json.dumps(data, indent=2)
