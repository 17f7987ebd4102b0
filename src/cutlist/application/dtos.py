"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cutlist.domain import CutPart


@dataclass
class CabinetCutList:
    """Cut list of one cabinet.

    Attributes:
        cabinet_id: Id of the cabinet instance.
        cabinet_name: Display name of the cabinet.
        pattern_id: Pattern the cabinet was built from.
        parts: Parts in rule order, linked to the cabinet.
    """

    cabinet_id: str
    cabinet_name: str
    pattern_id: str
    parts: list[CutPart] = field(default_factory=list)

    @property
    def piece_count(self) -> int:
        return sum(part.quantity for part in self.parts)


@dataclass
class CutListOutput:
    """Output DTO containing the cut lists of a project.

    Attributes:
        project_name: Name of the project.
        cabinets: Per-cabinet cut lists in project order.
        cut_list: All parts of all cabinets, flattened in cabinet order.
        consolidated: Identical parts merged with summed quantities.
        errors: Messages for cabinets that could not be calculated.
    """

    project_name: str
    cabinets: list[CabinetCutList] = field(default_factory=list)
    cut_list: list[CutPart] = field(default_factory=list)
    consolidated: list[CutPart] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if every cabinet was calculated successfully."""
        return len(self.errors) == 0

    @property
    def total_pieces(self) -> int:
        return sum(part.quantity for part in self.cut_list)

    @property
    def total_area(self) -> float:
        """Total board area in square millimetres."""
        return sum(part.area for part in self.cut_list)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-serializable representation."""
        return {
            "project": self.project_name,
            "cabinets": [
                {
                    "id": cabinet.cabinet_id,
                    "name": cabinet.cabinet_name,
                    "pattern": cabinet.pattern_id,
                    "parts": [part.to_dict() for part in cabinet.parts],
                }
                for cabinet in self.cabinets
            ],
            "cut_list": [part.to_dict() for part in self.cut_list],
            "consolidated": [part.to_dict() for part in self.consolidated],
            "total_pieces": self.total_pieces,
            "errors": list(self.errors),
        }
