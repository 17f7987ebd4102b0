"""Cut list generation service."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..entities import CabinetInstance, Project
from ..value_objects import CutPart
from .part_calculator import calculate_parts

logger = logging.getLogger(__name__)

__all__ = [
    "CutListGenerator",
    "UnknownPatternError",
    "attach_cabinet",
    "consolidate_parts",
    "flatten_project_cut_list",
]


class UnknownPatternError(LookupError):
    """Raised when a cabinet references a pattern the project does not define."""

    def __init__(self, cabinet_id: str, pattern_id: str) -> None:
        self.cabinet_id = cabinet_id
        self.pattern_id = pattern_id
        super().__init__(f"Cabinet '{cabinet_id}' references unknown pattern '{pattern_id}'")


def attach_cabinet(parts: Iterable[CutPart], cabinet: CabinetInstance) -> list[CutPart]:
    """Link every part to the cabinet it was calculated for."""
    return [part.with_cabinet(cabinet.id, cabinet.name) for part in parts]


def _consolidation_key(part: CutPart) -> tuple[str, int, int, str | None]:
    return (part.part_name, part.length, part.width, part.material_id or part.material)


def consolidate_parts(parts: Iterable[CutPart]) -> list[CutPart]:
    """Merge parts with the same name, length, width and material.

    Quantities are summed. The first occurrence keeps its position and its
    other attributes; cabinet linkage is cleared when the merged parts come
    from different cabinets.
    """
    merged: dict[tuple[str, int, int, str | None], CutPart] = {}
    for part in parts:
        key = _consolidation_key(part)
        existing = merged.get(key)
        if existing is None:
            merged[key] = part
            continue
        same_cabinet = existing.cabinet_id == part.cabinet_id
        merged[key] = replace(
            existing,
            quantity=existing.quantity + part.quantity,
            cabinet_id=existing.cabinet_id if same_cabinet else None,
            cabinet_name=existing.cabinet_name if same_cabinet else None,
        )
    return list(merged.values())


def flatten_project_cut_list(cut_lists: Iterable[Sequence[CutPart]]) -> list[CutPart]:
    """Concatenate per-cabinet cut lists in cabinet order."""
    return [part for parts in cut_lists for part in parts]


class CutListGenerator:
    """Generates cut lists for the cabinets of a project."""

    def __init__(self, project: Project) -> None:
        """Initialize the generator against a project's libraries.

        Args:
            project: Project holding the patterns, rule sets, materials,
                joints and settings the cabinets are calculated against.
        """
        self._project = project

    def generate(self, cabinet: CabinetInstance) -> list[CutPart]:
        """Generate the cut list for one cabinet.

        The cabinet's own dimensions are used when present, otherwise the
        pattern's default dimensions.

        Args:
            cabinet: The cabinet to calculate.

        Returns:
            Parts linked to the cabinet, in rule order.

        Raises:
            UnknownPatternError: If the cabinet's pattern is not in the project.
            ValueError: If neither the cabinet nor its pattern has dimensions.
        """
        project = self._project
        pattern = project.find_pattern(cabinet.pattern_id)
        if pattern is None:
            raise UnknownPatternError(cabinet.id, cabinet.pattern_id)

        dimensions = cabinet.dimensions or pattern.default_dimensions
        if dimensions is None:
            raise ValueError(
                f"Cabinet '{cabinet.id}' has no dimensions and pattern "
                f"'{pattern.id}' declares no defaults"
            )

        rule_set = project.find_rule_set(cabinet.rule_set_id)
        if cabinet.rule_set_id is not None and rule_set is None:
            logger.warning(
                f"Rule set '{cabinet.rule_set_id}' for cabinet '{cabinet.id}' not found; "
                f"using defaults"
            )

        logger.debug(
            f"Calculating cabinet '{cabinet.id}' ({pattern.id}) at "
            f"{dimensions.height} x {dimensions.width} x {dimensions.depth}"
        )
        parts = calculate_parts(
            pattern,
            dimensions,
            project.settings,
            variable_overrides=cabinet.variable_overrides,
            zone_proportions=cabinet.zone_proportions,
            rule_set=rule_set,
            materials=project.materials,
            material_overrides=cabinet.material_overrides,
            joints=project.joints,
            column_proportions=cabinet.column_proportions,
            column_zone_proportions=cabinet.column_zone_proportions,
        )
        return attach_cabinet(parts, cabinet)

