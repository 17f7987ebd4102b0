"""Application commands (use cases) for cut list generation."""

from __future__ import annotations

import logging

from cutlist.domain import CutListGenerator, Project
from cutlist.domain.services import (
    UnknownPatternError,
    consolidate_parts,
    flatten_project_cut_list,
)

from .dtos import CabinetCutList, CutListOutput

logger = logging.getLogger(__name__)


class GenerateCutListCommand:
    """Command to generate the cut lists of every cabinet in a project."""

    def __init__(self, generator: CutListGenerator | None = None) -> None:
        self.generator = generator

    def execute(self, project: Project) -> CutListOutput:
        """Execute the cut list generation command.

        Cabinets are calculated in project order. A cabinet whose pattern is
        unknown, or which has no dimensions, is reported in ``errors`` and
        skipped; the other cabinets are still calculated.

        Args:
            project: Project with its cabinets and libraries.

        Returns:
            CutListOutput with per-cabinet, flattened and consolidated lists.
        """
        generator = self.generator or CutListGenerator(project)
        output = CutListOutput(project_name=project.name)

        for cabinet in project.cabinets:
            try:
                parts = generator.generate(cabinet)
            except (UnknownPatternError, ValueError) as e:
                logger.warning(f"Skipping cabinet '{cabinet.id}': {e}")
                output.errors.append(str(e))
                continue
            output.cabinets.append(
                CabinetCutList(
                    cabinet_id=cabinet.id,
                    cabinet_name=cabinet.name,
                    pattern_id=cabinet.pattern_id,
                    parts=parts,
                )
            )

        output.cut_list = flatten_project_cut_list(c.parts for c in output.cabinets)
        output.consolidated = consolidate_parts(output.cut_list)
        logger.debug(
            f"Generated {len(output.cut_list)} parts for {len(output.cabinets)} cabinets "
            f"({len(output.consolidated)} after consolidation)"
        )
        return output
