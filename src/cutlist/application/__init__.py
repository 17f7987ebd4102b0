"""Application layer - use cases and orchestration."""

from .commands import GenerateCutListCommand
from .dtos import CabinetCutList, CutListOutput

__all__ = [
    "CabinetCutList",
    "CutListOutput",
    "GenerateCutListCommand",
]
