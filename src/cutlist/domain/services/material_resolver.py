"""Material and thickness resolution for parts.

Precedence for a single part, highest first:

1. instance override: the cabinet's ``material_overrides`` keyed by rule id,
   part name or role
2. the material id declared on the part rule
3. the pattern's material assignment for the part's role
4. the global default: the rule set's role material when the library knows
   it, else the global settings thickness

The first level that is present wins. A material id that is not in the
library keeps its level but takes the thickness the lower levels would give.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..entities import CabinetPattern, GlobalSettings, PartRule, RuleSet
from ..value_objects import Material, MaterialRole, MaterialSource, ResolvedMaterial

logger = logging.getLogger(__name__)

__all__ = [
    "find_material",
    "get_material_thickness",
    "global_default_thickness",
    "resolve_part_material",
]


def find_material(material_id: str | None, materials: Sequence[Material]) -> Material | None:
    """Find a material by id with a linear scan."""
    if not material_id:
        return None
    return next((m for m in materials if m.id == material_id), None)


def get_material_thickness(
    material_id: str | None,
    materials: Sequence[Material],
    fallback: float,
) -> float:
    """Thickness of a library material, or ``fallback`` if it is absent or unknown."""
    material = find_material(material_id, materials)
    return material.thickness if material is not None else fallback


def global_default_thickness(
    role: MaterialRole, settings: GlobalSettings, rule_set: RuleSet | None = None
) -> float:
    """Thickness a role gets when nothing more specific is declared."""
    if role is MaterialRole.BACK:
        if rule_set is not None:
            return rule_set.offsets.back_panel_thickness
        return settings.back_panel_thickness
    if role is MaterialRole.EDGE_BANDING:
        return settings.default_edge_banding
    return settings.material_thickness


def _lookup(
    material_id: str,
    materials: Sequence[Material],
    fallback: float,
    part_name: str,
) -> float:
    material = find_material(material_id, materials)
    if material is None:
        logger.warning(
            f"Material '{material_id}' for part '{part_name}' not found in library; "
            f"using {fallback}mm"
        )
        return fallback
    return material.thickness


def resolve_part_material(
    rule: PartRule,
    pattern: CabinetPattern,
    settings: GlobalSettings,
    *,
    rule_set: RuleSet | None = None,
    materials: Sequence[Material] = (),
    material_overrides: Mapping[str, str] | None = None,
) -> ResolvedMaterial:
    """Resolve which material and thickness apply to one part rule.

    Args:
        rule: The part rule.
        pattern: Pattern the rule belongs to.
        settings: Global defaults.
        rule_set: Optional construction policy.
        materials: Material library.
        material_overrides: Cabinet-level overrides of material ids, keyed by
            rule id, part name or role value.

    Returns:
        The resolved material id, thickness and the level that produced them.
    """
    role = rule.role or MaterialRole.CARCASS

    # Level 4: global default
    default_id = rule_set.materials.for_role(role) if rule_set else None
    default_id = default_id or settings.default_material_id
    resolved = ResolvedMaterial(
        material_id=default_id,
        thickness=get_material_thickness(
            default_id, materials, global_default_thickness(role, settings, rule_set)
        ),
        source=MaterialSource.GLOBAL,
    )

    # Level 3: pattern role assignment, with its explicit thickness
    assignment = pattern.materials.for_role(role) if pattern.materials else None
    if assignment is not None:
        resolved = ResolvedMaterial(
            material_id=assignment.material_id,
            thickness=assignment.thickness,
            source=MaterialSource.PATTERN,
        )

    # Level 2: the rule's own material
    if rule.material_id:
        resolved = ResolvedMaterial(
            material_id=rule.material_id,
            thickness=_lookup(rule.material_id, materials, resolved.thickness, rule.part_name),
            source=MaterialSource.RULE,
        )

    # Level 1: instance override
    overrides = material_overrides or {}
    override_id = next(
        (
            overrides[key]
            for key in (rule.id, rule.part_name, role.value)
            if key in overrides and overrides[key]
        ),
        None,
    )
    if override_id:
        resolved = ResolvedMaterial(
            material_id=override_id,
            thickness=_lookup(override_id, materials, resolved.thickness, rule.part_name),
            source=MaterialSource.INSTANCE_OVERRIDE,
        )

    return resolved
