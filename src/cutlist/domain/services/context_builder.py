"""Expression context construction for one cabinet.

The expression context is the flat variable mapping part formulas are
evaluated against. It is rebuilt for every calculation from the cabinet's
outer dimensions, the global settings, the pattern and an optional rule set.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence

from ..defaults import DEFAULT_OFFSETS
from ..entities import CabinetPattern, GlobalSettings, RuleSet
from ..value_objects import (
    BackPanelMethod,
    Dimensions,
    LayoutProportions,
    MaterialRole,
    SideConstruction,
    ZoneType,
)
from .expression import round_half_up

logger = logging.getLogger(__name__)

__all__ = [
    "build_expression_context",
    "construction_dimensions",
    "normalize_proportions",
    "variable_name",
]

# Tolerance when checking whether proportions already sum to 1
PROPORTION_SUM_TOLERANCE = 1e-6


def variable_name(identifier: str) -> str:
    """Turn an id such as ``col-Left`` into a variable stem ``col_left``."""
    return re.sub(r"[^a-z0-9_]", "_", identifier.lower())


def normalize_proportions(
    proportions: Sequence[float] | None, count: int
) -> list[float]:
    """Return ``count`` fractions that sum to 1.

    Missing proportions, or a list whose length does not match ``count``,
    give an equal division. Lists that do not sum to 1 are rescaled. Lists
    holding a negative or non-finite value, or summing to zero, are rejected
    in favour of an equal division.
    """
    if count <= 0:
        return []
    equal = [1.0 / count] * count
    if proportions is None or len(proportions) != count:
        return equal

    values = [float(p) for p in proportions]
    if any(not math.isfinite(v) or v < 0 for v in values):
        logger.warning(f"Ignoring invalid proportions {values}; using equal division")
        return equal

    total = sum(values)
    if total <= 0:
        logger.warning(f"Proportions {values} sum to zero; using equal division")
        return equal
    if abs(total - 1.0) > PROPORTION_SUM_TOLERANCE:
        logger.debug(f"Normalizing proportions {values} (sum {total})")
        return [v / total for v in values]
    return values


def construction_dimensions(
    side_construction: SideConstruction,
    height: float,
    width: float,
    thickness: float,
) -> tuple[float, float, float]:
    """Side height, bottom width and top width for a construction method.

    Args:
        side_construction: How sides meet the top and bottom.
        height: Outer cabinet height.
        width: Outer cabinet width.
        thickness: Carcass material thickness.

    Returns:
        Tuple of (side_height, bottom_width, top_width).
    """
    between = width - 2 * thickness
    if side_construction is SideConstruction.BOTTOM_BETWEEN_SIDES:
        return height - thickness, width, between
    if side_construction is SideConstruction.ALL_BETWEEN:
        return height - 2 * thickness, between, between
    return height, between, between


def _zone_counts(pattern: CabinetPattern) -> tuple[int, int, int]:
    zones = pattern.layout_zones()
    drawers = sum(1 for z in zones if z.zone_type is ZoneType.DRAWER)
    doors = sum(1 for z in zones if z.zone_type is ZoneType.DOOR)
    shelves = sum(1 for z in zones if z.counts_as_shelf)
    return drawers, doors, shelves


def _layout_variables(
    pattern: CabinetPattern,
    internal_width: float,
    internal_height: float,
    proportions: LayoutProportions,
) -> dict[str, float]:
    """Column width and zone height variables, by index and by id."""
    variables: dict[str, float] = {}

    if pattern.uses_columns:
        column_fractions = normalize_proportions(
            proportions.columns or pattern.column_proportions, len(pattern.columns)
        )
        for col_idx, column in enumerate(pattern.columns):
            column_width = round_half_up(internal_width * column_fractions[col_idx])
            variables[f"column_{col_idx}_width"] = column_width
            variables[f"{variable_name(column.id)}_width"] = column_width

            zone_fractions = normalize_proportions(
                proportions.column_zones.get(column.id), len(column.zones)
            )
            for zone_idx, zone in enumerate(column.zones):
                zone_height = round_half_up(internal_height * zone_fractions[zone_idx])
                variables[f"col_{col_idx}_zone_{zone_idx}_height"] = zone_height
                variables[f"{variable_name(zone.id)}_height"] = zone_height
        return variables

    zone_fractions = normalize_proportions(proportions.zones, len(pattern.zones))
    for zone_idx, zone in enumerate(pattern.zones):
        zone_height = round_half_up(internal_height * zone_fractions[zone_idx])
        variables[f"zone_{zone_idx}_height"] = zone_height
        variables[f"{variable_name(zone.id)}_height"] = zone_height
    return variables


def build_expression_context(
    dimensions: Dimensions,
    settings: GlobalSettings,
    pattern: CabinetPattern,
    rule_set: RuleSet | None = None,
    *,
    proportions: LayoutProportions | None = None,
) -> dict[str, float]:
    """Build the variable mapping for one cabinet.

    Thickness per role comes from the pattern's material assignment when it
    declares one, otherwise from the global settings. Back panel thickness
    and groove depth fall back to the rule set offsets before the global
    settings; ``internal_depth`` always uses the global groove depth.
    Pattern variables are merged last so they can shadow any
    built-in name.

    The function is pure: identical inputs give an identical mapping.

    Args:
        dimensions: Outer cabinet dimensions.
        settings: Global defaults.
        pattern: The cabinet pattern.
        rule_set: Optional construction policy; defaults apply without one.
        proportions: Optional caller-supplied layout proportions.

    Returns:
        Mapping of lower-case variable names to values.
    """
    height, width, depth = dimensions.height, dimensions.width, dimensions.depth
    pattern_materials = pattern.materials

    carcass = pattern_materials.carcass if pattern_materials else None
    back = pattern_materials.back if pattern_materials else None
    material_thickness = carcass.thickness if carcass else settings.material_thickness
    front = pattern_materials.for_role(MaterialRole.FRONT) if pattern_materials else None
    shelf = pattern_materials.for_role(MaterialRole.SHELF) if pattern_materials else None
    front_thickness = front.thickness if front else material_thickness
    shelf_thickness = shelf.thickness if shelf else material_thickness

    offsets = rule_set.offsets if rule_set else DEFAULT_OFFSETS
    if back:
        back_thickness = back.thickness
    elif rule_set:
        back_thickness = rule_set.offsets.back_panel_thickness
    else:
        back_thickness = settings.back_panel_thickness
    back_groove = (
        rule_set.offsets.back_groove_depth if rule_set else settings.back_panel_groove_depth
    )

    side_construction = (
        rule_set.side_construction if rule_set else SideConstruction.SIDES_ON_BOTTOM
    )
    back_panel_method = rule_set.back_panel_method if rule_set else BackPanelMethod.OVERLAY

    side_height, bottom_width, top_width = construction_dimensions(
        side_construction, height, width, material_thickness
    )

    internal_width = width - 2 * material_thickness
    internal_height = height - 2 * material_thickness
    back_width = internal_width
    back_height = internal_height
    if back_panel_method.is_inset:
        back_width -= 2 * back_groove
        back_height -= 2 * back_groove

    drawer_count, door_count, shelf_count = _zone_counts(pattern)

    context: dict[str, float] = {
        # Raw dimensions
        "total_height": height,
        "total_width": width,
        "total_depth": depth,
        # Material thicknesses
        "material_thickness": material_thickness,
        "thickness": material_thickness,
        "carcass_thickness": material_thickness,
        "front_thickness": front_thickness,
        "shelf_thickness": shelf_thickness,
        "back_thickness": back_thickness,
        "back_groove": back_groove,
        "edge_banding": settings.default_edge_banding,
        # Construction-aware dimensions
        "side_height": side_height,
        "bottom_width": bottom_width,
        "top_width": top_width,
        "back_width": back_width,
        "back_height": back_height,
        # Internals
        "internal_width": internal_width,
        "internal_height": internal_height,
        "internal_depth": depth - settings.back_panel_groove_depth,
        # Rule set offsets
        "drawer_front_gap": offsets.drawer_front_gap,
        "door_gap": offsets.door_gap,
        "shelf_inset": offsets.shelf_inset,
        "drawer_slide_offset": offsets.drawer_slide_offset,
        # Zone counts
        "drawer_count": drawer_count,
        "door_count": door_count,
        "shelf_count": shelf_count,
        "remaining_height": internal_height,
        "column_count": len(pattern.columns) or 1,
    }

    context.update(
        _layout_variables(
            pattern, internal_width, internal_height, proportions or LayoutProportions()
        )
    )

    for key, value in pattern.variables.items():
        context[key.lower()] = value

    return context
