"""Part rule processing: turns a pattern's formulas into cut parts."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..defaults import DEFAULT_JOINTS
from ..entities import CabinetPattern, GlobalSettings, PartRule, RuleSet
from ..value_objects import CutPart, Dimensions, JointType, LayoutProportions, Material
from .context_builder import build_expression_context, normalize_proportions
from .expression import evaluate_expression, round_half_up
from .joint_resolver import resolve_edge_extensions
from .material_resolver import resolve_part_material

logger = logging.getLogger(__name__)

__all__ = ["ZoneHeight", "calculate_parts", "calculate_zone_heights"]


def _calculate_rule(
    rule: PartRule,
    context: Mapping[str, float],
    pattern: CabinetPattern,
    settings: GlobalSettings,
    rule_set: RuleSet | None,
    materials: Sequence[Material],
    material_overrides: Mapping[str, str] | None,
    joints: Sequence[JointType],
) -> CutPart | None:
    resolved = resolve_part_material(
        rule,
        pattern,
        settings,
        rule_set=rule_set,
        materials=materials,
        material_overrides=material_overrides,
    )
    # Rule-scoped copy, the shared context is never mutated
    rule_context = {**context, "part_thickness": resolved.thickness}

    if rule.condition and evaluate_expression(rule.condition, rule_context) == 0:
        logger.debug(f"Skipping part '{rule.part_name}': condition {rule.condition!r} is 0")
        return None

    length = evaluate_expression(rule.length_expression, rule_context)
    width = evaluate_expression(rule.width_expression, rule_context)
    quantity = max(1, int(round_half_up(evaluate_expression(rule.quantity_expression, rule_context))))

    if length <= 0 or width <= 0:
        logger.warning(f"Skipping invalid part: {rule.part_name} (L: {length}, W: {width})")
        return None

    extensions = resolve_edge_extensions(
        rule.joints, joints, part_name=rule.part_name, part_thickness=resolved.thickness
    )
    final_length = int(round_half_up(length + extensions.length))
    final_width = int(round_half_up(width + extensions.width))
    if final_length <= 0 or final_width <= 0:
        logger.warning(
            f"Skipping invalid part: {rule.part_name} (L: {final_length}, W: {final_width} after rounding)"
        )
        return None

    edge_banding = rule.edge_banding
    part = CutPart(
        part_name=rule.part_name,
        length=final_length,
        width=final_width,
        quantity=quantity,
        material_id=resolved.material_id,
        material=rule.material,
        thickness=resolved.thickness,
        grain=rule.grain,
        edge_banding=edge_banding.label() if edge_banding else None,
        edge_banding_details=edge_banding.details() if edge_banding else {},
        optional=rule.is_optional,
    )
    logger.debug(
        f"Part '{part.part_name}': {part.length} x {part.width} x{part.quantity} "
        f"({resolved.thickness}mm from {resolved.source.value})"
    )
    return part


def calculate_parts(
    pattern: CabinetPattern,
    dimensions: Dimensions,
    settings: GlobalSettings,
    variable_overrides: Mapping[str, float] | None = None,
    zone_proportions: Sequence[float] | None = None,
    rule_set: RuleSet | None = None,
    materials: Sequence[Material] | None = None,
    material_overrides: Mapping[str, str] | None = None,
    joints: Sequence[JointType] | None = None,
    *,
    column_proportions: Sequence[float] | None = None,
    column_zone_proportions: Mapping[str, Sequence[float]] | None = None,
) -> list[CutPart]:
    """Calculate the cut parts of one cabinet.

    Rules are processed in declaration order and the output keeps that
    order. For each rule the material thickness is resolved and exposed to
    its formulas as ``part_thickness``; length, width and quantity are then
    evaluated, joint extensions added per edge, and the result rounded to
    whole millimetres.

    A rule whose length or width is 0 or less, before joint extensions or
    after rounding, is dropped with a warning. Quantities are rounded and
    never less than 1. A rule whose condition evaluates to 0 is skipped.
    The function never raises for formula or geometry problems.

    Args:
        pattern: Cabinet pattern holding the part rules.
        dimensions: Outer cabinet dimensions.
        settings: Global defaults.
        variable_overrides: Cabinet-level values merged over the context.
        zone_proportions: Height fractions for a flat zone list.
        rule_set: Optional construction policy.
        materials: Material library used for thickness lookups.
        material_overrides: Cabinet-level material ids keyed by rule id,
            part name or role.
        joints: Joint library used for edge joints.
        column_proportions: Width fractions for a column layout.
        column_zone_proportions: Zone height fractions keyed by column id.

    Returns:
        List of cut parts without cabinet linkage.
    """
    proportions = LayoutProportions(
        zones=tuple(zone_proportions) if zone_proportions is not None else None,
        columns=tuple(column_proportions) if column_proportions is not None else None,
        column_zones={
            key: tuple(values) for key, values in (column_zone_proportions or {}).items()
        },
    )
    context = build_expression_context(
        dimensions, settings, pattern, rule_set, proportions=proportions
    )
    if variable_overrides:
        context.update({key.lower(): value for key, value in variable_overrides.items()})

    material_library = tuple(materials or ())
    joint_library = DEFAULT_JOINTS if joints is None else tuple(joints)

    parts: list[CutPart] = []
    for rule in pattern.part_rules:
        part = _calculate_rule(
            rule,
            context,
            pattern,
            settings,
            rule_set,
            material_library,
            material_overrides,
            joint_library,
        )
        if part is not None:
            parts.append(part)
    return parts


@dataclass(frozen=True)
class ZoneHeight:
    """Height of one zone, for collaborators that draw the layout."""

    id: str
    zone_type: str
    name: str
    height: float


def calculate_zone_heights(
    pattern: CabinetPattern,
    dimensions: Dimensions,
    settings: GlobalSettings,
    rule_set: RuleSet | None = None,
    zone_proportions: Sequence[float] | None = None,
) -> list[ZoneHeight]:
    """Heights of a flat pattern's zones.

    A zone with a height expression is evaluated against the cabinet's
    context; a zone without one takes its proportional share of the
    internal height.
    """
    context = build_expression_context(
        dimensions,
        settings,
        pattern,
        rule_set,
        proportions=LayoutProportions(
            zones=tuple(zone_proportions) if zone_proportions is not None else None
        ),
    )
    fractions = normalize_proportions(zone_proportions, len(pattern.zones))
    heights: list[ZoneHeight] = []
    for index, zone in enumerate(pattern.zones):
        if zone.height_expression == "":
            height = round_half_up(context["internal_height"] * fractions[index])
        else:
            height = evaluate_expression(zone.height_expression, context)
        heights.append(
            ZoneHeight(
                id=zone.id, zone_type=zone.zone_type.value, name=zone.name, height=height
            )
        )
    return heights
