"""Unit tests for part rule processing."""

from __future__ import annotations

import logging

import pytest

from cutlist.domain import (
    CabinetPattern,
    CutPart,
    Dimensions,
    EdgeBanding,
    EdgeJoints,
    GlobalSettings,
    GrainDirection,
    Material,
    MaterialAssignment,
    MaterialRole,
    PartRule,
    PatternMaterials,
    RuleSet,
    RuleSetOffsets,
    Zone,
    ZoneType,
    calculate_parts,
)
from cutlist.domain.services.part_calculator import calculate_zone_heights


def _pattern(*rules: PartRule, **kwargs) -> CabinetPattern:
    return CabinetPattern(id="p", name="Pattern", part_rules=rules, **kwargs)


def _rule(part_name: str, length, width, quantity="1", **kwargs) -> PartRule:
    return PartRule(
        id=part_name.lower(),
        part_name=part_name,
        length_expression=length,
        width_expression=width,
        quantity_expression=quantity,
        **kwargs,
    )


class TestCalculateParts:
    """End-to-end part calculation."""

    def test_lateral_side_panels(
        self, lateral_pattern: CabinetPattern, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        parts = calculate_parts(lateral_pattern, dimensions, settings)
        assert len(parts) == 1
        part = parts[0]
        assert isinstance(part, CutPart)
        assert part.part_name == "Lateral"
        assert part.length == 684
        assert part.width == 554
        assert part.quantity == 2
        assert part.thickness == 18

    def test_output_keeps_rule_order(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Top", "internal_width", "total_depth"),
            _rule("Side", "total_height", "total_depth", "2"),
            _rule("Back", "back_height", "back_width"),
        )
        names = [p.part_name for p in calculate_parts(pattern, dimensions, settings)]
        assert names == ["Top", "Side", "Back"]

    def test_numeric_expressions(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(_rule("Plinth", 564, 100.4, 1))
        [part] = calculate_parts(pattern, dimensions, settings)
        assert (part.length, part.width) == (564, 100)

    def test_does_not_mutate_inputs(
        self, lateral_pattern: CabinetPattern, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        overrides = {"Extra": 5.0}
        first = calculate_parts(lateral_pattern, dimensions, settings, overrides)
        second = calculate_parts(lateral_pattern, dimensions, settings, overrides)
        assert first == second
        assert overrides == {"Extra": 5.0}


class TestDroppedParts:
    """Parts with non-positive dimensions are dropped."""

    def test_negative_length_is_dropped_with_warning(
        self, settings: GlobalSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        pattern = _pattern(
            _rule("Rail", "total_width - 1000", "100"),
            _rule("Side", "total_height", "total_depth"),
        )
        with caplog.at_level(logging.WARNING):
            parts = calculate_parts(pattern, Dimensions(720, 600, 560), settings)
        assert [p.part_name for p in parts] == ["Side"]
        assert "Skipping invalid part: Rail" in caplog.text

    def test_unknown_variable_drops_part(
        self, dimensions: Dimensions, settings: GlobalSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        pattern = _pattern(_rule("Drawer", "drawer_height * 2", "100"))
        with caplog.at_level(logging.WARNING):
            assert calculate_parts(pattern, dimensions, settings) == []
        assert "Unsafe expression detected" in caplog.text

    def test_sub_millimetre_parts_round_to_zero_and_are_dropped(
        self, dimensions: Dimensions, settings: GlobalSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        pattern = _pattern(
            _rule("Sliver", "0.4", "100"),
            _rule("Shim", "100", "0.49"),
            _rule("Ok", "100", "100"),
        )
        with caplog.at_level(logging.WARNING):
            parts = calculate_parts(pattern, dimensions, settings)
        assert [(p.part_name, p.length, p.width) for p in parts] == [("Ok", 100, 100)]
        assert "Skipping invalid part: Sliver" in caplog.text
        assert "Skipping invalid part: Shim" in caplog.text

    def test_half_millimetre_rounds_up_and_is_kept(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        parts = calculate_parts(_pattern(_rule("Veneer", "0.5", "100")), dimensions, settings)
        assert [(p.length, p.width) for p in parts] == [(1, 100)]

    def test_zero_width_is_dropped(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(_rule("Ghost", "100", "0"))
        assert calculate_parts(pattern, dimensions, settings) == []

    def test_joints_do_not_rescue_dropped_part(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Shelf", "0", "100", joints=EdgeJoints(width1="dado-8mm", width2="dado-8mm"))
        )
        assert calculate_parts(pattern, dimensions, settings) == []


class TestQuantity:
    """Quantity rounding and clamping."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [("2", 2), ("2.5", 3), ("2.4", 2), ("0", 1), ("-3", 1), ("drawer_count", 1)],
    )
    def test_quantity(
        self, expression: str, expected: int, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(_rule("Panel", "100", "100", expression))
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.quantity == expected

    def test_quantity_from_zone_count(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Shelf", "internal_width", "internal_depth - shelf_inset", "shelf_count"),
            zones=(Zone("a", ZoneType.SHELF), Zone("b", ZoneType.SHELF), Zone("c", ZoneType.SHELF)),
        )
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.quantity == 3
        assert part.width == 560 - 10 - 20


class TestMaterials:
    """Per-part thickness and part_thickness."""

    def test_part_thickness_variable(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Shelf", "internal_width", "100", material_id="board-25"),
            _rule("Side", "part_thickness * 10", "100"),
        )
        materials = [Material(id="board-25", thickness=25)]
        shelf, side = calculate_parts(pattern, dimensions, settings, materials=materials)
        assert shelf.thickness == 25
        assert shelf.material_id == "board-25"
        assert side.length == 180

    def test_part_thickness_is_rule_scoped(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Back", "part_thickness * 100", "100", role=MaterialRole.BACK),
            _rule("Side", "part_thickness * 100", "100"),
        )
        back, side = calculate_parts(pattern, dimensions, settings)
        assert back.length == 600
        assert side.length == 1800

    def test_instance_override(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(
            _rule("Door", "total_height - door_gap", "total_width - door_gap"),
            materials=PatternMaterials(carcass=MaterialAssignment("board-18", 18)),
        )
        materials = [Material(id="board-18", thickness=18), Material(id="oak-22", thickness=22)]
        [door] = calculate_parts(
            pattern,
            dimensions,
            settings,
            materials=materials,
            material_overrides={"door": "oak-22"},
        )
        assert door.material_id == "oak-22"
        assert door.thickness == 22

    def test_rule_material_label_passes_through(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(_rule("Top", "100", "100", material="Oak veneer"))
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.material == "Oak veneer"


class TestJoints:
    """Joint extensions are added after the drop check."""

    def test_dado_extends_length(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(
            _rule(
                "Shelf",
                "internal_width",
                "300",
                joints=EdgeJoints(width1="dado-8mm", width2="dado-8mm"),
            )
        )
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.length == 564 + 15
        assert part.width == 300

    def test_length_edge_joint_extends_width(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Back", "300", "200", joints=EdgeJoints(length1="rabbet-back-6mm"))
        )
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.length == 300
        assert part.width == 206  # 205.5 rounds half up

    def test_empty_joint_library_ignores_joints(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(_rule("Shelf", "500", "300", joints=EdgeJoints(width1="dado-8mm")))
        [part] = calculate_parts(pattern, dimensions, settings, joints=())
        assert part.length == 500


class TestConditionsAndFlags:
    """Conditional rules, edge banding labels, grain and optional parts."""

    def test_condition_zero_skips_rule(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(
            _rule("Divider", "internal_height", "internal_depth", condition="column_count - 1"),
            _rule("Side", "total_height", "total_depth"),
        )
        assert [p.part_name for p in calculate_parts(pattern, dimensions, settings)] == ["Side"]

    def test_condition_non_zero_keeps_rule(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(_rule("Drawer front", "200", "100", condition="drawer_count"))
        parts = calculate_parts(
            pattern, dimensions, settings, variable_overrides={"drawer_count": 2}
        )
        assert len(parts) == 1

    def test_edge_banding_label(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(
            _rule(
                "Shelf",
                "500",
                "300",
                edge_banding=EdgeBanding(length1=True, width2="abs-white-1"),
            )
        )
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.edge_banding == "L1, W2"
        assert part.edge_banding_details == {"width2": "abs-white-1"}

    def test_no_edge_banding(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(_rule("Shelf", "500", "300", edge_banding=EdgeBanding()))
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.edge_banding is None

    def test_grain_and_optional(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(
            _rule("Door", "500", "300", grain=GrainDirection.LENGTH, is_optional=True)
        )
        [part] = calculate_parts(pattern, dimensions, settings)
        assert part.grain is GrainDirection.LENGTH
        assert part.optional is True


class TestOverridesAndRuleSets:
    """Variable overrides and rule set offsets reach the formulas."""

    def test_variable_override_shadows_builtin(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(_rule("Door", "total_height - door_gap", "100"))
        [part] = calculate_parts(
            pattern, dimensions, settings, variable_overrides={"Door_Gap": 20}
        )
        assert part.length == 700

    def test_rule_set_offsets(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        rule_set = RuleSet(id="r", name="R", offsets=RuleSetOffsets(door_gap=4))
        pattern = _pattern(_rule("Door", "total_height - door_gap", "100"))
        [part] = calculate_parts(pattern, dimensions, settings, rule_set=rule_set)
        assert part.length == 716

    def test_zone_proportions(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(
            _rule("Front", "zone_0_height", "internal_width"),
            zones=(Zone("top", ZoneType.DRAWER), Zone("bottom", ZoneType.DOOR)),
        )
        [part] = calculate_parts(pattern, dimensions, settings, zone_proportions=[1, 3])
        assert part.length == 171


class TestCalculateZoneHeights:
    """Zone heights for a flat pattern."""

    def test_equal_share_without_expressions(
        self, dimensions: Dimensions, settings: GlobalSettings
    ) -> None:
        pattern = _pattern(zones=(Zone("a", ZoneType.DRAWER, "Top"), Zone("b", ZoneType.DOOR)))
        heights = calculate_zone_heights(pattern, dimensions, settings)
        assert [h.height for h in heights] == [342, 342]
        assert heights[0].zone_type == "drawer"
        assert heights[0].name == "Top"

    def test_height_expression(self, dimensions: Dimensions, settings: GlobalSettings) -> None:
        pattern = _pattern(
            zones=(
                Zone("a", ZoneType.DRAWER, height_expression="150"),
                Zone("b", ZoneType.DOOR, height_expression="internal_height - 150"),
            )
        )
        heights = calculate_zone_heights(pattern, dimensions, settings)
        assert [h.height for h in heights] == [150, 534]
