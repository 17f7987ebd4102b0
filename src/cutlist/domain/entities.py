"""Configuration entities consumed by the dimension-resolution engine.

Patterns, rule sets and global settings are long-lived reference data owned
by the caller's libraries. The engine only reads them; every collection is a
tuple or a read-only mapping so that nothing is written through a shared
reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .value_objects import (
    BackPanelMethod,
    Dimensions,
    DrawerConstruction,
    EdgeBanding,
    EdgeJoints,
    GrainDirection,
    Material,
    MaterialRole,
    JointType,
    SideConstruction,
    ZoneType,
)


@dataclass(frozen=True)
class GlobalSettings:
    """Application-wide defaults used when a pattern declares nothing.

    Attributes:
        material_thickness: Default carcass thickness in mm.
        back_panel_thickness: Default back panel thickness in mm.
        back_panel_groove_depth: Default depth of the back panel groove in mm.
        default_edge_banding: Edge banding thickness in mm.
        drawer_bottom_inset: Drawer bottom inset in mm.
        units: Display units ("mm" or "inches").
        default_material_id: Library id of the default board.
    """

    material_thickness: float = 18.0
    back_panel_thickness: float = 6.0
    back_panel_groove_depth: float = 10.0
    default_edge_banding: float = 0.5
    drawer_bottom_inset: float = 50.0
    units: str = "mm"
    default_material_id: str | None = None

    def __post_init__(self) -> None:
        if self.material_thickness <= 0:
            raise ValueError("Material thickness must be positive")
        if self.back_panel_thickness <= 0:
            raise ValueError("Back panel thickness must be positive")
        if self.back_panel_groove_depth < 0:
            raise ValueError("Back panel groove depth cannot be negative")
        if self.default_edge_banding < 0:
            raise ValueError("Edge banding thickness cannot be negative")
        if self.units not in ("mm", "inches"):
            raise ValueError("Units must be 'mm' or 'inches'")


@dataclass(frozen=True)
class RuleSetOffsets:
    """Standard construction offsets of a rule set, in mm."""

    drawer_front_gap: float = 3.0
    door_gap: float = 3.0
    shelf_inset: float = 20.0
    drawer_slide_offset: float = 12.5
    back_panel_thickness: float = 3.0
    back_groove_depth: float = 10.0

    def __post_init__(self) -> None:
        for name in (
            "drawer_front_gap",
            "door_gap",
            "shelf_inset",
            "drawer_slide_offset",
            "back_panel_thickness",
            "back_groove_depth",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"Rule set offset '{name}' cannot be negative")


@dataclass(frozen=True)
class RuleSetMaterials:
    """Per-role default material ids of a rule set."""

    carcass_material_id: str | None = None
    front_material_id: str | None = None
    back_material_id: str | None = None
    drawer_material_id: str | None = None
    shelf_material_id: str | None = None

    def for_role(self, role: MaterialRole) -> str | None:
        """Default material id for a role, falling back to the carcass material."""
        specific = {
            MaterialRole.FRONT: self.front_material_id,
            MaterialRole.BACK: self.back_material_id,
            MaterialRole.DRAWER: self.drawer_material_id,
            MaterialRole.SHELF: self.shelf_material_id,
        }.get(role)
        if role in (MaterialRole.BACK, MaterialRole.EDGE_BANDING):
            return specific
        return specific or self.carcass_material_id


@dataclass(frozen=True)
class RuleSetEdgeBanding:
    """Edge sets that receive banding, per part category."""

    carcass_edges: tuple[str, ...] = ("front",)
    shelf_edges: tuple[str, ...] = ("front",)
    door_edges: tuple[str, ...] = ("all",)
    drawer_front_edges: tuple[str, ...] = ("all",)


@dataclass(frozen=True)
class RuleSet:
    """A named construction policy.

    Exactly one value is held per enumerated construction field and all
    offsets are non-negative.
    """

    id: str
    name: str
    side_construction: SideConstruction = SideConstruction.SIDES_ON_BOTTOM
    back_panel_method: BackPanelMethod = BackPanelMethod.OVERLAY
    drawer_construction: DrawerConstruction = DrawerConstruction.SIDES_ON_BOTTOM
    offsets: RuleSetOffsets = field(default_factory=RuleSetOffsets)
    materials: RuleSetMaterials = field(default_factory=RuleSetMaterials)
    edge_banding: RuleSetEdgeBanding = field(default_factory=RuleSetEdgeBanding)
    description: str = ""
    is_default: bool = False


@dataclass(frozen=True)
class Zone:
    """A functional slot within a column or a flat pattern."""

    id: str
    zone_type: ZoneType
    name: str = ""
    height_expression: str | float = ""

    @property
    def counts_as_shelf(self) -> bool:
        return self.zone_type in (ZoneType.SHELF, ZoneType.FIXED_SHELF)


@dataclass(frozen=True)
class Column:
    """A horizontal slice of a cabinet holding a vertical stack of zones."""

    id: str
    name: str = ""
    zones: tuple[Zone, ...] = ()
    width_percentage: float | None = None


@dataclass(frozen=True)
class MaterialAssignment:
    """A pattern's material choice for one role, with explicit thickness."""

    material_id: str
    thickness: float

    def __post_init__(self) -> None:
        if self.thickness <= 0:
            raise ValueError("Assigned material thickness must be positive")


@dataclass(frozen=True)
class PatternMaterials:
    """Per-role material assignments declared by a pattern."""

    carcass: MaterialAssignment | None = None
    back: MaterialAssignment | None = None
    front: MaterialAssignment | None = None
    shelf: MaterialAssignment | None = None
    edge_banding: MaterialAssignment | None = None

    def for_role(self, role: MaterialRole) -> MaterialAssignment | None:
        """Assignment for a role.

        Front, shelf and drawer parts are cut from the carcass board unless
        the pattern assigns them their own material.
        """
        if role is MaterialRole.BACK:
            return self.back
        if role is MaterialRole.EDGE_BANDING:
            return self.edge_banding
        specific = {
            MaterialRole.FRONT: self.front,
            MaterialRole.SHELF: self.shelf,
        }.get(role)
        return specific or self.carcass


@dataclass(frozen=True)
class PartRule:
    """Symbolic description of one part in a pattern.

    The three expressions are written in the arithmetic expression language
    against the cabinet's expression context.
    """

    id: str
    part_name: str
    length_expression: str | float
    width_expression: str | float
    quantity_expression: str | float = "1"
    material_id: str | None = None
    material: str | None = None
    grain: GrainDirection | None = None
    edge_banding: EdgeBanding | None = None
    joints: EdgeJoints | None = None
    role: MaterialRole | None = None
    condition: str | None = None
    is_optional: bool = False


@dataclass(frozen=True)
class CabinetPattern:
    """A reusable parametric cabinet template.

    When ``columns`` is non-empty it drives the layout; the flat ``zones``
    list is kept for patterns that predate columns.
    """

    id: str
    name: str
    part_rules: tuple[PartRule, ...] = ()
    zones: tuple[Zone, ...] = ()
    columns: tuple[Column, ...] = ()
    column_proportions: tuple[float, ...] | None = None
    materials: PatternMaterials | None = None
    variables: Mapping[str, float] = field(default_factory=dict)
    default_dimensions: Dimensions | None = None
    description: str = ""
    category: str = "custom"

    @property
    def uses_columns(self) -> bool:
        return len(self.columns) > 0

    def layout_zones(self) -> list[Zone]:
        """All zones that take part in the layout, column zones first."""
        if self.uses_columns:
            return [zone for column in self.columns for zone in column.zones]
        return list(self.zones)


@dataclass(frozen=True)
class CabinetInstance:
    """One cabinet placed in a project, built from a pattern."""

    id: str
    name: str
    pattern_id: str
    dimensions: Dimensions | None = None
    variable_overrides: Mapping[str, float] = field(default_factory=dict)
    zone_proportions: tuple[float, ...] | None = None
    column_proportions: tuple[float, ...] | None = None
    column_zone_proportions: Mapping[str, tuple[float, ...]] = field(default_factory=dict)
    material_overrides: Mapping[str, str] = field(default_factory=dict)
    rule_set_id: str | None = None


@dataclass(frozen=True)
class Project:
    """A set of cabinets together with the libraries they are calculated against."""

    name: str
    cabinets: tuple[CabinetInstance, ...] = ()
    patterns: tuple[CabinetPattern, ...] = ()
    materials: tuple[Material, ...] = ()
    joints: tuple[JointType, ...] = ()
    rule_sets: tuple[RuleSet, ...] = ()
    settings: GlobalSettings = field(default_factory=GlobalSettings)

    def find_pattern(self, pattern_id: str) -> CabinetPattern | None:
        return next((p for p in self.patterns if p.id == pattern_id), None)

    def find_rule_set(self, rule_set_id: str | None) -> RuleSet | None:
        """Look up a rule set by id; with no id, return the project default.

        The default is the rule set flagged ``is_default``, else the first one,
        else None when the project declares no rule sets.
        """
        if rule_set_id is not None:
            return next((r for r in self.rule_sets if r.id == rule_set_id), None)
        return next(
            (r for r in self.rule_sets if r.is_default),
            self.rule_sets[0] if self.rule_sets else None,
        )
