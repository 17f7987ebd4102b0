"""Pydantic configuration schema models for cut list projects.

This module defines the configuration schema for JSON-based project files:
the libraries (materials, joints, rule sets, patterns) and the cabinets to
calculate. It uses Pydantic v2 for validation and serialization.

Enums are reused from the domain layer to ensure consistency and avoid
duplication.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cutlist.domain.units import parse_dimension
from cutlist.domain.value_objects import (
    BackPanelMethod,
    DrawerConstruction,
    GrainDirection,
    JointCategory,
    MaterialRole,
    MaterialType,
    SideConstruction,
    ZoneType,
)

# Supported schema versions for configuration files
# Version 1.0: Initial schema with patterns, rule sets and cabinet instances
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

# A formula in the arithmetic expression language, or a plain number
Formula = str | float


class SettingsConfig(BaseModel):
    """Global defaults applied when a pattern declares nothing more specific.

    Attributes:
        material_thickness: Default carcass thickness in mm.
        back_panel_thickness: Default back panel thickness in mm.
        back_panel_groove_depth: Default back panel groove depth in mm.
        default_edge_banding: Edge banding thickness in mm.
        drawer_bottom_inset: Drawer bottom inset in mm.
        units: Display units for formatted output.
        default_material_id: Library id of the default board.
    """

    model_config = ConfigDict(extra="forbid")

    material_thickness: float = Field(default=18.0, gt=0)
    back_panel_thickness: float = Field(default=6.0, gt=0)
    back_panel_groove_depth: float = Field(default=10.0, ge=0)
    default_edge_banding: float = Field(default=0.5, ge=0)
    drawer_bottom_inset: float = Field(default=50.0, ge=0)
    units: Literal["mm", "inches"] = "mm"
    default_material_id: str | None = None


class MaterialLibraryConfig(BaseModel):
    """A material library entry."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    thickness: float = Field(..., gt=0)
    type: MaterialType = MaterialType.BOARD
    compatible_edge_banding_ids: list[str] = Field(default_factory=list)


class JointConfig(BaseModel):
    """A joint library entry.

    Attributes:
        id: Library identifier referenced by part rules.
        category: Joint category.
        depth: Depth the inserted piece sits in the joint, in mm.
        extends_inserted_piece: Whether the inserted piece grows by the depth.
        tolerance: Fit clearance subtracted from the extension, in mm.
        width: Groove width in mm (optional).
        required_material_thickness: Thickness the joint was cut for (optional).
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    category: JointCategory
    depth: float = Field(default=0.0, ge=0)
    width: float | None = Field(default=None, gt=0)
    extends_inserted_piece: bool = False
    tolerance: float = Field(default=0.0, ge=0)
    required_material_thickness: float | None = Field(default=None, gt=0)


class OffsetsConfig(BaseModel):
    """Construction offsets of a rule set, in mm."""

    model_config = ConfigDict(extra="forbid")

    drawer_front_gap: float = Field(default=3.0, ge=0)
    door_gap: float = Field(default=3.0, ge=0)
    shelf_inset: float = Field(default=20.0, ge=0)
    drawer_slide_offset: float = Field(default=12.5, ge=0)
    back_panel_thickness: float = Field(default=3.0, ge=0)
    back_groove_depth: float = Field(default=10.0, ge=0)


class RuleSetMaterialsConfig(BaseModel):
    """Per-role default material ids of a rule set."""

    model_config = ConfigDict(extra="forbid")

    carcass_material_id: str | None = None
    front_material_id: str | None = None
    back_material_id: str | None = None
    drawer_material_id: str | None = None
    shelf_material_id: str | None = None


class RuleSetEdgeBandingConfig(BaseModel):
    """Edge sets that receive banding, per part category."""

    model_config = ConfigDict(extra="forbid")

    carcass_edges: list[str] = Field(default_factory=lambda: ["front"])
    shelf_edges: list[str] = Field(default_factory=lambda: ["front"])
    door_edges: list[str] = Field(default_factory=lambda: ["all"])
    drawer_front_edges: list[str] = Field(default_factory=lambda: ["all"])


class RuleSetConfig(BaseModel):
    """A named construction policy."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    side_construction: SideConstruction = SideConstruction.SIDES_ON_BOTTOM
    back_panel_method: BackPanelMethod = BackPanelMethod.OVERLAY
    drawer_construction: DrawerConstruction = DrawerConstruction.SIDES_ON_BOTTOM
    offsets: OffsetsConfig = Field(default_factory=OffsetsConfig)
    materials: RuleSetMaterialsConfig = Field(default_factory=RuleSetMaterialsConfig)
    edge_banding: RuleSetEdgeBandingConfig = Field(default_factory=RuleSetEdgeBandingConfig)
    is_default: bool = False


class DimensionsConfig(BaseModel):
    """Outer cabinet dimensions.

    Values are millimetres and may be given as numbers or strings such as
    ``"600mm"`` or ``'24"'``.
    """

    model_config = ConfigDict(extra="forbid")

    height: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)

    @field_validator("height", "width", "depth", mode="before")
    @classmethod
    def parse_dimension_strings(cls, v: Any) -> Any:
        """Accept unit-suffixed strings."""
        if isinstance(v, str):
            return parse_dimension(v)
        return v


class ZoneConfig(BaseModel):
    """A zone within a column or a flat pattern."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    type: ZoneType
    name: str = ""
    height: Formula = ""


class ColumnConfig(BaseModel):
    """A column holding a vertical stack of zones."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    width_percentage: float | None = Field(default=None, ge=0, le=100)
    zones: list[ZoneConfig] = Field(default_factory=list)


class MaterialAssignmentConfig(BaseModel):
    """A pattern's material for one role, with explicit thickness."""

    model_config = ConfigDict(extra="forbid")

    material_id: str = Field(..., min_length=1)
    thickness: float = Field(..., gt=0)


class PatternMaterialsConfig(BaseModel):
    """Per-role material assignments of a pattern."""

    model_config = ConfigDict(extra="forbid")

    carcass: MaterialAssignmentConfig | None = None
    back: MaterialAssignmentConfig | None = None
    front: MaterialAssignmentConfig | None = None
    shelf: MaterialAssignmentConfig | None = None
    edge_banding: MaterialAssignmentConfig | None = None


class EdgeBandingConfig(BaseModel):
    """Per-edge banding flags; a string names the banding to use."""

    model_config = ConfigDict(extra="forbid")

    length1: bool | str = False
    length2: bool | str = False
    width1: bool | str = False
    width2: bool | str = False


class EdgeJointsConfig(BaseModel):
    """Joint library ids per edge."""

    model_config = ConfigDict(extra="forbid")

    length1: str | None = None
    length2: str | None = None
    width1: str | None = None
    width2: str | None = None


class PartRuleConfig(BaseModel):
    """One part rule of a pattern.

    Attributes:
        id: Rule identifier, unique within the pattern.
        name: Part name shown in the cut list.
        length: Length formula.
        width: Width formula.
        quantity: Quantity formula.
        material_id: Library material for this part (optional).
        material: Display material label (optional).
        grain: Grain direction constraint (optional).
        edge_banding: Per-edge banding flags (optional).
        joints: Per-edge joint ids (optional).
        role: Functional role used for material defaults (optional).
        condition: Formula; the part is skipped when it evaluates to 0.
        optional: Marks the part as optional in the output.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    length: Formula
    width: Formula
    quantity: Formula = "1"
    material_id: str | None = None
    material: str | None = None
    grain: GrainDirection | None = None
    edge_banding: EdgeBandingConfig | None = None
    joints: EdgeJointsConfig | None = None
    role: MaterialRole | None = None
    condition: str | None = None
    optional: bool = False


class PatternConfig(BaseModel):
    """A parametric cabinet pattern."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    category: str = "custom"
    default_dimensions: DimensionsConfig | None = None
    variables: dict[str, float] = Field(default_factory=dict)
    materials: PatternMaterialsConfig | None = None
    zones: list[ZoneConfig] = Field(default_factory=list)
    columns: list[ColumnConfig] = Field(default_factory=list)
    column_proportions: list[float] | None = None
    parts: list[PartRuleConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_rule_ids(self) -> "PatternConfig":
        """Ensure part rule ids are unique within the pattern."""
        seen: set[str] = set()
        for rule in self.parts:
            if rule.id in seen:
                raise ValueError(f"Duplicate part rule id '{rule.id}' in pattern '{self.id}'")
            seen.add(rule.id)
        return self


class CabinetInstanceConfig(BaseModel):
    """A cabinet placed in the project.

    Attributes:
        id: Cabinet identifier.
        name: Display name used as the cut list label.
        pattern: Id of the pattern the cabinet is built from.
        dimensions: Outer dimensions; the pattern defaults apply when omitted.
        variables: Values merged over the expression context.
        zone_proportions: Height fractions for a flat zone list.
        column_proportions: Width fractions for a column layout.
        column_zone_proportions: Zone height fractions keyed by column id.
        material_overrides: Material ids keyed by rule id, part name or role.
        rule_set: Rule set id; the project default applies when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    pattern: str = Field(..., min_length=1)
    dimensions: DimensionsConfig | None = None
    variables: dict[str, float] = Field(default_factory=dict)
    zone_proportions: list[float] | None = None
    column_proportions: list[float] | None = None
    column_zone_proportions: dict[str, list[float]] = Field(default_factory=dict)
    material_overrides: dict[str, str] = Field(default_factory=dict)
    rule_set: str | None = None


class OutputConfig(BaseModel):
    """Output configuration.

    Attributes:
        format: Default output format for ``cutlist generate``.
        consolidate: Merge identical parts across cabinets.
        group_by_material: Sort CSV rows by material.
    """

    model_config = ConfigDict(extra="forbid")

    format: Literal["table", "csv", "csv-generic", "json"] = "table"
    consolidate: bool = False
    group_by_material: bool = False


class ProjectConfiguration(BaseModel):
    """Root configuration model for cut list projects.

    Omitted ``materials`` give an empty material library, omitted ``joints``
    the built-in joint library and omitted ``rule_sets`` the built-in
    European rule set. An explicit empty list means none.

    Example:
        >>> config = ProjectConfiguration(schema_version="1.0", name="Kitchen")
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    name: str = "Untitled project"
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    materials: list[MaterialLibraryConfig] | None = None
    joints: list[JointConfig] | None = None
    rule_sets: list[RuleSetConfig] | None = None
    patterns: list[PatternConfig] = Field(default_factory=list)
    cabinets: list[CabinetInstanceConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
