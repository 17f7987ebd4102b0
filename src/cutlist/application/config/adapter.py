"""Adapter to convert a ProjectConfiguration into domain objects.

The pydantic models describe the file format; the engine works on the
frozen domain entities. This module is the only place that knows both.
"""

from cutlist.application.config.schema import (
    CabinetInstanceConfig,
    ColumnConfig,
    DimensionsConfig,
    EdgeBandingConfig,
    EdgeJointsConfig,
    JointConfig,
    MaterialAssignmentConfig,
    MaterialLibraryConfig,
    PartRuleConfig,
    PatternConfig,
    PatternMaterialsConfig,
    ProjectConfiguration,
    RuleSetConfig,
    SettingsConfig,
    ZoneConfig,
)
from cutlist.domain.defaults import DEFAULT_JOINTS, DEFAULT_RULE_SET
from cutlist.domain.entities import (
    CabinetInstance,
    CabinetPattern,
    Column,
    GlobalSettings,
    MaterialAssignment,
    PartRule,
    PatternMaterials,
    Project,
    RuleSet,
    RuleSetEdgeBanding,
    RuleSetMaterials,
    RuleSetOffsets,
    Zone,
)
from cutlist.domain.value_objects import (
    Dimensions,
    EdgeBanding,
    EdgeJoints,
    JointType,
    Material,
)


def config_to_settings(config: SettingsConfig) -> GlobalSettings:
    return GlobalSettings(**config.model_dump())


def config_to_material(config: MaterialLibraryConfig) -> Material:
    return Material(
        id=config.id,
        name=config.name,
        thickness=config.thickness,
        material_type=config.type,
        compatible_edge_banding_ids=tuple(config.compatible_edge_banding_ids),
    )


def config_to_joint(config: JointConfig) -> JointType:
    return JointType(
        id=config.id,
        name=config.name,
        category=config.category,
        depth=config.depth,
        width=config.width,
        extends_inserted_piece=config.extends_inserted_piece,
        tolerance=config.tolerance,
        required_material_thickness=config.required_material_thickness,
    )


def config_to_rule_set(config: RuleSetConfig) -> RuleSet:
    edges = config.edge_banding
    return RuleSet(
        id=config.id,
        name=config.name,
        description=config.description,
        side_construction=config.side_construction,
        back_panel_method=config.back_panel_method,
        drawer_construction=config.drawer_construction,
        offsets=RuleSetOffsets(**config.offsets.model_dump()),
        materials=RuleSetMaterials(**config.materials.model_dump()),
        edge_banding=RuleSetEdgeBanding(
            carcass_edges=tuple(edges.carcass_edges),
            shelf_edges=tuple(edges.shelf_edges),
            door_edges=tuple(edges.door_edges),
            drawer_front_edges=tuple(edges.drawer_front_edges),
        ),
        is_default=config.is_default,
    )


def config_to_dimensions(config: DimensionsConfig | None) -> Dimensions | None:
    if config is None:
        return None
    return Dimensions(height=config.height, width=config.width, depth=config.depth)


def _zone(config: ZoneConfig) -> Zone:
    return Zone(
        id=config.id,
        zone_type=config.type,
        name=config.name,
        height_expression=config.height,
    )


def _column(config: ColumnConfig) -> Column:
    return Column(
        id=config.id,
        name=config.name,
        width_percentage=config.width_percentage,
        zones=tuple(_zone(z) for z in config.zones),
    )


def _assignment(config: MaterialAssignmentConfig | None) -> MaterialAssignment | None:
    if config is None:
        return None
    return MaterialAssignment(material_id=config.material_id, thickness=config.thickness)


def _pattern_materials(config: PatternMaterialsConfig | None) -> PatternMaterials | None:
    if config is None:
        return None
    return PatternMaterials(
        carcass=_assignment(config.carcass),
        back=_assignment(config.back),
        front=_assignment(config.front),
        shelf=_assignment(config.shelf),
        edge_banding=_assignment(config.edge_banding),
    )


def _edge_banding(config: EdgeBandingConfig | None) -> EdgeBanding | None:
    if config is None:
        return None
    return EdgeBanding(**config.model_dump())


def _edge_joints(config: EdgeJointsConfig | None) -> EdgeJoints | None:
    if config is None:
        return None
    return EdgeJoints(**config.model_dump())


def config_to_part_rule(config: PartRuleConfig) -> PartRule:
    return PartRule(
        id=config.id,
        part_name=config.name,
        length_expression=config.length,
        width_expression=config.width,
        quantity_expression=config.quantity,
        material_id=config.material_id,
        material=config.material,
        grain=config.grain,
        edge_banding=_edge_banding(config.edge_banding),
        joints=_edge_joints(config.joints),
        role=config.role,
        condition=config.condition,
        is_optional=config.optional,
    )


def config_to_pattern(config: PatternConfig) -> CabinetPattern:
    """Convert a pattern, deriving column proportions from width percentages.

    Explicit ``column_proportions`` win; otherwise columns that all declare a
    ``width_percentage`` contribute those as proportions.
    """
    column_proportions = config.column_proportions
    if column_proportions is None and config.columns:
        percentages = [c.width_percentage for c in config.columns]
        if all(p is not None for p in percentages):
            column_proportions = [p / 100 for p in percentages]

    return CabinetPattern(
        id=config.id,
        name=config.name,
        description=config.description,
        category=config.category,
        part_rules=tuple(config_to_part_rule(r) for r in config.parts),
        zones=tuple(_zone(z) for z in config.zones),
        columns=tuple(_column(c) for c in config.columns),
        column_proportions=tuple(column_proportions) if column_proportions else None,
        materials=_pattern_materials(config.materials),
        variables=dict(config.variables),
        default_dimensions=config_to_dimensions(config.default_dimensions),
    )


def config_to_cabinet(config: CabinetInstanceConfig) -> CabinetInstance:
    return CabinetInstance(
        id=config.id,
        name=config.name or config.id,
        pattern_id=config.pattern,
        dimensions=config_to_dimensions(config.dimensions),
        variable_overrides=dict(config.variables),
        zone_proportions=(
            tuple(config.zone_proportions) if config.zone_proportions is not None else None
        ),
        column_proportions=(
            tuple(config.column_proportions) if config.column_proportions is not None else None
        ),
        column_zone_proportions={
            key: tuple(values) for key, values in config.column_zone_proportions.items()
        },
        material_overrides=dict(config.material_overrides),
        rule_set_id=config.rule_set,
    )


def config_to_project(config: ProjectConfiguration) -> Project:
    """Convert a validated configuration into a domain Project.

    Omitted libraries fall back to the built-in joint library and the
    built-in rule set; an omitted material library is empty.

    Example:
        >>> config = load_config(Path("kitchen.json"))
        >>> project = config_to_project(config)
        >>> output = GenerateCutListCommand().execute(project)
    """
    joints = (
        DEFAULT_JOINTS
        if config.joints is None
        else tuple(config_to_joint(j) for j in config.joints)
    )
    rule_sets = (
        (DEFAULT_RULE_SET,)
        if config.rule_sets is None
        else tuple(config_to_rule_set(r) for r in config.rule_sets)
    )
    return Project(
        name=config.name,
        settings=config_to_settings(config.settings),
        materials=tuple(config_to_material(m) for m in config.materials or ()),
        joints=joints,
        rule_sets=rule_sets,
        patterns=tuple(config_to_pattern(p) for p in config.patterns),
        cabinets=tuple(config_to_cabinet(c) for c in config.cabinets),
    )
