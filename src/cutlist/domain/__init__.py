"""Domain layer - dimension resolution for parametric cabinets."""

from .defaults import (
    DEFAULT_GLOBAL_SETTINGS,
    DEFAULT_JOINTS,
    DEFAULT_RULE_SET,
    get_joint_by_id,
    get_joints_by_category,
)
from .entities import (
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
from .services import CutListGenerator, calculate_parts, evaluate_expression
from .units import format_dimension, parse_dimension
from .value_objects import (
    BackPanelMethod,
    CutPart,
    Dimensions,
    DrawerConstruction,
    Edge,
    EdgeBanding,
    EdgeJoints,
    GrainDirection,
    JointCategory,
    JointType,
    LayoutProportions,
    Material,
    MaterialRole,
    MaterialSource,
    MaterialType,
    ResolvedMaterial,
    SideConstruction,
    ZoneType,
)

__all__ = [
    "BackPanelMethod",
    "CabinetInstance",
    "CabinetPattern",
    "Column",
    "CutListGenerator",
    "CutPart",
    "DEFAULT_GLOBAL_SETTINGS",
    "DEFAULT_JOINTS",
    "DEFAULT_RULE_SET",
    "Dimensions",
    "DrawerConstruction",
    "Edge",
    "EdgeBanding",
    "EdgeJoints",
    "GlobalSettings",
    "GrainDirection",
    "JointCategory",
    "JointType",
    "LayoutProportions",
    "Material",
    "MaterialAssignment",
    "MaterialRole",
    "MaterialSource",
    "MaterialType",
    "PartRule",
    "PatternMaterials",
    "Project",
    "ResolvedMaterial",
    "RuleSet",
    "RuleSetEdgeBanding",
    "RuleSetMaterials",
    "RuleSetOffsets",
    "SideConstruction",
    "Zone",
    "ZoneType",
    "calculate_parts",
    "evaluate_expression",
    "format_dimension",
    "get_joint_by_id",
    "get_joints_by_category",
    "parse_dimension",
]
