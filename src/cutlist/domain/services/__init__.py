"""Domain services for dimension resolution.

This package provides the services that turn a parametric pattern into a
cut list:
- Safe expression evaluation
- Expression context construction
- Material and joint resolution
- Part rule processing and cut list generation
"""

from .context_builder import (
    build_expression_context,
    construction_dimensions,
    normalize_proportions,
    variable_name,
)
from .cut_list import (
    CutListGenerator,
    UnknownPatternError,
    attach_cabinet,
    consolidate_parts,
    flatten_project_cut_list,
)
from .expression import (
    ExpressionSyntaxError,
    evaluate_expression,
    round_half_up,
    substitute_variables,
    unresolved_names,
)
from .joint_resolver import EdgeExtensions, joint_extension, resolve_edge_extensions
from .material_resolver import (
    find_material,
    get_material_thickness,
    global_default_thickness,
    resolve_part_material,
)
from .part_calculator import ZoneHeight, calculate_parts, calculate_zone_heights

__all__ = [
    # Expression evaluation
    "ExpressionSyntaxError",
    "evaluate_expression",
    "round_half_up",
    "substitute_variables",
    "unresolved_names",
    # Context
    "build_expression_context",
    "construction_dimensions",
    "normalize_proportions",
    "variable_name",
    # Materials
    "find_material",
    "get_material_thickness",
    "global_default_thickness",
    "resolve_part_material",
    # Joints
    "EdgeExtensions",
    "joint_extension",
    "resolve_edge_extensions",
    # Parts
    "ZoneHeight",
    "calculate_parts",
    "calculate_zone_heights",
    # Cut lists
    "CutListGenerator",
    "UnknownPatternError",
    "attach_cabinet",
    "consolidate_parts",
    "flatten_project_cut_list",
]
