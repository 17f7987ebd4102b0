"""Dimensional impact of joints on the pieces they join."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..defaults import get_joint_by_id
from ..value_objects import EdgeJoints, JointType

logger = logging.getLogger(__name__)

__all__ = ["EdgeExtensions", "joint_extension", "resolve_edge_extensions"]

# Allowed difference between a part's thickness and a joint's required thickness
THICKNESS_MATCH_TOLERANCE = 0.01


@dataclass(frozen=True)
class EdgeExtensions:
    """Extensions to add to a part's length and width, in mm."""

    length: float = 0.0
    width: float = 0.0


def joint_extension(joint: JointType) -> float:
    """How far a joint extends the inserted piece.

    Butt, dowel, cam-lock, pocket-screw and miter joints do not extend
    anything. Dado, rabbet and tongue-groove joints extend the inserted
    piece by their depth less the fit tolerance, never below zero.
    """
    if not joint.extends_inserted_piece:
        return 0.0
    return max(0.0, joint.depth - joint.tolerance)


def resolve_edge_extensions(
    edge_joints: EdgeJoints | None,
    joints: Sequence[JointType],
    *,
    part_name: str = "",
    part_thickness: float | None = None,
) -> EdgeExtensions:
    """Sum per-edge joint extensions into length and width contributions.

    Each edge is resolved independently. A joint on a length edge extends
    the part's width and a joint on a width edge extends its length. Joint
    ids missing from the library contribute nothing.

    Args:
        edge_joints: Joint ids per edge, or None.
        joints: Joint library.
        part_name: Used in diagnostics.
        part_thickness: Resolved part thickness, checked against joints that
            require a specific thickness.

    Returns:
        The summed extensions.
    """
    if edge_joints is None:
        return EdgeExtensions()

    library = tuple(joints)
    length = 0.0
    width = 0.0
    for edge, joint_id in edge_joints.items():
        joint = get_joint_by_id(joint_id, library)
        if joint is None:
            logger.warning(
                f"Joint '{joint_id}' on {edge.label} of part '{part_name}' "
                f"not found in library; ignoring"
            )
            continue
        if (
            joint.required_material_thickness is not None
            and part_thickness is not None
            and abs(joint.required_material_thickness - part_thickness)
            > THICKNESS_MATCH_TOLERANCE
        ):
            logger.warning(
                f"Joint '{joint.id}' on part '{part_name}' expects "
                f"{joint.required_material_thickness}mm material, part is {part_thickness}mm"
            )
        extension = joint_extension(joint)
        if edge.is_length_edge:
            width += extension
        else:
            length += extension
    return EdgeExtensions(length=length, width=width)
