"""Built-in reference data: default settings, rule set and joint library.

Dimensional impact of the joints:
- extends_inserted_piece: the inserted piece (e.g. a shelf) grows into the
  joint by the joint depth, as in a dado where the shelf sits in the groove.
- tolerance: subtracted from that extension for assembly fit and wood
  movement, typically 0.3-1 mm.
"""

from __future__ import annotations

from .entities import GlobalSettings, RuleSet, RuleSetOffsets
from .value_objects import (
    BackPanelMethod,
    DrawerConstruction,
    JointCategory,
    JointType,
    SideConstruction,
)

DEFAULT_GLOBAL_SETTINGS = GlobalSettings(
    material_thickness=18.0,
    back_panel_thickness=6.0,
    back_panel_groove_depth=10.0,
    default_edge_banding=0.5,
    drawer_bottom_inset=50.0,
    units="mm",
)

# Offsets used by the context builder when no rule set is supplied
DEFAULT_OFFSETS = RuleSetOffsets()

DEFAULT_RULE_SET = RuleSet(
    id="default-european",
    name="European standard",
    description="European construction: sides on bottom, overlay back",
    side_construction=SideConstruction.SIDES_ON_BOTTOM,
    back_panel_method=BackPanelMethod.OVERLAY,
    drawer_construction=DrawerConstruction.SIDES_ON_BOTTOM,
    offsets=RuleSetOffsets(
        drawer_front_gap=3.0,
        door_gap=3.0,
        shelf_inset=20.0,
        drawer_slide_offset=12.5,
        back_panel_thickness=3.0,
        back_groove_depth=10.0,
    ),
    is_default=True,
)

DEFAULT_JOINTS: tuple[JointType, ...] = (
    # Butt joints: no dimensional impact
    JointType(
        id="butt-simple",
        name="Butt joint",
        category=JointCategory.BUTT,
    ),
    # Dado joints
    JointType(
        id="dado-6mm",
        name="Dado 6mm",
        category=JointCategory.DADO,
        depth=6.0,
        width=18.0,
        extends_inserted_piece=True,
        tolerance=0.5,
        required_material_thickness=18.0,
    ),
    JointType(
        id="dado-8mm",
        name="Dado 8mm",
        category=JointCategory.DADO,
        depth=8.0,
        extends_inserted_piece=True,
        tolerance=0.5,
    ),
    JointType(
        id="dado-9mm",
        name="Dado 9mm",
        category=JointCategory.DADO,
        depth=9.0,
        width=18.0,
        extends_inserted_piece=True,
        tolerance=0.5,
        required_material_thickness=18.0,
    ),
    JointType(
        id="dado-shallow",
        name="Shallow dado 3mm",
        category=JointCategory.DADO,
        depth=3.0,
        extends_inserted_piece=True,
        tolerance=0.5,
    ),
    # Rabbet joints
    JointType(
        id="rabbet-back-3mm",
        name="Back rabbet 3mm",
        category=JointCategory.RABBET,
        depth=3.0,
        width=10.0,
        extends_inserted_piece=True,
        tolerance=0.5,
    ),
    JointType(
        id="rabbet-back-6mm",
        name="Back rabbet 6mm",
        category=JointCategory.RABBET,
        depth=6.0,
        width=10.0,
        extends_inserted_piece=True,
        tolerance=0.5,
    ),
    JointType(
        id="rabbet-standard",
        name="Standard rabbet",
        category=JointCategory.RABBET,
        depth=9.0,
        width=18.0,
        extends_inserted_piece=True,
        tolerance=0.5,
    ),
    JointType(
        id="tongue-groove-6mm",
        name="Tongue and groove 6mm",
        category=JointCategory.TONGUE_GROOVE,
        depth=6.0,
        width=6.0,
        extends_inserted_piece=True,
        tolerance=0.3,
    ),
    # Hardware joints: drilled after cutting, no cut dimension impact
    JointType(id="dowel", name="Dowel", category=JointCategory.DOWEL),
    JointType(id="cam-lock", name="Cam lock", category=JointCategory.CAM_LOCK),
    JointType(
        id="pocket-screw",
        name="Pocket screw",
        category=JointCategory.POCKET_SCREW,
    ),
    # Miter: outer dimension unchanged, only the cut angle differs
    JointType(id="miter-45", name="Miter 45", category=JointCategory.MITER),
)


def get_joint_by_id(
    joint_id: str, joints: tuple[JointType, ...] = DEFAULT_JOINTS
) -> JointType | None:
    """Look up a joint by id in the given library."""
    return next((j for j in joints if j.id == joint_id), None)


def get_joints_by_category(
    category: JointCategory, joints: tuple[JointType, ...] = DEFAULT_JOINTS
) -> list[JointType]:
    """Return all joints of a category, in library order."""
    return [j for j in joints if j.category == category]
