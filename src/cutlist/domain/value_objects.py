"""Value objects for the cut list domain.

Immutable data types shared by the dimension-resolution services. All
dimensions are in millimetres.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping


class MaterialType(str, Enum):
    """Role-agnostic type tag for library materials."""

    BOARD = "board"
    EDGE_BANDING = "edge-banding"
    BACK_PANEL = "back-panel"
    COUNTERTOP = "countertop"
    MDF = "mdf"
    MELAMINE = "melamine"
    PLYWOOD = "plywood"
    HDF = "hdf"
    SOLID_WOOD = "solid-wood"
    OTHER = "other"


class MaterialRole(str, Enum):
    """Functional role a part plays in the carcass.

    The role selects which pattern assignment, rule set default and global
    default thickness apply to a part that does not name its own material.
    """

    CARCASS = "carcass"
    BACK = "back"
    FRONT = "front"
    SHELF = "shelf"
    DRAWER = "drawer"
    EDGE_BANDING = "edge_banding"


class MaterialSource(str, Enum):
    """Which precedence level produced a part's material."""

    INSTANCE_OVERRIDE = "instance_override"
    RULE = "rule"
    PATTERN = "pattern"
    GLOBAL = "global"


class JointCategory(str, Enum):
    """Woodworking joint categories.

    Attributes:
        BUTT: Pieces meet end to end, no dimensional change.
        DADO: Groove cut across a panel that receives another panel.
        RABBET: L-shaped cut along a panel edge.
        TONGUE_GROOVE: Tongue on one piece sits in a groove on the other.
        DOWEL: Pins drilled after cutting.
        CAM_LOCK: Knock-down connector hardware.
        POCKET_SCREW: Angled screw holes.
        MITER: Angled corner cut, outer dimension unchanged.
    """

    BUTT = "butt"
    DADO = "dado"
    RABBET = "rabbet"
    TONGUE_GROOVE = "tongue-groove"
    DOWEL = "dowel"
    CAM_LOCK = "cam-lock"
    POCKET_SCREW = "pocket-screw"
    MITER = "miter"


class GrainDirection(str, Enum):
    """Grain direction constraint for a cut part."""

    LENGTH = "length"
    WIDTH = "width"
    NONE = "none"


class ZoneType(str, Enum):
    """Functional slot types inside a column."""

    DRAWER = "drawer"
    DOOR = "door"
    SHELF = "shelf"
    OPENING = "opening"
    FIXED_SHELF = "fixed-shelf"
    APPLIANCE_SPACE = "appliance-space"
    DIVIDER = "divider"


class SideConstruction(str, Enum):
    """How the side panels meet the top and bottom panels.

    Attributes:
        SIDES_ON_BOTTOM: Sides run full height, bottom and top fit between them.
        BOTTOM_BETWEEN_SIDES: Bottom runs full width, sides sit on it.
        ALL_BETWEEN: Frame construction, every panel fits between the others.
    """

    SIDES_ON_BOTTOM = "sides-on-bottom"
    BOTTOM_BETWEEN_SIDES = "bottom-between-sides"
    ALL_BETWEEN = "all-between"


class BackPanelMethod(str, Enum):
    """How the back panel is fitted to the carcass."""

    OVERLAY = "overlay"
    INSET_GROOVE = "inset-groove"
    INSET_REBATE = "inset-rebate"

    @property
    def is_inset(self) -> bool:
        """True for methods that sink the back into the carcass."""
        return self is not BackPanelMethod.OVERLAY


class DrawerConstruction(str, Enum):
    """Drawer box construction method."""

    SIDES_ON_BOTTOM = "sides-on-bottom"
    BOTTOM_IN_GROOVE = "bottom-in-groove"


class Edge(str, Enum):
    """The four edges of a rectangular part.

    Length edges run along the part's length, width edges along its width.
    """

    LENGTH_1 = "length1"
    LENGTH_2 = "length2"
    WIDTH_1 = "width1"
    WIDTH_2 = "width2"

    @property
    def label(self) -> str:
        """Short label used in cut lists (L1, L2, W1, W2)."""
        return f"{self.value[0].upper()}{self.value[-1]}"

    @property
    def is_length_edge(self) -> bool:
        return self in (Edge.LENGTH_1, Edge.LENGTH_2)


@dataclass(frozen=True)
class Dimensions:
    """Immutable outer cabinet dimensions in millimetres."""

    height: float
    width: float
    depth: float

    def __post_init__(self) -> None:
        if self.height <= 0 or self.width <= 0 or self.depth <= 0:
            raise ValueError("All dimensions must be positive")


@dataclass(frozen=True)
class Material:
    """A sheet or banding material from the material library.

    Attributes:
        id: Library identifier.
        thickness: Thickness in millimetres.
        name: Display name.
        material_type: Role-agnostic type tag.
        compatible_edge_banding_ids: Edge banding materials that match this board.
    """

    id: str
    thickness: float
    name: str = ""
    material_type: MaterialType = MaterialType.BOARD
    compatible_edge_banding_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Material id must not be empty")
        if self.thickness <= 0:
            raise ValueError("Material thickness must be positive")


@dataclass(frozen=True)
class JointType:
    """A joint definition from the joint library.

    Attributes:
        id: Library identifier.
        category: Joint category.
        depth: Nominal depth the inserted piece sits in the joint, in mm.
        extends_inserted_piece: Whether the inserted piece grows into the joint.
        tolerance: Clearance subtracted from the depth for assembly fit, in mm.
        name: Display name.
        width: Optional groove width in mm.
        required_material_thickness: Thickness the joint was cut for, if any.
    """

    id: str
    category: JointCategory
    depth: float = 0.0
    extends_inserted_piece: bool = False
    tolerance: float = 0.0
    name: str = ""
    width: float | None = None
    required_material_thickness: float | None = None

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError("Joint depth cannot be negative")
        if self.tolerance < 0:
            raise ValueError("Joint tolerance cannot be negative")
        if self.width is not None and self.width <= 0:
            raise ValueError("Joint width must be positive")


@dataclass(frozen=True)
class EdgeBanding:
    """Per-edge banding flags of a part rule.

    A flag is either a boolean or a string naming the banding to apply;
    any truthy value marks the edge as banded.
    """

    length1: bool | str = False
    length2: bool | str = False
    width1: bool | str = False
    width2: bool | str = False

    def flag(self, edge: Edge) -> bool | str:
        return getattr(self, edge.value)

    def label(self) -> str | None:
        """Build a short label such as "L1, W2", or None when no edge is banded."""
        labels = [edge.label for edge in Edge if self.flag(edge)]
        return ", ".join(labels) or None

    def details(self) -> dict[str, str]:
        """Return the string-valued flags keyed by edge name."""
        return {
            edge.value: value
            for edge in Edge
            if isinstance(value := self.flag(edge), str) and value
        }


@dataclass(frozen=True)
class EdgeJoints:
    """Joint library ids applied at each edge of a part.

    A joint on a length edge sinks that edge into the mating panel and
    so extends the part's width; a joint on a width edge extends its length.
    """

    length1: str | None = None
    length2: str | None = None
    width1: str | None = None
    width2: str | None = None

    def items(self) -> list[tuple[Edge, str]]:
        """Return (edge, joint id) pairs for the edges that carry a joint."""
        return [
            (edge, joint_id)
            for edge in Edge
            if (joint_id := getattr(self, edge.value))
        ]


@dataclass(frozen=True)
class LayoutProportions:
    """Caller-supplied layout proportions for one cabinet.

    Attributes:
        zones: Height fractions for a flat zone list.
        columns: Width fractions for a column layout.
        column_zones: Height fractions per column, keyed by column id.
    """

    zones: tuple[float, ...] | None = None
    columns: tuple[float, ...] | None = None
    column_zones: Mapping[str, tuple[float, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedMaterial:
    """Material and thickness that apply to one part."""

    material_id: str | None
    thickness: float
    source: MaterialSource


@dataclass(frozen=True)
class CutPart:
    """One manufacturable board in the cut list.

    Length and width are whole millimetres. The linkage fields
    (cabinet id/name, zone id) are attached by callers after calculation.
    """

    part_name: str
    length: int
    width: int
    quantity: int
    material_id: str | None = None
    material: str | None = None
    thickness: float | None = None
    grain: GrainDirection | None = None
    edge_banding: str | None = None
    edge_banding_details: Mapping[str, str] = field(default_factory=dict)
    optional: bool = False
    cabinet_id: str | None = None
    cabinet_name: str | None = None
    zone_id: str | None = None

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Cut part dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @property
    def area(self) -> float:
        """Total area for all pieces of this part in square millimetres."""
        return self.length * self.width * self.quantity

    def with_cabinet(self, cabinet_id: str | None, cabinet_name: str | None) -> CutPart:
        """Return a copy linked to the given cabinet."""
        return replace(self, cabinet_id=cabinet_id, cabinet_name=cabinet_name)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-serializable representation."""
        return {
            "part_name": self.part_name,
            "length": self.length,
            "width": self.width,
            "quantity": self.quantity,
            "material_id": self.material_id,
            "material": self.material,
            "thickness": self.thickness,
            "grain": self.grain.value if self.grain else None,
            "edge_banding": self.edge_banding,
            "edge_banding_details": dict(self.edge_banding_details),
            "optional": self.optional,
            "cabinet_id": self.cabinet_id,
            "cabinet_name": self.cabinet_name,
            "zone_id": self.zone_id,
        }
