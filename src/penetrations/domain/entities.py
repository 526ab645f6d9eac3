"""Domain entities for penetration analysis."""

from __future__ import annotations

from dataclasses import dataclass, field

from .faces import HostFace, PlanarFace
from .value_objects import (
    BoundingBox3D,
    ConduitCategory,
    ExclusionKind,
    HostKind,
    LocalFrame,
    ObstructionKind,
    Rect2D,
    RigidTransform,
    ShapeKind,
    Vector3,
)

# Plan-diagonal detection: both horizontal components above, vertical below.
DIAGONAL_TOLERANCE = 0.1


@dataclass(frozen=True)
class ExclusionZone:
    """Bounding volume of a door or window inserted in a host."""

    zone_id: str
    kind: ExclusionKind
    bounding_box: BoundingBox3D


@dataclass(frozen=True)
class Obstruction:
    """Column or beam a penetration must keep clear of.

    Attributes:
        obstruction_id: Identity of the structural element.
        kind: Column or beam.
        bounding_box: Box in the element's own source model coordinates.
        transform: Source transform into host model coordinates.
    """

    obstruction_id: str
    kind: ObstructionKind
    bounding_box: BoundingBox3D
    transform: RigidTransform = field(default_factory=RigidTransform.identity)

    @property
    def world_box(self) -> BoundingBox3D:
        return self.bounding_box.transformed(self.transform)


@dataclass(frozen=True)
class HostSurface:
    """A wall or slab a conduit may penetrate.

    Attributes:
        host_id: Identity of the host element.
        kind: Wall or slab.
        bounding_box: World bounding box.
        frame: Host-local frame (Right, Up, Normal).
        exclusion_zones: Door and window volumes on this host.
        obstructions: Columns and beams associated with this host.
        faces: Explicit placement faces. When empty, two planar faces are
            derived from the bounding box and the frame normal.
    """

    host_id: str
    kind: HostKind
    bounding_box: BoundingBox3D
    frame: LocalFrame
    exclusion_zones: tuple[ExclusionZone, ...] = ()
    obstructions: tuple[Obstruction, ...] = ()
    faces: tuple[HostFace, ...] = ()

    @property
    def thickness(self) -> float:
        """Extent of the bounding box along the host normal."""
        return self.bounding_box.extent_along(self.frame.normal)

    def bounding_faces(self) -> tuple[HostFace, ...]:
        """Placement faces: explicit ones, else two sides derived from the box."""
        if self.faces:
            return self.faces
        center = self.bounding_box.center
        normal = self.frame.normal
        half = self.thickness / 2.0
        if self.kind is HostKind.WALL:
            names = ("exterior", "interior")
        else:
            names = ("top", "bottom")
        return (
            PlanarFace(f"{self.host_id}:{names[0]}", center + normal * half, normal),
            PlanarFace(f"{self.host_id}:{names[1]}", center - normal * half, -normal),
        )


@dataclass(frozen=True)
class ConduitSegment:
    """A pipe, duct or cable tray segment that may cross a host.

    Attributes:
        conduit_id: Identity of the element (unique across sources).
        category: Pipe, duct or cable tray.
        shape: Cross-section family used for sizing.
        width: Cross-section width (diameter for circular) in mm.
        height: Cross-section height in mm (equals width for circular).
        direction: World centerline direction in the source model.
        reference_point: World reference point in the source model.
        bounding_box: Source-model bounding box, None if unavailable.
        source: Name of the model the element comes from.
    """

    conduit_id: str
    category: ConduitCategory
    shape: ShapeKind
    width: float
    height: float
    direction: Vector3
    reference_point: Vector3
    bounding_box: BoundingBox3D | None = None
    source: str = "host"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Cross-section dimensions must be positive")
        if self.shape is ShapeKind.CIRCULAR and self.height != self.width:
            raise ValueError("Circular cross-sections must have height == width")

    @classmethod
    def from_endpoints(
        cls,
        conduit_id: str,
        category: ConduitCategory,
        shape: ShapeKind,
        width: float,
        height: float,
        start: Vector3,
        end: Vector3,
        source: str = "host",
    ) -> "ConduitSegment":
        """Build a segment from its centerline end points.

        The bounding box is the box of the centerline inflated by half of
        the largest cross-section dimension.

        Raises:
            DegenerateGeometryError: If start and end coincide.
        """
        direction = (end - start).normalized()
        box = BoundingBox3D.from_points([start, end]).expanded(max(width, height) / 2.0)
        return cls(
            conduit_id=conduit_id,
            category=category,
            shape=shape,
            width=width,
            height=height,
            direction=direction,
            reference_point=(start + end) * 0.5,
            bounding_box=box,
            source=source,
        )

    @property
    def is_diagonal(self) -> bool:
        """True when the segment runs diagonally in plan."""
        if self.direction.is_zero():
            return False
        d = self.direction.normalized()
        return (
            abs(d.x) > DIAGONAL_TOLERANCE
            and abs(d.y) > DIAGONAL_TOLERANCE
            and abs(d.z) < DIAGONAL_TOLERANCE
        )


@dataclass
class IntersectionRecord:
    """One conduit-versus-host candidate, owned by a single pass.

    Created by the detector and annotated in place by the dimension
    calculator, the gap analyzer and the merge engine.

    Attributes:
        host_id: Host identity.
        conduit_id: Conduit identity.
        host_kind: Wall or slab.
        shape: Conduit cross-section family.
        world_point: Approximate world intersection point.
        local_point: The same point in the host frame.
        world_axis: Conduit axis in host model coordinates (unit).
        local_axis: Conduit axis in the host frame (unit).
        element_width: Conduit cross-section width in mm.
        element_height: Conduit cross-section height in mm.
        is_diagonal: Conduit runs diagonally in plan.
        opening_width: Final opening width in mm.
        opening_height: Final opening height in mm.
        raw_width: Opening width before 5 mm rounding.
        raw_height: Opening height before 5 mm rounding.
        label: Human-readable opening label.
        gap: Nearest-neighbour edge gap, set only when below the threshold.
        cluster_id: Back-reference to the cluster this record joined.
    """

    host_id: str
    conduit_id: str
    host_kind: HostKind
    shape: ShapeKind
    world_point: Vector3
    local_point: Vector3
    world_axis: Vector3
    local_axis: Vector3
    element_width: float
    element_height: float
    is_diagonal: bool = False
    opening_width: float = 0.0
    opening_height: float = 0.0
    raw_width: float = 0.0
    raw_height: float = 0.0
    label: str = ""
    gap: float | None = None
    cluster_id: str | None = None

    @property
    def is_sized(self) -> bool:
        return self.opening_width > 0 and self.opening_height > 0

    @property
    def rect(self) -> Rect2D:
        """Opening rectangle in the host (Right, Up) plane."""
        return Rect2D.from_center(
            self.local_point.x,
            self.local_point.y,
            self.opening_width,
            self.opening_height,
        )

    @property
    def normal_alignment(self) -> float:
        """|axis . normal|, 1.0 for a perpendicular crossing."""
        return abs(self.local_axis.z)

    # Candidate interface shared with Cluster

    @property
    def width(self) -> float:
        return self.opening_width

    @property
    def height(self) -> float:
        return self.opening_height

    @property
    def world_center(self) -> Vector3:
        return self.world_point

    @property
    def local_center(self) -> Vector3:
        return self.local_point

    @property
    def preferred_direction(self) -> Vector3:
        return self.world_axis

    @property
    def member_ids(self) -> tuple[str, ...]:
        return (self.conduit_id,)

    @property
    def is_merged(self) -> bool:
        return False

    @property
    def candidate_id(self) -> str:
        return self.conduit_id


@dataclass(frozen=True)
class Cluster:
    """Group of overlapping openings on one host, replaced by one opening.

    Attributes:
        cluster_id: Identity of the merged opening.
        host_id: Host the members belong to.
        members: Member records, sorted by conduit id.
        rect: Tightest rectangle containing every member rectangle.
        local_center: Centroid of rect in the host frame.
        world_center: local_center mapped back to world coordinates.
        label: Label regenerated from the rounded merged dimensions.
    """

    cluster_id: str
    host_id: str
    members: tuple[IntersectionRecord, ...]
    rect: Rect2D
    local_center: Vector3
    world_center: Vector3
    label: str

    def __post_init__(self) -> None:
        if len(self.members) < 2:
            raise ValueError("A cluster needs at least two members")

    @property
    def width(self) -> float:
        return self.rect.width

    @property
    def height(self) -> float:
        return self.rect.height

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def member_ids(self) -> tuple[str, ...]:
        return tuple(m.conduit_id for m in self.members)

    @property
    def is_merged(self) -> bool:
        return True

    @property
    def candidate_id(self) -> str:
        return self.cluster_id

    @property
    def normal_alignment(self) -> float:
        """Best alignment among members; one genuine puncture keeps the cluster."""
        return max(m.normal_alignment for m in self.members)

    @property
    def preferred_direction(self) -> Vector3:
        best = max(self.members, key=lambda m: (m.normal_alignment, m.conduit_id))
        return best.world_axis


@dataclass(frozen=True)
class FinalOpening:
    """An opening ready for the external placement collaborator.

    Attributes:
        host_id: Host the opening is cut into.
        placement_point: World point on the chosen placement face.
        surface_id: Reference of the chosen placement face.
        reference_direction: In-plane reference direction for placement.
        width: Opening width in mm.
        height: Opening height in mm.
        depth: Opening depth in mm (host thickness).
        label: Human-readable opening label.
        type_name: Name of the opening type from the pass catalog.
        is_merged: True if the opening replaces several crossings.
        constituent_ids: Conduit ids covered by this opening.
    """

    host_id: str
    placement_point: Vector3
    surface_id: str
    reference_direction: Vector3
    width: float
    height: float
    depth: float
    label: str
    type_name: str
    is_merged: bool = False
    constituent_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class SkippedElement:
    """An element or candidate dropped from the pass, with the reason."""

    element_id: str
    stage: str
    category: str
    reason: str
