"""Axis-aligned boxes and rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ._vectors import RigidTransform, Vector3


@dataclass(frozen=True)
class BoundingBox3D:
    """Axis-aligned 3D bounding box in world millimetres.

    Zero extent along an axis is allowed (a flat box still intersects).
    """

    min_point: Vector3
    max_point: Vector3

    def __post_init__(self) -> None:
        if (
            self.min_point.x > self.max_point.x
            or self.min_point.y > self.max_point.y
            or self.min_point.z > self.max_point.z
        ):
            raise ValueError("Bounding box min must not exceed max on any axis")

    @classmethod
    def from_points(cls, points: Iterable[Vector3]) -> "BoundingBox3D":
        """Tightest box around the given points."""
        pts = list(points)
        if not pts:
            raise ValueError("Cannot build a bounding box from no points")
        return cls(
            min_point=Vector3(
                min(p.x for p in pts), min(p.y for p in pts), min(p.z for p in pts)
            ),
            max_point=Vector3(
                max(p.x for p in pts), max(p.y for p in pts), max(p.z for p in pts)
            ),
        )

    @property
    def center(self) -> Vector3:
        return (self.min_point + self.max_point) * 0.5

    @property
    def size(self) -> Vector3:
        return self.max_point - self.min_point

    def corners(self) -> list[Vector3]:
        """Return the 8 corner points of the box."""
        lo, hi = self.min_point, self.max_point
        return [
            Vector3(x, y, z)
            for x in (lo.x, hi.x)
            for y in (lo.y, hi.y)
            for z in (lo.z, hi.z)
        ]

    def transformed(self, transform: RigidTransform) -> "BoundingBox3D":
        """Box around all eight transformed corners.

        Transforming only min/max would invert or shrink the box under a
        rotation, so every corner is mapped.
        """
        if transform.is_identity:
            return self
        return BoundingBox3D.from_points(transform.apply_point(c) for c in self.corners())

    def overlaps(self, other: "BoundingBox3D") -> bool:
        """Closed-interval overlap test; touching boxes overlap."""
        return not (
            self.max_point.x < other.min_point.x
            or self.min_point.x > other.max_point.x
            or self.max_point.y < other.min_point.y
            or self.min_point.y > other.max_point.y
            or self.max_point.z < other.min_point.z
            or self.min_point.z > other.max_point.z
        )

    def intersection(self, other: "BoundingBox3D") -> "BoundingBox3D | None":
        """Overlap region of two boxes, or None when they are disjoint."""
        if not self.overlaps(other):
            return None
        return BoundingBox3D(
            min_point=Vector3(
                max(self.min_point.x, other.min_point.x),
                max(self.min_point.y, other.min_point.y),
                max(self.min_point.z, other.min_point.z),
            ),
            max_point=Vector3(
                min(self.max_point.x, other.max_point.x),
                min(self.max_point.y, other.max_point.y),
                min(self.max_point.z, other.max_point.z),
            ),
        )

    def expanded(self, margin: float) -> "BoundingBox3D":
        offset = Vector3(margin, margin, margin)
        return BoundingBox3D(self.min_point - offset, self.max_point + offset)

    def contains_point(self, point: Vector3) -> bool:
        return (
            self.min_point.x <= point.x <= self.max_point.x
            and self.min_point.y <= point.y <= self.max_point.y
            and self.min_point.z <= point.z <= self.max_point.z
        )

    def extent_along(self, direction: Vector3) -> float:
        """Length of the box projected onto a unit direction."""
        size = self.size
        return (
            abs(direction.x) * size.x
            + abs(direction.y) * size.y
            + abs(direction.z) * size.z
        )


@dataclass(frozen=True)
class Rect2D:
    """Axis-aligned rectangle in a host-local (Right, Up) plane.

    Attributes:
        min_u: Left edge along the Right axis.
        max_u: Right edge along the Right axis.
        min_v: Bottom edge along the Up axis.
        max_v: Top edge along the Up axis.
    """

    min_u: float
    max_u: float
    min_v: float
    max_v: float

    def __post_init__(self) -> None:
        if self.max_u < self.min_u or self.max_v < self.min_v:
            raise ValueError("Rectangle max must not be below min")

    @classmethod
    def from_center(
        cls, center_u: float, center_v: float, width: float, height: float
    ) -> "Rect2D":
        half_w, half_h = width / 2.0, height / 2.0
        return cls(
            min_u=center_u - half_w,
            max_u=center_u + half_w,
            min_v=center_v - half_h,
            max_v=center_v + half_h,
        )

    @classmethod
    def union(cls, rects: Iterable["Rect2D"]) -> "Rect2D":
        """Tightest rectangle containing every given rectangle's edges."""
        items = list(rects)
        if not items:
            raise ValueError("Cannot build the union of no rectangles")
        return cls(
            min_u=min(r.min_u for r in items),
            max_u=max(r.max_u for r in items),
            min_v=min(r.min_v for r in items),
            max_v=max(r.max_v for r in items),
        )

    @property
    def width(self) -> float:
        return self.max_u - self.min_u

    @property
    def height(self) -> float:
        return self.max_v - self.min_v

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_u + self.max_u) / 2.0, (self.min_v + self.max_v) / 2.0)

    def inflated(self, margin: float) -> "Rect2D":
        return Rect2D(
            min_u=self.min_u - margin,
            max_u=self.max_u + margin,
            min_v=self.min_v - margin,
            max_v=self.max_v + margin,
        )

    def overlaps(self, other: "Rect2D") -> bool:
        """Closed-interval overlap on both local axes."""
        return not (
            self.max_u < other.min_u
            or self.min_u > other.max_u
            or self.max_v < other.min_v
            or self.min_v > other.max_v
        )

    def contains(self, other: "Rect2D") -> bool:
        return (
            self.min_u <= other.min_u
            and self.max_u >= other.max_u
            and self.min_v <= other.min_v
            and self.max_v >= other.max_v
        )
