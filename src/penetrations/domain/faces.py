"""Placement faces of host elements.

A face is one bounding surface of a host that an opening can be placed
on: one of the two sides of a wall, or the top or bottom of a slab.
Faces are either planar or cylindrical (curved walls).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .value_objects import Vector3


@dataclass(frozen=True)
class FaceProjection:
    """Closest point on a face and its distance from the query point."""

    point: Vector3
    distance: float


@runtime_checkable
class HostFace(Protocol):
    """Contract shared by planar and curved placement faces."""

    face_id: str

    def project(self, point: Vector3) -> FaceProjection | None:
        """Project a world point onto the face, or None if undefined."""
        ...

    def normal_at(self, point: Vector3) -> Vector3:
        """Unit normal of the face nearest to a world point."""
        ...


@dataclass(frozen=True)
class PlanarFace:
    """Infinite plane through an origin with a fixed normal."""

    face_id: str
    origin: Vector3
    normal: Vector3

    def project(self, point: Vector3) -> FaceProjection:
        unit = self.normal.normalized()
        signed = (point - self.origin).dot(unit)
        return FaceProjection(point=point - unit * signed, distance=abs(signed))

    def normal_at(self, point: Vector3) -> Vector3:
        return self.normal.normalized()


@dataclass(frozen=True)
class CylindricalFace:
    """Cylindrical face of a curved wall.

    Attributes:
        face_id: Reference handed to the placement collaborator.
        axis_origin: A point on the cylinder axis.
        axis_direction: Direction of the cylinder axis (vertical for walls).
        radius: Cylinder radius in millimetres.
        mid_normal: Normal at the parametric middle of the face, used when
            a point cannot be projected (it lies on the axis).
        outward: True if the face normal points away from the axis.
    """

    face_id: str
    axis_origin: Vector3
    axis_direction: Vector3
    radius: float
    mid_normal: Vector3
    outward: bool = True

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError("Cylinder radius must be positive")

    def _radial(self, point: Vector3) -> Vector3:
        axis = self.axis_direction.normalized()
        offset = point - self.axis_origin
        return offset - axis * offset.dot(axis)

    def project(self, point: Vector3) -> FaceProjection | None:
        radial = self._radial(point)
        if radial.is_zero():
            return None
        unit = radial.normalized()
        on_surface = point - radial + unit * self.radius
        return FaceProjection(
            point=on_surface, distance=abs(radial.length - self.radius)
        )

    def normal_at(self, point: Vector3) -> Vector3:
        radial = self._radial(point)
        if radial.is_zero():
            return self.mid_normal.normalized()
        unit = radial.normalized()
        return unit if self.outward else -unit
