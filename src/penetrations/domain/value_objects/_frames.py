"""Host-local coordinate frames."""

from __future__ import annotations

from dataclasses import dataclass

from ._vectors import Vector3

# Tolerance for checking that a frame basis is orthonormal.
_BASIS_TOLERANCE = 1e-6


@dataclass(frozen=True)
class LocalFrame:
    """Right-handed host-local frame.

    Right and Up span the host surface; Normal points through it.
    Local coordinates are (Right, Up, Normal) components of a world
    vector measured from the origin.

    Attributes:
        origin: World point of the local origin.
        right: Unit vector along the surface (horizontal for walls).
        up: Unit vector along the surface, perpendicular to right.
        normal: Unit vector through the surface (Right x Up).
    """

    origin: Vector3
    right: Vector3
    up: Vector3
    normal: Vector3

    def __post_init__(self) -> None:
        for name in ("right", "up", "normal"):
            axis: Vector3 = getattr(self, name)
            if abs(axis.length - 1.0) > _BASIS_TOLERANCE:
                raise ValueError(f"Frame axis '{name}' must be a unit vector")
        if (
            abs(self.right.dot(self.up)) > _BASIS_TOLERANCE
            or abs(self.right.dot(self.normal)) > _BASIS_TOLERANCE
            or abs(self.up.dot(self.normal)) > _BASIS_TOLERANCE
        ):
            raise ValueError("Frame axes must be mutually perpendicular")

    def to_local_vector(self, vector: Vector3) -> Vector3:
        return Vector3(
            vector.dot(self.right), vector.dot(self.up), vector.dot(self.normal)
        )

    def to_local_point(self, point: Vector3) -> Vector3:
        return self.to_local_vector(point - self.origin)

    def to_world_vector(self, local: Vector3) -> Vector3:
        return self.right * local.x + self.up * local.y + self.normal * local.z

    def to_world_point(self, local: Vector3) -> Vector3:
        return self.origin + self.to_world_vector(local)
