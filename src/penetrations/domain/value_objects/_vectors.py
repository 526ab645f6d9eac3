"""Vector and rigid transform value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..exceptions import DegenerateGeometryError

# Vectors shorter than this are treated as zero-length.
ZERO_LENGTH_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector or point in millimetres."""

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def basis_x(cls) -> "Vector3":
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def basis_y(cls) -> "Vector3":
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def basis_z(cls) -> "Vector3":
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def from_sequence(cls, values: "list[float] | tuple[float, ...]") -> "Vector3":
        """Build a vector from a three-item sequence."""
        if len(values) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    @property
    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def is_zero(self, tolerance: float = ZERO_LENGTH_TOLERANCE) -> bool:
        return self.length <= tolerance

    def normalized(self) -> "Vector3":
        """Return the unit vector in the same direction.

        Raises:
            DegenerateGeometryError: If the vector has zero length.
        """
        length = self.length
        if length <= ZERO_LENGTH_TOLERANCE:
            raise DegenerateGeometryError("Cannot normalize a zero-length vector")
        return Vector3(self.x / length, self.y / length, self.z / length)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def _identity_rows() -> tuple[tuple[float, float, float], ...]:
    return ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


@dataclass(frozen=True)
class RigidTransform:
    """Rotation followed by translation, mapping a source model into the host model.

    Attributes:
        rotation: Row-major 3x3 rotation matrix.
        translation: Offset applied after rotation, in millimetres.
    """

    rotation: tuple[tuple[float, float, float], ...] = field(
        default_factory=_identity_rows
    )
    translation: Vector3 = field(default_factory=Vector3.zero)

    def __post_init__(self) -> None:
        if len(self.rotation) != 3 or any(len(row) != 3 for row in self.rotation):
            raise ValueError("Rotation must be a 3x3 matrix")

    @classmethod
    def identity(cls) -> "RigidTransform":
        return cls()

    @classmethod
    def from_rotation_z(
        cls, angle_deg: float, translation: Vector3 | None = None
    ) -> "RigidTransform":
        """Rotation about the world Z axis plus an optional translation.

        Linked models are placed in plan, so a Z rotation and an offset
        cover the placements the model-query collaborator produces.
        """
        angle = math.radians(angle_deg)
        c, s = math.cos(angle), math.sin(angle)
        rotation = ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))
        return cls(rotation=rotation, translation=translation or Vector3.zero())

    @property
    def is_identity(self) -> bool:
        return self.rotation == _identity_rows() and self.translation.is_zero()

    def apply_vector(self, vector: Vector3) -> Vector3:
        """Rotate a direction vector (translation is ignored)."""
        r = self.rotation
        return Vector3(
            r[0][0] * vector.x + r[0][1] * vector.y + r[0][2] * vector.z,
            r[1][0] * vector.x + r[1][1] * vector.y + r[1][2] * vector.z,
            r[2][0] * vector.x + r[2][1] * vector.y + r[2][2] * vector.z,
        )

    def apply_point(self, point: Vector3) -> Vector3:
        return self.apply_vector(point) + self.translation
