"""Value objects for the penetration domain.

This module provides immutable data types used throughout the analysis
pass. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Vectors and transforms
from ._vectors import (
    RigidTransform,
    Vector3,
    ZERO_LENGTH_TOLERANCE,
)

# Boxes and rectangles
from ._boxes import (
    BoundingBox3D,
    Rect2D,
)

# Local frames
from ._frames import LocalFrame

# Kinds and categories
from ._kinds import (
    ConduitCategory,
    ExclusionKind,
    HostKind,
    ObstructionKind,
    ShapeKind,
)

__all__ = [
    "BoundingBox3D",
    "ConduitCategory",
    "ExclusionKind",
    "HostKind",
    "LocalFrame",
    "ObstructionKind",
    "Rect2D",
    "RigidTransform",
    "ShapeKind",
    "Vector3",
    "ZERO_LENGTH_TOLERANCE",
]
