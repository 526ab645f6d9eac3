"""Domain layer - core penetration analysis logic."""

from .entities import (
    Cluster,
    ConduitSegment,
    ExclusionZone,
    FinalOpening,
    HostSurface,
    IntersectionRecord,
    Obstruction,
    SkippedElement,
)
from .exceptions import (
    AnalysisAbortedError,
    DegenerateGeometryError,
    MissingGeometryError,
    PenetrationError,
    PlacementSurfaceError,
    UnsupportedElementError,
)
from .faces import CylindricalFace, FaceProjection, HostFace, PlanarFace
from .settings import AnalysisSettings
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

__all__ = [
    "AnalysisAbortedError",
    "AnalysisSettings",
    "BoundingBox3D",
    "Cluster",
    "ConduitCategory",
    "ConduitSegment",
    "CylindricalFace",
    "DegenerateGeometryError",
    "ExclusionKind",
    "ExclusionZone",
    "FaceProjection",
    "FinalOpening",
    "HostFace",
    "HostKind",
    "HostSurface",
    "IntersectionRecord",
    "LocalFrame",
    "MissingGeometryError",
    "Obstruction",
    "ObstructionKind",
    "PenetrationError",
    "PlacementSurfaceError",
    "PlanarFace",
    "Rect2D",
    "RigidTransform",
    "ShapeKind",
    "SkippedElement",
    "UnsupportedElementError",
    "Vector3",
]
