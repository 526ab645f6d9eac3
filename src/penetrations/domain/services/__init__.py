"""Domain services for penetration analysis.

This package provides the stages of one analysis pass:
- Frame mapping and clash detection
- Opening sizing and nearest-neighbour gaps
- Cluster merging and exclusion rules
- Placement surface selection
- Crossing statistics and the per-pass opening type catalog
"""

from .exclusion import Exclusion, ExclusionFilter, ExclusionRule, FilterResult
from .frame import CoordinateFrameMapper
from .gap import GapAnalyzer
from .intersection import DetectionResult, IntersectionDetector
from .merge import ClusterMergeEngine, MergeCandidate, MergeResult, group_rects
from .placement import PlacementChoice, PlacementSurfaceSelector, reference_direction
from .sizing import (
    FABRICATION_STEP_MM,
    MIN_COS_THETA,
    PERPENDICULAR_TOLERANCE,
    HoleDimensionCalculator,
    OpeningSize,
    format_label,
    round_up_5,
)
from .statistics import HostStatRow, IntersectionStatistics
from .type_catalog import OpeningType, OpeningTypeCatalog

__all__ = [
    # Frames and detection
    "CoordinateFrameMapper",
    "DetectionResult",
    "IntersectionDetector",
    # Sizing
    "FABRICATION_STEP_MM",
    "HoleDimensionCalculator",
    "MIN_COS_THETA",
    "OpeningSize",
    "PERPENDICULAR_TOLERANCE",
    "format_label",
    "round_up_5",
    # Gaps and merging
    "ClusterMergeEngine",
    "GapAnalyzer",
    "MergeCandidate",
    "MergeResult",
    "group_rects",
    # Exclusion
    "Exclusion",
    "ExclusionFilter",
    "ExclusionRule",
    "FilterResult",
    # Placement
    "PlacementChoice",
    "PlacementSurfaceSelector",
    "reference_direction",
    # Statistics and types
    "HostStatRow",
    "IntersectionStatistics",
    "OpeningType",
    "OpeningTypeCatalog",
]
