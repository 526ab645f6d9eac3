"""Exclusion rules for candidate openings.

A candidate is dropped when its centre sits inside a door or window, when
the opening would cut into a column or beam, or when the conduit runs
along the host surface instead of through it. Rules are tried in that
order and the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from ..entities import Cluster, HostSurface, IntersectionRecord, Obstruction
from ..settings import (
    DEFAULT_GRAZING_THRESHOLD,
    DEFAULT_OBSTRUCTION_PROBE_MM,
    DEFAULT_OPENING_TOLERANCE_MM,
)
from ..value_objects import BoundingBox3D, Vector3
from .merge import MergeCandidate

__all__ = ["Exclusion", "ExclusionFilter", "ExclusionRule", "FilterResult"]


class ExclusionRule(str, Enum):
    """Rule that dropped a candidate."""

    OPENING = "opening"
    OBSTRUCTION = "obstruction"
    GRAZING = "grazing"


@dataclass(frozen=True)
class Exclusion:
    """A dropped candidate and why it was dropped."""

    candidate: MergeCandidate
    rule: ExclusionRule
    reason: str


@dataclass
class FilterResult:
    """Candidates that passed every rule and the ones that did not."""

    kept: list[MergeCandidate] = field(default_factory=list)
    dropped: list[Exclusion] = field(default_factory=list)


class ExclusionFilter:
    """Drops candidates in doors/windows, near obstructions or grazing.

    Attributes:
        opening_tolerance_mm: Expansion applied to every door/window zone.
        obstruction_probe_mm: Probe reach along the host normal, each way.
        grazing_threshold: Minimum |axis . normal| for a genuine puncture.
    """

    def __init__(
        self,
        opening_tolerance_mm: float = DEFAULT_OPENING_TOLERANCE_MM,
        obstruction_probe_mm: float = DEFAULT_OBSTRUCTION_PROBE_MM,
        grazing_threshold: float = DEFAULT_GRAZING_THRESHOLD,
    ) -> None:
        self.opening_tolerance_mm = opening_tolerance_mm
        self.obstruction_probe_mm = obstruction_probe_mm
        self.grazing_threshold = grazing_threshold

    def check(
        self, candidate: IntersectionRecord | Cluster, host: HostSurface
    ) -> Exclusion | None:
        """Return the first rule the candidate violates, or None."""
        point = candidate.world_center
        for zone in host.exclusion_zones:
            if zone.bounding_box.expanded(self.opening_tolerance_mm).contains_point(point):
                return Exclusion(
                    candidate=candidate,
                    rule=ExclusionRule.OPENING,
                    reason=f"inside {zone.kind.value} {zone.zone_id}",
                )

        if host.obstructions:
            probe = self.probe_box(candidate)
            for obstruction in host.obstructions:
                if probe.overlaps(self._local_box(obstruction, host)):
                    return Exclusion(
                        candidate=candidate,
                        rule=ExclusionRule.OBSTRUCTION,
                        reason=(
                            f"too close to {obstruction.kind.value} "
                            f"{obstruction.obstruction_id}"
                        ),
                    )

        alignment = candidate.normal_alignment
        if alignment < self.grazing_threshold:
            return Exclusion(
                candidate=candidate,
                rule=ExclusionRule.GRAZING,
                reason=(
                    f"grazing crossing (|axis.normal|={alignment:.3f} "
                    f"< {self.grazing_threshold})"
                ),
            )
        return None

    def probe_box(self, candidate: IntersectionRecord | Cluster) -> BoundingBox3D:
        """Host-local probe volume around the candidate opening."""
        center = candidate.local_center
        half = Vector3(
            candidate.width / 2.0,
            candidate.height / 2.0,
            self.obstruction_probe_mm,
        )
        return BoundingBox3D(center - half, center + half)

    def apply(
        self,
        candidates: list[MergeCandidate],
        hosts: Mapping[str, HostSurface],
    ) -> FilterResult:
        """Split candidates into kept and dropped, preserving order."""
        result = FilterResult()
        for candidate in candidates:
            exclusion = self.check(candidate, hosts[candidate.host_id])
            if exclusion is None:
                result.kept.append(candidate)
            else:
                result.dropped.append(exclusion)
        return result

    def _local_box(self, obstruction: Obstruction, host: HostSurface) -> BoundingBox3D:
        return BoundingBox3D.from_points(
            host.frame.to_local_point(corner)
            for corner in obstruction.world_box.corners()
        )
