"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from penetrations.domain import Cluster, FinalOpening, SkippedElement
from penetrations.domain.services import (
    Exclusion,
    IntersectionStatistics,
    OpeningType,
)

from .trace import DecisionTrace


@dataclass
class AnalysisOutput:
    """Output DTO of one penetration analysis pass.

    Attributes:
        openings: Openings handed to the placement collaborator.
        skipped: Elements and candidates dropped because of an error.
        excluded: Candidates dropped by an exclusion rule.
        clusters: Clusters built by the merge engine.
        statistics: Crossing counts taken before merging.
        opening_types: Opening types created during the pass.
        trace: Decision trace of the pass.
        candidate_count: Number of candidates that reached placement.
    """

    openings: list[FinalOpening] = field(default_factory=list)
    skipped: list[SkippedElement] = field(default_factory=list)
    excluded: list[Exclusion] = field(default_factory=list)
    clusters: list[Cluster] = field(default_factory=list)
    statistics: IntersectionStatistics = field(default_factory=IntersectionStatistics)
    opening_types: list[OpeningType] = field(default_factory=list)
    trace: DecisionTrace = field(default_factory=DecisionTrace)
    candidate_count: int = 0

    @property
    def processed_count(self) -> int:
        """Candidates that produced a final opening."""
        return len(self.openings)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
