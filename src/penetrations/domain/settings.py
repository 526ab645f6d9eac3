"""Analysis settings consumed by the domain services."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CLEARANCE_MM = 50.0
DEFAULT_MERGE_THRESHOLD_MM = 0.0
DEFAULT_OPENING_TOLERANCE_MM = 50.0
DEFAULT_OBSTRUCTION_PROBE_MM = 150.0
DEFAULT_GRAZING_THRESHOLD = 0.5


@dataclass(frozen=True)
class AnalysisSettings:
    """Engineer-tunable scalars for one analysis pass.

    Attributes:
        clearance_mm: Margin added on each side of a conduit.
        merge_threshold_mm: Largest gap between openings that still merge.
            Zero disables merging.
        opening_tolerance_mm: Expansion of door/window zones.
        obstruction_probe_mm: Probe reach along the host normal, each way.
        grazing_threshold: Minimum |axis . normal| for a real puncture.
        abort_on_unsupported: Abort the pass on an unsupported element
            instead of skipping it.
    """

    clearance_mm: float = DEFAULT_CLEARANCE_MM
    merge_threshold_mm: float = DEFAULT_MERGE_THRESHOLD_MM
    opening_tolerance_mm: float = DEFAULT_OPENING_TOLERANCE_MM
    obstruction_probe_mm: float = DEFAULT_OBSTRUCTION_PROBE_MM
    grazing_threshold: float = DEFAULT_GRAZING_THRESHOLD
    abort_on_unsupported: bool = False

    def __post_init__(self) -> None:
        if self.clearance_mm < 0:
            raise ValueError("Clearance must be non-negative")
        if self.merge_threshold_mm < 0:
            raise ValueError("Merge threshold must be non-negative")
        if self.opening_tolerance_mm < 0:
            raise ValueError("Opening tolerance must be non-negative")
        if self.obstruction_probe_mm < 0:
            raise ValueError("Obstruction probe distance must be non-negative")
        if not 0 <= self.grazing_threshold <= 1:
            raise ValueError("Grazing threshold must be between 0 and 1")

    @property
    def merging_enabled(self) -> bool:
        return self.merge_threshold_mm > 0
