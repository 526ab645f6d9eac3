"""Application commands (use cases) for penetration analysis."""

from __future__ import annotations

import dataclasses
import logging

from penetrations.contracts.protocols import ModelQueryProtocol, PlacementSinkProtocol
from penetrations.domain import (
    AnalysisAbortedError,
    AnalysisSettings,
    FinalOpening,
    HostSurface,
    PenetrationError,
    SkippedElement,
    UnsupportedElementError,
)
from penetrations.domain.services import (
    ClusterMergeEngine,
    ExclusionFilter,
    GapAnalyzer,
    HoleDimensionCalculator,
    IntersectionDetector,
    IntersectionStatistics,
    MergeCandidate,
    OpeningTypeCatalog,
    PlacementSurfaceSelector,
)

from .dtos import AnalysisOutput

logger = logging.getLogger(__name__)


class AnalyzePenetrationsCommand:
    """Command running one complete penetration analysis pass.

    The pass detects host/conduit crossings, sizes an opening for each,
    merges overlapping openings, drops excluded candidates and picks a
    placement face for every survivor. Per-element failures are caught at
    the element boundary and reported as skipped; the batch continues.
    """

    def __init__(
        self,
        settings: AnalysisSettings | None = None,
        detector: IntersectionDetector | None = None,
        calculator: HoleDimensionCalculator | None = None,
        gap_analyzer: GapAnalyzer | None = None,
        merge_engine: ClusterMergeEngine | None = None,
        exclusion_filter: ExclusionFilter | None = None,
        placement_selector: PlacementSurfaceSelector | None = None,
    ) -> None:
        self.settings = settings or AnalysisSettings()
        s = self.settings
        self.detector = detector or IntersectionDetector()
        self.calculator = calculator or HoleDimensionCalculator(s.clearance_mm)
        self.gap_analyzer = gap_analyzer or GapAnalyzer(s.merge_threshold_mm)
        self.merge_engine = merge_engine or ClusterMergeEngine(s.merge_threshold_mm)
        self.exclusion_filter = exclusion_filter or ExclusionFilter(
            opening_tolerance_mm=s.opening_tolerance_mm,
            obstruction_probe_mm=s.obstruction_probe_mm,
            grazing_threshold=s.grazing_threshold,
        )
        self.placement_selector = placement_selector or PlacementSurfaceSelector()

    def execute(
        self,
        model: ModelQueryProtocol,
        sink: PlacementSinkProtocol | None = None,
    ) -> AnalysisOutput:
        """Execute the analysis pass.

        Args:
            model: Snapshot of hosts and conduits to analyze.
            sink: Optional receiver of the final openings.

        Returns:
            AnalysisOutput with openings, skipped elements and statistics.

        Raises:
            AnalysisAbortedError: If abort_on_unsupported is set and an
                unsupported element is encountered.
        """
        output = AnalysisOutput()
        trace = output.trace
        catalog = OpeningTypeCatalog()

        trace.add(
            f"Penetration analysis: clearance={self.settings.clearance_mm:g} mm, "
            f"merge threshold={self.settings.merge_threshold_mm:g} mm"
        )
        trace.hr()

        for error in model.element_errors():
            self._skip(output, error.element_id or "?", "query", error)

        hosts = [self._with_context(model, host) for host in model.hosts()]
        hosts_by_id = {host.host_id: host for host in hosts}
        conduits = model.conduits()
        trace.add(f"Hosts: {len(hosts)}, conduits: {len(conduits)}")

        # Detect
        detection = self.detector.detect(hosts, conduits)
        for skipped in detection.skipped:
            self._record_skip(output, skipped)
        trace.add(f"Detected {len(detection.records)} crossing(s)")

        # Size
        sized = []
        for record in detection.records:
            try:
                size = self.calculator.apply(record)
            except PenetrationError as exc:
                self._skip(output, record.conduit_id, "size", exc)
                continue
            sized.append(record)
            kind = "oblique" if size.is_oblique else "perpendicular"
            trace.add(
                f"  {record.conduit_id} x {record.host_id}: {kind}, "
                f"raw {size.raw_width:.2f}x{size.raw_height:.2f} -> {size.label}"
                + (" (diagonal)" if record.is_diagonal else "")
            )
        output.statistics = IntersectionStatistics.from_records(sized)

        # Gap and merge
        gap_count = self.gap_analyzer.analyze(sized)
        if gap_count:
            trace.add(f"{gap_count} opening(s) closer than the merge threshold")
        merge = self.merge_engine.merge(
            sized, {host_id: host.frame for host_id, host in hosts_by_id.items()}
        )
        output.clusters = list(merge.clusters)
        for cluster in merge.clusters:
            trace.add(
                f"  Merged {', '.join(cluster.member_ids)} on {cluster.host_id} "
                f"-> {cluster.label}"
            )

        # Exclude
        filtered = self.exclusion_filter.apply(merge.candidates, hosts_by_id)
        output.excluded = list(filtered.dropped)
        for exclusion in filtered.dropped:
            trace.add(
                f"  Dropped {exclusion.candidate.candidate_id}: {exclusion.reason}"
            )
        output.candidate_count = len(filtered.kept)

        # Place
        trace.hr()
        for candidate in filtered.kept:
            try:
                opening = self._place(candidate, hosts_by_id[candidate.host_id], catalog)
            except PenetrationError as exc:
                self._skip(output, candidate.candidate_id, "place", exc)
                continue
            output.openings.append(opening)
            trace.add(
                f"  Opening {opening.label} on {opening.host_id} "
                f"face {opening.surface_id} ({opening.type_name})"
            )

        output.opening_types = catalog.types
        trace.hr()
        trace.add(
            f"Processed: {output.processed_count}, skipped: {output.skipped_count}, "
            f"excluded: {len(output.excluded)}"
        )
        logger.info(
            f"Analysis finished: {output.processed_count} opening(s), "
            f"{output.skipped_count} skipped"
        )

        if sink is not None and output.openings:
            sink.place(list(output.openings))
        return output

    def _with_context(self, model: ModelQueryProtocol, host: HostSurface) -> HostSurface:
        return dataclasses.replace(
            host,
            exclusion_zones=tuple(model.exclusion_zones(host.host_id)),
            obstructions=tuple(model.obstructions(host.host_id)),
        )

    def _place(
        self,
        candidate: MergeCandidate,
        host: HostSurface,
        catalog: OpeningTypeCatalog,
    ) -> FinalOpening:
        choice = self.placement_selector.select(
            host, candidate.world_center, candidate.preferred_direction
        )
        opening_type = catalog.get_or_create(
            candidate.label, candidate.width, candidate.height
        )
        return FinalOpening(
            host_id=host.host_id,
            placement_point=choice.point,
            surface_id=choice.surface_id,
            reference_direction=choice.reference_direction,
            width=candidate.width,
            height=candidate.height,
            depth=host.thickness,
            label=candidate.label,
            type_name=opening_type.name,
            is_merged=candidate.is_merged,
            constituent_ids=candidate.member_ids,
        )

    def _skip(
        self,
        output: AnalysisOutput,
        element_id: str,
        stage: str,
        error: PenetrationError,
    ) -> None:
        if isinstance(error, UnsupportedElementError) and self.settings.abort_on_unsupported:
            output.trace.add(f"ABORT: {element_id}: {error}")
            raise AnalysisAbortedError(
                f"Unsupported element {element_id}: {error}"
            ) from error
        self._record_skip(
            output,
            SkippedElement(
                element_id=element_id,
                stage=stage,
                category=error.category,
                reason=str(error),
            ),
        )

    def _record_skip(self, output: AnalysisOutput, skipped: SkippedElement) -> None:
        output.skipped.append(skipped)
        output.trace.add(
            f"  Skipped {skipped.element_id} at {skipped.stage}: {skipped.reason}"
        )
        logger.warning(
            f"Skipped {skipped.element_id} ({skipped.category}): {skipped.reason}"
        )
