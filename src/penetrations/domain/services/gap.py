"""Nearest-neighbour gap analysis between openings on one host."""

from __future__ import annotations

import math
from collections import defaultdict

from ..entities import IntersectionRecord

__all__ = ["GapAnalyzer"]


class GapAnalyzer:
    """Annotates records with the edge gap to their nearest neighbour.

    Openings are approximated by circles in the host (Right, Up) plane with
    radius = opening width / 2. The gap is the centre distance minus both
    radii, clamped at zero. A gap is attached only when it is below the
    merge threshold, so it flags candidates worth merging.
    """

    def __init__(self, merge_threshold_mm: float = 0.0) -> None:
        self.merge_threshold_mm = merge_threshold_mm

    def nearest_gap(
        self, record: IntersectionRecord, others: list[IntersectionRecord]
    ) -> float | None:
        """Smallest edge gap from record to any other record, None if alone."""
        best: float | None = None
        r1 = record.opening_width / 2.0
        for other in others:
            if other is record:
                continue
            distance = math.hypot(
                record.local_point.x - other.local_point.x,
                record.local_point.y - other.local_point.y,
            )
            gap = max(0.0, distance - r1 - other.opening_width / 2.0)
            if best is None or gap < best:
                best = gap
        return best

    def analyze(self, records: list[IntersectionRecord]) -> int:
        """Attach gaps to records in place.

        Returns:
            Number of records that received a gap.
        """
        by_host: dict[str, list[IntersectionRecord]] = defaultdict(list)
        for record in records:
            by_host[record.host_id].append(record)

        attached = 0
        for host_records in by_host.values():
            if len(host_records) < 2:
                continue
            for record in host_records:
                gap = self.nearest_gap(record, host_records)
                if gap is not None and gap < self.merge_threshold_mm:
                    record.gap = gap
                    attached += 1
        return attached
