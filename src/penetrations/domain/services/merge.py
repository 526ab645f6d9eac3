"""Merging of overlapping openings into clusters.

Openings on the same host whose rectangles overlap, directly or through a
chain of neighbours, are replaced by one opening sized to the tightest
rectangle containing all of them. Grouping repeats on the merged
rectangles until nothing changes, so a second run over the output never
merges further.
"""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Mapping, Union

from ..entities import Cluster, IntersectionRecord
from ..value_objects import LocalFrame, Rect2D, Vector3
from .sizing import format_label, round_up_5

__all__ = ["ClusterMergeEngine", "MergeCandidate", "MergeResult", "group_rects"]

MergeCandidate = Union[IntersectionRecord, Cluster]


def _components(rects: list[Rect2D], margin: float) -> list[list[int]]:
    """Connected components of the overlap graph, by breadth-first search."""
    inflated = [r.inflated(margin) for r in rects]
    visited = [False] * len(rects)
    components: list[list[int]] = []
    for start in range(len(rects)):
        if visited[start]:
            continue
        visited[start] = True
        queue = deque([start])
        component = []
        while queue:
            current = queue.popleft()
            component.append(current)
            for other in range(len(rects)):
                if not visited[other] and inflated[current].overlaps(inflated[other]):
                    visited[other] = True
                    queue.append(other)
        components.append(sorted(component))
    return components


def group_rects(rects: list[Rect2D], threshold: float) -> list[list[int]]:
    """Group rectangles that overlap within the threshold.

    Each rectangle is inflated by threshold / 2 on every side before the
    closed-interval overlap test. Groups are then re-tested on their union
    rectangles until a pass produces no further merges.

    Args:
        rects: Rectangles in one host plane.
        threshold: Largest gap in mm that still joins two rectangles.

    Returns:
        Index groups into rects, each sorted, ordered by smallest index.
    """
    groups = [[i] for i in range(len(rects))]
    margin = threshold / 2.0
    while True:
        unions = [Rect2D.union(rects[i] for i in group) for group in groups]
        components = _components(unions, margin)
        if len(components) == len(groups):
            break
        groups = [
            sorted(i for c in component for i in groups[c])
            for component in components
        ]
    return sorted(groups, key=lambda g: g[0])


@dataclass
class MergeResult:
    """Candidates after merging, in stable order.

    Attributes:
        candidates: Standalone records and clusters, ordered by host and
            then by the smallest member conduit id.
        clusters: Only the clusters built in this run.
    """

    candidates: list[MergeCandidate] = field(default_factory=list)
    clusters: list[Cluster] = field(default_factory=list)

    @property
    def merged_record_count(self) -> int:
        return sum(c.member_count for c in self.clusters)


class ClusterMergeEngine:
    """Replaces groups of overlapping openings with a single cluster.

    Attributes:
        merge_threshold_mm: Largest edge gap in mm that still merges two
            openings. Zero or less disables merging.
    """

    def __init__(self, merge_threshold_mm: float = 0.0) -> None:
        self.merge_threshold_mm = merge_threshold_mm

    @property
    def enabled(self) -> bool:
        return self.merge_threshold_mm > 0

    def merge(
        self,
        records: list[IntersectionRecord],
        frames: Mapping[str, LocalFrame],
    ) -> MergeResult:
        """Merge sized records host by host.

        Args:
            records: Sized intersection records.
            frames: Host frames by host id, used to place cluster centres.

        Returns:
            MergeResult. Records that join a cluster get their cluster_id
            back-reference set; their geometry is left untouched.
        """
        result = MergeResult()
        if not self.enabled:
            result.candidates.extend(records)
            return result

        by_host: dict[str, list[IntersectionRecord]] = defaultdict(list)
        for record in records:
            by_host[record.host_id].append(record)

        for host_id in sorted(by_host):
            host_records = sorted(by_host[host_id], key=lambda r: r.conduit_id)
            groups = group_rects([r.rect for r in host_records], self.merge_threshold_mm)
            number = 0
            for group in groups:
                members = [host_records[i] for i in group]
                if len(members) == 1:
                    result.candidates.append(members[0])
                    continue
                number += 1
                cluster = self._build_cluster(
                    f"{host_id}:cluster-{number}", host_id, members, frames[host_id]
                )
                for member in members:
                    member.cluster_id = cluster.cluster_id
                result.candidates.append(cluster)
                result.clusters.append(cluster)
        return result

    def _build_cluster(
        self,
        cluster_id: str,
        host_id: str,
        members: list[IntersectionRecord],
        frame: LocalFrame,
    ) -> Cluster:
        rect = Rect2D.union(m.rect for m in members)
        center_u, center_v = rect.center
        depth = sum(m.local_point.z for m in members) / len(members)
        local_center = Vector3(center_u, center_v, depth)
        return Cluster(
            cluster_id=cluster_id,
            host_id=host_id,
            members=tuple(members),
            rect=rect,
            local_center=local_center,
            world_center=frame.to_world_point(local_center),
            label=format_label(round_up_5(rect.width), round_up_5(rect.height)),
        )
