"""Broad-phase clash detection between hosts and conduits.

The detector compares axis-aligned bounding boxes. It is a conservative
approximation: a conduit grazing a host corner can register as a
candidate, but a genuine crossing of axis-aligned geometry is never
missed. Later stages (exclusion and grazing filters) absorb most false
positives.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..entities import ConduitSegment, HostSurface, IntersectionRecord, SkippedElement
from ..exceptions import (
    DegenerateGeometryError,
    MissingGeometryError,
    PenetrationError,
)
from ..value_objects import BoundingBox3D, RigidTransform, Vector3

__all__ = ["DetectionResult", "IntersectionDetector"]


@dataclass
class DetectionResult:
    """Records produced by one detection run plus the skipped conduits."""

    records: list[IntersectionRecord] = field(default_factory=list)
    skipped: list[SkippedElement] = field(default_factory=list)


@dataclass(frozen=True)
class _PreparedConduit:
    conduit: ConduitSegment
    box: BoundingBox3D
    axis: Vector3


class IntersectionDetector:
    """Finds (host, conduit) pairs whose bounding boxes overlap."""

    def detect(
        self,
        hosts: list[HostSurface],
        conduits: list[tuple[ConduitSegment, RigidTransform]],
    ) -> DetectionResult:
        """Detect candidate crossings.

        Each conduit box is moved into host model coordinates with its
        source transform before testing. Passing pairs produce one record
        whose world point is the centroid of the overlap box.

        Args:
            hosts: Host surfaces of the pass.
            conduits: Conduits paired with their source transforms
                (identity for the primary model).

        Returns:
            DetectionResult with at most one record per (host, conduit) pair.
        """
        result = DetectionResult()
        prepared: list[_PreparedConduit] = []

        for conduit, transform in conduits:
            try:
                prepared.append(self._prepare(conduit, transform))
            except PenetrationError as exc:
                result.skipped.append(
                    SkippedElement(
                        element_id=conduit.conduit_id,
                        stage="detect",
                        category=exc.category,
                        reason=str(exc),
                    )
                )

        seen: set[tuple[str, str]] = set()
        for host in hosts:
            for item in prepared:
                key = (host.host_id, item.conduit.conduit_id)
                if key in seen:
                    continue
                overlap = host.bounding_box.intersection(item.box)
                if overlap is None:
                    continue
                seen.add(key)
                result.records.append(self._make_record(host, item, overlap))

        return result

    def _prepare(
        self, conduit: ConduitSegment, transform: RigidTransform
    ) -> _PreparedConduit:
        if conduit.bounding_box is None:
            raise MissingGeometryError(
                f"Conduit {conduit.conduit_id} has no bounding box",
                element_id=conduit.conduit_id,
            )
        try:
            axis = transform.apply_vector(conduit.direction).normalized()
        except DegenerateGeometryError as exc:
            raise DegenerateGeometryError(
                f"Conduit {conduit.conduit_id} has a zero-length axis",
                element_id=conduit.conduit_id,
            ) from exc
        return _PreparedConduit(
            conduit=conduit,
            box=conduit.bounding_box.transformed(transform),
            axis=axis,
        )

    def _make_record(
        self,
        host: HostSurface,
        item: _PreparedConduit,
        overlap: BoundingBox3D,
    ) -> IntersectionRecord:
        world_point = overlap.center
        conduit = item.conduit
        return IntersectionRecord(
            host_id=host.host_id,
            conduit_id=conduit.conduit_id,
            host_kind=host.kind,
            shape=conduit.shape,
            world_point=world_point,
            local_point=host.frame.to_local_point(world_point),
            world_axis=item.axis,
            local_axis=host.frame.to_local_vector(item.axis),
            element_width=conduit.width,
            element_height=conduit.height,
            is_diagonal=conduit.is_diagonal,
        )
