"""Placement surface selection for final openings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..entities import HostSurface
from ..exceptions import DegenerateGeometryError, PlacementSurfaceError
from ..faces import HostFace
from ..value_objects import Vector3

logger = logging.getLogger(__name__)

__all__ = ["PlacementChoice", "PlacementSurfaceSelector", "reference_direction"]


def reference_direction(normal: Vector3) -> Vector3:
    """In-plane reference direction for a face normal.

    Uses normal x Z, or normal x X when the normal is vertical.
    """
    direction = normal.cross(Vector3.basis_z())
    if direction.is_zero(1e-6):
        direction = normal.cross(Vector3.basis_x())
    return direction.normalized()


@dataclass(frozen=True)
class PlacementChoice:
    """The face an opening is placed on.

    Attributes:
        face: Chosen face.
        point: Target point projected onto the face.
        normal: Face normal at that point.
        reference_direction: In-plane reference direction.
        score: |normal . preferred direction| of the chosen face.
        distance: Distance from the target point to the face.
    """

    face: HostFace
    point: Vector3
    normal: Vector3
    reference_direction: Vector3
    score: float
    distance: float

    @property
    def surface_id(self) -> str:
        return self.face.face_id


class PlacementSurfaceSelector:
    """Picks the host face most perpendicular to the conduit.

    Faces are ranked by |normal . preferred direction| descending, then by
    distance from the target point ascending. Faces whose projection or
    normal cannot be evaluated are skipped.
    """

    def select(
        self,
        host: HostSurface,
        target: Vector3,
        preferred_direction: Vector3,
    ) -> PlacementChoice:
        """Choose a placement face.

        Args:
            host: Host to place on.
            target: Approximate world point of the opening.
            preferred_direction: Usually the conduit axis.

        Returns:
            The best PlacementChoice.

        Raises:
            PlacementSurfaceError: If the host has no faces or none can be
                evaluated.
        """
        faces = host.bounding_faces()
        if not faces:
            raise PlacementSurfaceError(
                f"Host {host.host_id} has no placement faces", element_id=host.host_id
            )

        choices: list[PlacementChoice] = []
        for face in faces:
            try:
                choices.append(self._evaluate(face, target, preferred_direction))
            except (DegenerateGeometryError, ArithmeticError) as exc:
                logger.debug(f"Ignoring face {face.face_id}: {exc}")

        if not choices:
            raise PlacementSurfaceError(
                f"No usable placement face on host {host.host_id}",
                element_id=host.host_id,
            )

        choices.sort(key=lambda c: (-c.score, c.distance))
        return choices[0]

    def _evaluate(
        self, face: HostFace, target: Vector3, preferred: Vector3
    ) -> PlacementChoice:
        projection = face.project(target)
        if projection is None:
            point, distance = target, float("inf")
        else:
            point, distance = projection.point, projection.distance
        normal = face.normal_at(point).normalized()
        return PlacementChoice(
            face=face,
            point=point,
            normal=normal,
            reference_direction=reference_direction(normal),
            score=abs(normal.dot(preferred.normalized())),
            distance=distance,
        )
