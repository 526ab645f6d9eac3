"""Coordinate frame mapping for host surfaces.

Builds the host-local (Right, Up, Normal) frame from a host's intrinsic
orientation and expresses world points and vectors in it.
"""

from __future__ import annotations

from ..entities import HostSurface
from ..exceptions import DegenerateGeometryError
from ..value_objects import HostKind, LocalFrame, Vector3

__all__ = ["CoordinateFrameMapper"]


class CoordinateFrameMapper:
    """Builds host frames and maps world geometry into them.

    For a wall the normal is the wall orientation vector and Up is as close
    to world Z as the orientation allows. For a slab the normal is world Z,
    Right is world X and Up is world Y.
    """

    def build_frame(
        self,
        kind: HostKind,
        origin: Vector3,
        orientation: Vector3 | None = None,
    ) -> LocalFrame:
        """Build the local frame of a host.

        Args:
            kind: Wall or slab.
            origin: World point used as the local origin.
            orientation: Wall orientation (exterior normal). Ignored for slabs.

        Returns:
            A right-handed LocalFrame.

        Raises:
            DegenerateGeometryError: If a wall orientation has zero length.
        """
        if kind is HostKind.SLAB:
            return LocalFrame(
                origin=origin,
                right=Vector3.basis_x(),
                up=Vector3.basis_y(),
                normal=Vector3.basis_z(),
            )

        if orientation is None:
            raise DegenerateGeometryError("Wall orientation is required")
        normal = orientation.normalized()
        right = Vector3.basis_z().cross(normal)
        if right.is_zero(1e-6):
            # Orientation is vertical; any horizontal axis works as Right.
            right = Vector3.basis_x()
        right = right.normalized()
        up = normal.cross(right).normalized()
        return LocalFrame(origin=origin, right=right, up=up, normal=normal)

    def to_local_point(self, host: HostSurface, point: Vector3) -> Vector3:
        return host.frame.to_local_point(point)

    def to_local_vector(self, host: HostSurface, vector: Vector3) -> Vector3:
        return host.frame.to_local_vector(vector)

    def to_world_point(self, host: HostSurface, local: Vector3) -> Vector3:
        return host.frame.to_world_point(local)
