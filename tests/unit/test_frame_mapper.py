"""Unit tests for CoordinateFrameMapper."""

import math

import pytest

from penetrations.domain import DegenerateGeometryError, HostKind, HostSurface, Vector3
from penetrations.domain.services import CoordinateFrameMapper


@pytest.fixture
def mapper() -> CoordinateFrameMapper:
    return CoordinateFrameMapper()


class TestBuildFrame:
    """Tests for building host frames."""

    def test_slab_frame_is_world_axes(self, mapper: CoordinateFrameMapper) -> None:
        frame = mapper.build_frame(HostKind.SLAB, Vector3(1.0, 2.0, 3.0))
        assert frame.right == Vector3.basis_x()
        assert frame.up == Vector3.basis_y()
        assert frame.normal == Vector3.basis_z()
        assert frame.origin == Vector3(1.0, 2.0, 3.0)

    def test_slab_ignores_orientation(self, mapper: CoordinateFrameMapper) -> None:
        frame = mapper.build_frame(HostKind.SLAB, Vector3.zero(), Vector3(1.0, 0.0, 0.0))
        assert frame.normal == Vector3.basis_z()

    def test_wall_normal_is_orientation(self, mapper: CoordinateFrameMapper) -> None:
        """A wall facing +Y gets Up = Z and Right = Normal rotated in plan."""
        frame = mapper.build_frame(HostKind.WALL, Vector3.zero(), Vector3(0.0, 2.0, 0.0))
        assert frame.normal == Vector3(0.0, 1.0, 0.0)
        assert frame.up == Vector3(0.0, 0.0, 1.0)
        assert frame.right == Vector3(-1.0, 0.0, 0.0)

    def test_diagonal_wall_keeps_up_vertical(self, mapper: CoordinateFrameMapper) -> None:
        frame = mapper.build_frame(HostKind.WALL, Vector3.zero(), Vector3(1.0, 1.0, 0.0))
        s = 1.0 / math.sqrt(2.0)
        assert frame.normal.x == pytest.approx(s)
        assert frame.right.x == pytest.approx(-s)
        assert frame.right.y == pytest.approx(s)
        assert frame.up.z == pytest.approx(1.0)

    def test_frame_is_right_handed(self, mapper: CoordinateFrameMapper) -> None:
        frame = mapper.build_frame(HostKind.WALL, Vector3.zero(), Vector3(3.0, -4.0, 0.0))
        cross = frame.right.cross(frame.up)
        assert cross.x == pytest.approx(frame.normal.x)
        assert cross.y == pytest.approx(frame.normal.y)
        assert cross.z == pytest.approx(frame.normal.z)

    def test_vertical_wall_orientation_falls_back_to_x(
        self, mapper: CoordinateFrameMapper
    ) -> None:
        frame = mapper.build_frame(HostKind.WALL, Vector3.zero(), Vector3(0.0, 0.0, 1.0))
        assert frame.right == Vector3.basis_x()
        assert frame.up == Vector3.basis_y()

    def test_zero_orientation_raises(self, mapper: CoordinateFrameMapper) -> None:
        with pytest.raises(DegenerateGeometryError):
            mapper.build_frame(HostKind.WALL, Vector3.zero(), Vector3.zero())

    def test_missing_wall_orientation_raises(self, mapper: CoordinateFrameMapper) -> None:
        with pytest.raises(DegenerateGeometryError):
            mapper.build_frame(HostKind.WALL, Vector3.zero())


class TestMapping:
    """Tests for world to local mapping through a host."""

    def test_wall_local_coordinates(
        self, mapper: CoordinateFrameMapper, wall_host: HostSurface
    ) -> None:
        """A point 1000 mm left of the wall centre along -X has u = +1000."""
        local = mapper.to_local_point(wall_host, Vector3(2000.0, 100.0, 1500.0))
        assert local == Vector3(1000.0, 0.0, 0.0)

    def test_local_vector_of_normal(
        self, mapper: CoordinateFrameMapper, wall_host: HostSurface
    ) -> None:
        local = mapper.to_local_vector(wall_host, Vector3(0.0, 1.0, 0.0))
        assert local == Vector3(0.0, 0.0, 1.0)

    def test_world_round_trip(
        self, mapper: CoordinateFrameMapper, wall_host: HostSurface
    ) -> None:
        world = Vector3(1234.0, 50.0, 321.0)
        local = mapper.to_local_point(wall_host, world)
        assert mapper.to_world_point(wall_host, local) == world
