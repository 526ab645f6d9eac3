"""Unit tests for vectors, transforms, boxes, rectangles and frames."""

import math

import pytest

from penetrations.domain import (
    BoundingBox3D,
    DegenerateGeometryError,
    LocalFrame,
    Rect2D,
    RigidTransform,
    Vector3,
)


class TestVector3:
    """Tests for Vector3 arithmetic."""

    def test_cross_of_basis_is_right_handed(self) -> None:
        """X x Y should be Z."""
        assert Vector3.basis_x().cross(Vector3.basis_y()) == Vector3.basis_z()

    def test_normalized_has_unit_length(self) -> None:
        v = Vector3(3.0, 4.0, 0.0).normalized()
        assert v.length == pytest.approx(1.0)
        assert v.x == pytest.approx(0.6)

    def test_normalize_zero_raises_degenerate(self) -> None:
        """Zero-length vectors cannot be normalized."""
        with pytest.raises(DegenerateGeometryError):
            Vector3.zero().normalized()

    def test_degenerate_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Vector3.zero().normalized()

    def test_from_sequence_requires_three_items(self) -> None:
        with pytest.raises(ValueError):
            Vector3.from_sequence([1.0, 2.0])

    def test_scalar_multiplication_both_sides(self) -> None:
        v = Vector3(1.0, 2.0, 3.0)
        assert v * 2 == Vector3(2.0, 4.0, 6.0)
        assert 2 * v == Vector3(2.0, 4.0, 6.0)


class TestRigidTransform:
    """Tests for RigidTransform."""

    def test_identity_leaves_points_unchanged(self) -> None:
        p = Vector3(1.0, 2.0, 3.0)
        assert RigidTransform.identity().apply_point(p) == p
        assert RigidTransform.identity().is_identity

    def test_rotation_z_90(self) -> None:
        """A 90 degree plan rotation maps X onto Y."""
        t = RigidTransform.from_rotation_z(90.0)
        v = t.apply_vector(Vector3.basis_x())
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)

    def test_translation_applies_to_points_not_vectors(self) -> None:
        t = RigidTransform.from_rotation_z(0.0, Vector3(100.0, 0.0, 0.0))
        assert t.apply_point(Vector3.zero()) == Vector3(100.0, 0.0, 0.0)
        assert t.apply_vector(Vector3.basis_x()) == Vector3.basis_x()

    def test_rotation_must_be_3x3(self) -> None:
        with pytest.raises(ValueError):
            RigidTransform(rotation=((1.0, 0.0), (0.0, 1.0)))


class TestBoundingBox3D:
    """Tests for BoundingBox3D."""

    def test_min_above_max_rejected(self) -> None:
        with pytest.raises(ValueError):
            BoundingBox3D(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 1.0))

    def test_touching_boxes_overlap(self) -> None:
        """Closed intervals: sharing a face counts as overlap."""
        a = BoundingBox3D(Vector3(0, 0, 0), Vector3(1, 1, 1))
        b = BoundingBox3D(Vector3(1, 0, 0), Vector3(2, 1, 1))
        assert a.overlaps(b)
        assert b.overlaps(a)

    def test_separated_boxes_do_not_overlap(self) -> None:
        a = BoundingBox3D(Vector3(0, 0, 0), Vector3(1, 1, 1))
        b = BoundingBox3D(Vector3(0, 0, 1.5), Vector3(1, 1, 2))
        assert not a.overlaps(b)
        assert a.intersection(b) is None

    def test_intersection_region(self) -> None:
        a = BoundingBox3D(Vector3(0, 0, 0), Vector3(10, 10, 10))
        b = BoundingBox3D(Vector3(5, -5, 2), Vector3(15, 5, 4))
        overlap = a.intersection(b)
        assert overlap == BoundingBox3D(Vector3(5, 0, 2), Vector3(10, 5, 4))
        assert overlap.center == Vector3(7.5, 2.5, 3.0)

    def test_transformed_uses_all_corners(self) -> None:
        """A 45 degree rotation of a square grows its axis-aligned box."""
        box = BoundingBox3D(Vector3(-1, -1, 0), Vector3(1, 1, 1))
        rotated = box.transformed(RigidTransform.from_rotation_z(45.0))
        assert rotated.max_point.x == pytest.approx(math.sqrt(2))
        assert rotated.min_point.y == pytest.approx(-math.sqrt(2))
        assert rotated.max_point.z == pytest.approx(1.0)

    def test_transformed_by_identity_is_same_box(self) -> None:
        box = BoundingBox3D(Vector3(0, 0, 0), Vector3(1, 2, 3))
        assert box.transformed(RigidTransform.identity()) is box

    def test_expanded_and_contains(self) -> None:
        box = BoundingBox3D(Vector3(0, 0, 0), Vector3(10, 10, 10)).expanded(5)
        assert box.contains_point(Vector3(-5, 15, 0))
        assert not box.contains_point(Vector3(-5.1, 0, 0))

    def test_extent_along_axis(self) -> None:
        box = BoundingBox3D(Vector3(0, 0, 0), Vector3(6000, 200, 3000))
        assert box.extent_along(Vector3(0, 1, 0)) == 200


class TestRect2D:
    """Tests for Rect2D."""

    def test_from_center(self) -> None:
        r = Rect2D.from_center(80.0, 0.0, 100.0, 100.0)
        assert (r.min_u, r.max_u, r.min_v, r.max_v) == (30.0, 130.0, -50.0, 50.0)
        assert r.center == (80.0, 0.0)

    def test_union_spans_edges(self) -> None:
        a = Rect2D.from_center(0.0, 0.0, 100.0, 100.0)
        b = Rect2D.from_center(80.0, 0.0, 100.0, 100.0)
        u = Rect2D.union([a, b])
        assert (u.width, u.height) == (180.0, 100.0)
        assert u.contains(a) and u.contains(b)

    def test_union_of_nothing_rejected(self) -> None:
        with pytest.raises(ValueError):
            Rect2D.union([])

    def test_overlap_is_closed(self) -> None:
        a = Rect2D(0.0, 10.0, 0.0, 10.0)
        assert a.overlaps(Rect2D(10.0, 20.0, 0.0, 10.0))
        assert not a.overlaps(Rect2D(10.5, 20.0, 0.0, 10.0))

    def test_inflated(self) -> None:
        a = Rect2D(0.0, 10.0, 0.0, 10.0).inflated(1.0)
        assert (a.min_u, a.max_u, a.min_v, a.max_v) == (-1.0, 11.0, -1.0, 11.0)


class TestLocalFrame:
    """Tests for LocalFrame validation and mapping."""

    def test_rejects_non_unit_axis(self) -> None:
        with pytest.raises(ValueError):
            LocalFrame(
                origin=Vector3.zero(),
                right=Vector3(2.0, 0.0, 0.0),
                up=Vector3.basis_y(),
                normal=Vector3.basis_z(),
            )

    def test_rejects_non_perpendicular_axes(self) -> None:
        with pytest.raises(ValueError):
            LocalFrame(
                origin=Vector3.zero(),
                right=Vector3.basis_x(),
                up=Vector3.basis_x(),
                normal=Vector3.basis_z(),
            )

    def test_local_world_round_trip(self) -> None:
        frame = LocalFrame(
            origin=Vector3(100.0, 200.0, 0.0),
            right=Vector3(0.0, 1.0, 0.0),
            up=Vector3(0.0, 0.0, 1.0),
            normal=Vector3(1.0, 0.0, 0.0),
        )
        world = Vector3(150.0, 260.0, 70.0)
        local = frame.to_local_point(world)
        assert local == Vector3(60.0, 70.0, 50.0)
        assert frame.to_world_point(local) == world
