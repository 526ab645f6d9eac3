"""Unit tests for crossing statistics and the opening type catalog."""

import dataclasses
from typing import Callable

from penetrations.domain import HostKind, IntersectionRecord, ShapeKind
from penetrations.domain.services import IntersectionStatistics, OpeningTypeCatalog

MakeRecord = Callable[..., IntersectionRecord]


class TestIntersectionStatistics:
    """Tests for per-kind and per-host counts."""

    def test_counts_by_host_kind_and_shape(self, make_record: MakeRecord) -> None:
        records = [
            make_record("P1", 0, 0, shape=ShapeKind.CIRCULAR),
            make_record("P2", 0, 0, shape=ShapeKind.CIRCULAR),
            make_record("D1", 0, 0, shape=ShapeKind.RECTANGULAR),
            dataclasses.replace(
                make_record("T1", 0, 0, host_id="W1", shape=ShapeKind.TRAY),
                host_kind=HostKind.WALL,
            ),
        ]

        stats = IntersectionStatistics.from_records(records)

        assert stats.slab_round == 2
        assert stats.slab_rect == 1
        assert stats.wall_round == 0
        assert stats.wall_rect == 1
        assert stats.total == 4

    def test_rows_in_first_seen_order(self, make_record: MakeRecord) -> None:
        records = [
            make_record("A", 0, 0, host_id="S2"),
            make_record("B", 0, 0, host_id="S1", shape=ShapeKind.CIRCULAR),
            make_record("C", 0, 0, host_id="S2"),
        ]

        rows = IntersectionStatistics.from_records(records).rows

        assert [r.host_id for r in rows] == ["S2", "S1"]
        assert rows[0].rect_count == 2
        assert rows[1].round_count == 1
        assert rows[0].total == 2

    def test_empty(self) -> None:
        stats = IntersectionStatistics.from_records([])
        assert stats.total == 0
        assert stats.rows == []


class TestOpeningTypeCatalog:
    """Tests for the per-pass label memo."""

    def test_first_request_creates_type(self) -> None:
        catalog = OpeningTypeCatalog()

        opening_type = catalog.get_or_create("square 200x200", 200.0, 200.0)

        assert opening_type.name == "square 200x200"
        assert "square 200x200" in catalog
        assert len(catalog) == 1

    def test_same_label_returns_same_type(self) -> None:
        catalog = OpeningTypeCatalog()
        first = catalog.get_or_create("rect 500x300", 500.0, 300.0)
        second = catalog.get_or_create("rect 500x300", 999.0, 999.0)

        assert second is first
        assert second.width == 500.0
        assert len(catalog) == 1

    def test_type_uses_rounded_dimensions(self) -> None:
        """Two merged openings sharing a label get the size the label names."""
        catalog = OpeningTypeCatalog()
        first = catalog.get_or_create("rect 175x100", 172.0, 100.0)
        second = catalog.get_or_create("rect 175x100", 174.0, 100.0)

        assert second is first
        assert (first.width, first.height) == (175.0, 100.0)

    def test_types_in_creation_order(self) -> None:
        catalog = OpeningTypeCatalog()
        catalog.get_or_create("b", 1.0, 1.0)
        catalog.get_or_create("a", 2.0, 2.0)
        assert [t.name for t in catalog.types] == ["b", "a"]
