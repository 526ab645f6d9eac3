"""Unit tests for GapAnalyzer."""

from typing import Callable

import pytest

from penetrations.domain import IntersectionRecord
from penetrations.domain.services import GapAnalyzer

MakeRecord = Callable[..., IntersectionRecord]


class TestNearestGap:
    """Tests for the edge gap between two openings."""

    def test_gap_subtracts_both_radii(self, make_record: MakeRecord) -> None:
        a = make_record("A", 0.0, 0.0)
        b = make_record("B", 150.0, 0.0)
        assert GapAnalyzer(100.0).nearest_gap(a, [a, b]) == pytest.approx(50.0)

    def test_overlapping_openings_have_zero_gap(self, make_record: MakeRecord) -> None:
        a = make_record("A", 0.0, 0.0)
        b = make_record("B", 30.0, 40.0)
        assert GapAnalyzer(100.0).nearest_gap(a, [a, b]) == 0.0

    def test_nearest_of_several(self, make_record: MakeRecord) -> None:
        a = make_record("A", 0.0, 0.0)
        far = make_record("B", 1000.0, 0.0)
        near = make_record("C", 0.0, 300.0)
        assert GapAnalyzer(100.0).nearest_gap(a, [a, far, near]) == pytest.approx(200.0)

    def test_alone_has_no_gap(self, make_record: MakeRecord) -> None:
        a = make_record("A", 0.0, 0.0)
        assert GapAnalyzer(100.0).nearest_gap(a, [a]) is None


class TestAnalyze:
    """Tests for annotating records with gaps."""

    def test_gap_below_threshold_attached(self, make_record: MakeRecord) -> None:
        records = [make_record("A", 0.0, 0.0), make_record("B", 150.0, 0.0)]

        attached = GapAnalyzer(100.0).analyze(records)

        assert attached == 2
        assert records[0].gap == pytest.approx(50.0)
        assert records[1].gap == pytest.approx(50.0)

    def test_gap_at_threshold_not_attached(self, make_record: MakeRecord) -> None:
        records = [make_record("A", 0.0, 0.0), make_record("B", 150.0, 0.0)]

        assert GapAnalyzer(50.0).analyze(records) == 0
        assert records[0].gap is None

    def test_zero_threshold_attaches_nothing(self, make_record: MakeRecord) -> None:
        records = [make_record("A", 0.0, 0.0), make_record("B", 10.0, 0.0)]
        assert GapAnalyzer(0.0).analyze(records) == 0

    def test_hosts_are_independent(self, make_record: MakeRecord) -> None:
        records = [
            make_record("A", 0.0, 0.0, host_id="S1"),
            make_record("B", 0.0, 0.0, host_id="S2"),
        ]
        assert GapAnalyzer(100.0).analyze(records) == 0
        assert all(r.gap is None for r in records)
