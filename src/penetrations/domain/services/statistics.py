"""Crossing counts per host and per host kind."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..entities import IntersectionRecord
from ..value_objects import HostKind

__all__ = ["HostStatRow", "IntersectionStatistics"]


@dataclass
class HostStatRow:
    """Round and rectangular crossings through one host."""

    host_id: str
    host_kind: HostKind
    round_count: int = 0
    rect_count: int = 0

    @property
    def total(self) -> int:
        return self.round_count + self.rect_count


@dataclass
class IntersectionStatistics:
    """Crossing counts of one pass, taken before merging.

    Attributes:
        wall_round: Round conduits through walls.
        wall_rect: Rectangular conduits through walls.
        slab_round: Round conduits through slabs.
        slab_rect: Rectangular conduits through slabs.
        rows: One row per host, in first-seen order.
    """

    wall_round: int = 0
    wall_rect: int = 0
    slab_round: int = 0
    slab_rect: int = 0
    rows: list[HostStatRow] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[IntersectionRecord]) -> "IntersectionStatistics":
        stats = cls()
        by_host: dict[str, HostStatRow] = {}
        for record in records:
            row = by_host.get(record.host_id)
            if row is None:
                row = HostStatRow(host_id=record.host_id, host_kind=record.host_kind)
                by_host[record.host_id] = row
                stats.rows.append(row)
            is_round = record.shape.is_round
            if is_round:
                row.round_count += 1
            else:
                row.rect_count += 1
            if record.host_kind is HostKind.WALL:
                if is_round:
                    stats.wall_round += 1
                else:
                    stats.wall_rect += 1
            else:
                if is_round:
                    stats.slab_round += 1
                else:
                    stats.slab_rect += 1
        return stats

    @property
    def total(self) -> int:
        return self.wall_round + self.wall_rect + self.slab_round + self.slab_rect
