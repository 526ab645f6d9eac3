"""Output formatters for displaying analysis results."""

from __future__ import annotations

from penetrations.application.dtos import AnalysisOutput
from penetrations.domain import FinalOpening


class OpeningTableFormatter:
    """Formats the final openings as a text table."""

    def format(self, openings: list[FinalOpening]) -> str:
        if not openings:
            return "No openings required."

        lines = [
            "PENETRATION OPENINGS",
            "=" * 96,
            f"{'Host':<12} {'Label':<18} {'W':>6} {'H':>6} {'Depth':>7}  "
            f"{'Surface':<22} {'Conduits'}",
            "-" * 96,
        ]
        for opening in openings:
            conduits = ", ".join(opening.constituent_ids)
            if opening.is_merged:
                conduits = f"[merged] {conduits}"
            lines.append(
                f"{opening.host_id:<12} {opening.label:<18} "
                f"{opening.width:>6.0f} {opening.height:>6.0f} {opening.depth:>7.0f}  "
                f"{opening.surface_id:<22} {conduits}"
            )
        lines.append("-" * 96)
        merged = sum(1 for o in openings if o.is_merged)
        lines.append(f"Total: {len(openings)} opening(s), {merged} merged")
        return "\n".join(lines)


class HostSummaryFormatter:
    """Formats crossing statistics and skipped elements."""

    def format(self, output: AnalysisOutput) -> str:
        stats = output.statistics
        lines = [
            "CROSSING SUMMARY",
            "=" * 48,
            f"{'':<8} {'Round':>8} {'Rect':>8}",
            f"{'Walls':<8} {stats.wall_round:>8} {stats.wall_rect:>8}",
            f"{'Slabs':<8} {stats.slab_round:>8} {stats.slab_rect:>8}",
        ]

        if stats.rows:
            lines.append("")
            lines.append(f"{'Host':<16} {'Kind':<6} {'Round':>8} {'Rect':>8}")
            lines.append("-" * 48)
            for row in stats.rows:
                lines.append(
                    f"{row.host_id:<16} {row.host_kind.value:<6} "
                    f"{row.round_count:>8} {row.rect_count:>8}"
                )

        if output.excluded:
            lines.append("")
            lines.append("EXCLUDED")
            for exclusion in output.excluded:
                lines.append(
                    f"  {exclusion.candidate.candidate_id} "
                    f"({exclusion.rule.value}): {exclusion.reason}"
                )

        if output.skipped:
            lines.append("")
            lines.append("SKIPPED")
            for skipped in output.skipped:
                lines.append(
                    f"  {skipped.element_id} [{skipped.stage}/{skipped.category}]: "
                    f"{skipped.reason}"
                )

        lines.append("")
        lines.append(
            f"Processed: {output.processed_count}  Skipped: {output.skipped_count}"
        )
        return "\n".join(lines)
