"""Report exporters for analysis results.

Exporters turn an AnalysisOutput into a file or string in a given format.
They register themselves with ExporterRegistry under their format name.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from penetrations.application.dtos import AnalysisOutput
    from penetrations.domain.entities import FinalOpening


logger = logging.getLogger(__name__)

# Version of the JSON report layout
REPORT_SCHEMA_VERSION = "1.0"


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all report exporters.

    Attributes:
        format_name: Registered format name (e.g., "json", "csv").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, output: AnalysisOutput, path: Path) -> None:
        """Write the report to a file."""
        ...

    def export_string(self, output: AnalysisOutput) -> str:
        """Return the report as a string."""
        ...


class ExporterRegistry:
    """Registry of exporter classes by format name.

    Example:
        @ExporterRegistry.register("json")
        class JsonReportExporter:
            format_name = "json"
            file_extension = "json"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Decorator registering an exporter class under format_name."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(f"Overwriting existing exporter for format '{format_name}'")
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up an exporter class.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            available = ", ".join(cls.available_formats())
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            ) from None

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


def _point(vector) -> list[float]:
    return [round(c, 3) for c in vector.as_tuple()]


def opening_to_dict(opening: FinalOpening) -> dict[str, Any]:
    """Plain-data form of a final opening."""
    return {
        "host_id": opening.host_id,
        "label": opening.label,
        "type_name": opening.type_name,
        "width": opening.width,
        "height": opening.height,
        "depth": round(opening.depth, 3),
        "placement_point": _point(opening.placement_point),
        "surface_id": opening.surface_id,
        "reference_direction": _point(opening.reference_direction),
        "is_merged": opening.is_merged,
        "constituent_ids": list(opening.constituent_ids),
    }


@ExporterRegistry.register("json")
class JsonReportExporter:
    """Full JSON report: openings, skipped elements, exclusions and counts.

    Attributes:
        indent: JSON indentation level.
        include_trace: Whether to include the decision trace lines.
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2, include_trace: bool = False) -> None:
        self.indent = indent
        self.include_trace = include_trace

    def export(self, output: AnalysisOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported JSON report to {path}")

    def export_string(self, output: AnalysisOutput) -> str:
        return json.dumps(self.build(output), indent=self.indent)

    def build(self, output: AnalysisOutput) -> dict[str, Any]:
        stats = output.statistics
        data: dict[str, Any] = {
            "schema_version": REPORT_SCHEMA_VERSION,
            "summary": {
                "processed": output.processed_count,
                "skipped": output.skipped_count,
                "excluded": len(output.excluded),
                "merged_clusters": len(output.clusters),
            },
            "openings": [opening_to_dict(o) for o in output.openings],
            "skipped": [
                {
                    "element_id": s.element_id,
                    "stage": s.stage,
                    "category": s.category,
                    "reason": s.reason,
                }
                for s in output.skipped
            ],
            "excluded": [
                {
                    "candidate_id": e.candidate.candidate_id,
                    "host_id": e.candidate.host_id,
                    "rule": e.rule.value,
                    "reason": e.reason,
                }
                for e in output.excluded
            ],
            "statistics": {
                "walls": {"round": stats.wall_round, "rect": stats.wall_rect},
                "slabs": {"round": stats.slab_round, "rect": stats.slab_rect},
                "hosts": [
                    {
                        "host_id": row.host_id,
                        "kind": row.host_kind.value,
                        "round": row.round_count,
                        "rect": row.rect_count,
                    }
                    for row in stats.rows
                ],
            },
            "opening_types": [
                {"name": t.name, "width": t.width, "height": t.height}
                for t in output.opening_types
            ],
        }
        if self.include_trace:
            data["trace"] = output.trace.lines
        return data


@ExporterRegistry.register("csv")
class CsvReportExporter:
    """One CSV row per final opening."""

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    HEADER: ClassVar[list[str]] = [
        "host_id",
        "label",
        "type_name",
        "width",
        "height",
        "depth",
        "x",
        "y",
        "z",
        "surface_id",
        "is_merged",
        "constituent_ids",
    ]

    def export(self, output: AnalysisOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8", newline="")
        logger.info(f"Exported CSV report to {path}")

    def export_string(self, output: AnalysisOutput) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(self.HEADER)
        for opening in output.openings:
            x, y, z = _point(opening.placement_point)
            writer.writerow(
                [
                    opening.host_id,
                    opening.label,
                    opening.type_name,
                    f"{opening.width:g}",
                    f"{opening.height:g}",
                    f"{opening.depth:g}",
                    f"{x:g}",
                    f"{y:g}",
                    f"{z:g}",
                    opening.surface_id,
                    "yes" if opening.is_merged else "no",
                    ";".join(opening.constituent_ids),
                ]
            )
        return buffer.getvalue()
