"""Infrastructure layer - scene access, formatters and exporters."""

from .exporters import (
    CsvReportExporter,
    Exporter,
    ExporterRegistry,
    JsonReportExporter,
)
from .formatters import HostSummaryFormatter, OpeningTableFormatter
from .model_query import SceneModelQuery, probe_parameter

__all__ = [
    # Exporters
    "CsvReportExporter",
    "Exporter",
    "ExporterRegistry",
    "JsonReportExporter",
    # Formatters
    "HostSummaryFormatter",
    "OpeningTableFormatter",
    # Model query
    "SceneModelQuery",
    "probe_parameter",
]
