"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from penetrations.application.commands import AnalyzePenetrationsCommand
    from penetrations.application.config.schema import SceneConfiguration
    from penetrations.domain.services import (
        CoordinateFrameMapper,
        IntersectionDetector,
        PlacementSurfaceSelector,
    )
    from penetrations.domain.settings import AnalysisSettings
    from penetrations.infrastructure.exporters import Exporter
    from penetrations.infrastructure.formatters import (
        HostSummaryFormatter,
        OpeningTableFormatter,
    )
    from penetrations.infrastructure.model_query import SceneModelQuery


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Services that do not depend on analysis settings are created lazily
    and cached. Settings-dependent services are built per command so that
    two passes with different settings never share state.

    Example:
        ```python
        factory = get_factory()
        command = factory.create_analyze_command(settings)
        output = command.execute(factory.create_model_query(config))
        ```
    """

    _detector: "IntersectionDetector | None" = field(
        default=None, init=False, repr=False
    )
    _placement_selector: "PlacementSurfaceSelector | None" = field(
        default=None, init=False, repr=False
    )
    _frame_mapper: "CoordinateFrameMapper | None" = field(
        default=None, init=False, repr=False
    )

    def get_detector(self) -> "IntersectionDetector":
        """Get or create the intersection detector."""
        if self._detector is None:
            from penetrations.domain.services import IntersectionDetector

            self._detector = IntersectionDetector()
        return self._detector

    def get_placement_selector(self) -> "PlacementSurfaceSelector":
        """Get or create the placement surface selector."""
        if self._placement_selector is None:
            from penetrations.domain.services import PlacementSurfaceSelector

            self._placement_selector = PlacementSurfaceSelector()
        return self._placement_selector

    def get_frame_mapper(self) -> "CoordinateFrameMapper":
        """Get or create the coordinate frame mapper."""
        if self._frame_mapper is None:
            from penetrations.domain.services import CoordinateFrameMapper

            self._frame_mapper = CoordinateFrameMapper()
        return self._frame_mapper

    def get_opening_table_formatter(self) -> "OpeningTableFormatter":
        from penetrations.infrastructure.formatters import OpeningTableFormatter

        return OpeningTableFormatter()

    def get_host_summary_formatter(self) -> "HostSummaryFormatter":
        from penetrations.infrastructure.formatters import HostSummaryFormatter

        return HostSummaryFormatter()

    def get_exporter(self, format_name: str) -> "Exporter":
        """Create an exporter for a registered format.

        Raises:
            KeyError: If the format is not registered.
        """
        from penetrations.infrastructure.exporters import ExporterRegistry

        return ExporterRegistry.get(format_name)()

    def create_model_query(self, config: "SceneConfiguration") -> "SceneModelQuery":
        """Build the scene model-query collaborator."""
        from penetrations.infrastructure.model_query import SceneModelQuery

        return SceneModelQuery(config, frame_mapper=self.get_frame_mapper())

    def create_analyze_command(
        self, settings: "AnalysisSettings | None" = None
    ) -> "AnalyzePenetrationsCommand":
        """Create AnalyzePenetrationsCommand for the given settings."""
        from penetrations.application.commands import AnalyzePenetrationsCommand

        return AnalyzePenetrationsCommand(
            settings=settings,
            detector=self.get_detector(),
            placement_selector=self.get_placement_selector(),
        )


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
