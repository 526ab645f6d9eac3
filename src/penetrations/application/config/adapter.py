"""Adapters from SceneConfiguration to domain objects.

Converts the Pydantic scene models into the analysis settings, the link
transforms and the model-query collaborator used by
AnalyzePenetrationsCommand.
"""

from typing import TYPE_CHECKING

from penetrations.application.config.schema import LinkConfig, SceneConfiguration
from penetrations.domain.settings import AnalysisSettings
from penetrations.domain.value_objects import RigidTransform, Vector3

if TYPE_CHECKING:
    from penetrations.infrastructure.model_query import SceneModelQuery


def config_to_settings(config: SceneConfiguration) -> AnalysisSettings:
    """Convert scene settings to AnalysisSettings.

    Example:
        >>> settings = config_to_settings(load_config(Path("scene.json")))
        >>> command = AnalyzePenetrationsCommand(settings)
    """
    s = config.settings
    return AnalysisSettings(
        clearance_mm=s.clearance_mm,
        merge_threshold_mm=s.merge_threshold_mm,
        opening_tolerance_mm=s.filters.opening_tolerance_mm,
        obstruction_probe_mm=s.filters.obstruction_probe_mm,
        grazing_threshold=s.filters.grazing_threshold,
        abort_on_unsupported=s.abort_on_unsupported,
    )


def link_to_transform(link: LinkConfig) -> RigidTransform:
    """Transform placing a linked model in the host model."""
    return RigidTransform.from_rotation_z(
        link.rotation_z_deg, Vector3.from_sequence(link.translation)
    )


def config_to_link_transforms(config: SceneConfiguration) -> dict[str, RigidTransform]:
    """Map each link name to its transform."""
    return {link.name: link_to_transform(link) for link in config.links}


def config_to_model_query(config: SceneConfiguration) -> "SceneModelQuery":
    """Build the scene model-query collaborator for a loaded scene."""
    from penetrations.infrastructure.model_query import SceneModelQuery

    return SceneModelQuery(config)
