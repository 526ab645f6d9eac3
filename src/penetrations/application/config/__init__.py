"""Scene configuration schema and loading.

This package provides JSON-based scene loading and validation: Pydantic
models for the scene schema, a loader with categorized errors, CLI
override merging, and adapters to domain objects.

Public API:
    - SceneConfiguration: Root scene model
    - SettingsConfig / FilterConfig: Analysis settings models
    - HostConfig / ConduitConfig / LinkConfig: Scene element models
    - load_config: Load a scene from a JSON file
    - load_config_from_dict: Load a scene from a dictionary
    - ConfigError: Exception for scene loading errors
    - merge_config_with_cli: Apply CLI overrides
    - config_to_settings: Convert settings to AnalysisSettings
    - config_to_model_query: Build the scene model-query collaborator

Example:
    >>> from pathlib import Path
    >>> from penetrations.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("scene.json"))
    ...     print(f"Hosts: {len(config.hosts)}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from penetrations.application.config.adapter import (
    config_to_link_transforms,
    config_to_model_query,
    config_to_settings,
    link_to_transform,
)
from penetrations.application.config.loader import (
    ConfigError,
    format_json_path,
    load_config,
    load_config_from_dict,
)
from penetrations.application.config.merger import merge_config_with_cli
from penetrations.application.config.schema import (
    SUPPORTED_VERSIONS,
    BoxConfig,
    ConduitConfig,
    CylindricalFaceConfig,
    ExclusionKindConfig,
    ExclusionZoneConfig,
    FilterConfig,
    HostConfig,
    HostKindConfig,
    LinkConfig,
    ObstructionConfig,
    ObstructionKindConfig,
    PlanarFaceConfig,
    ProfileConfig,
    SceneConfiguration,
    SettingsConfig,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "BoxConfig",
    "ConduitConfig",
    "CylindricalFaceConfig",
    "ExclusionKindConfig",
    "ExclusionZoneConfig",
    "FilterConfig",
    "HostConfig",
    "HostKindConfig",
    "LinkConfig",
    "ObstructionConfig",
    "ObstructionKindConfig",
    "PlanarFaceConfig",
    "ProfileConfig",
    "SceneConfiguration",
    "SettingsConfig",
    # Loading
    "ConfigError",
    "format_json_path",
    "load_config",
    "load_config_from_dict",
    # Merging and adapters
    "config_to_link_transforms",
    "config_to_model_query",
    "config_to_settings",
    "link_to_transform",
    "merge_config_with_cli",
]
