"""CLI override support for scene settings.

Precedence is CLI argument > scene file value > default. Only CLI
arguments that are not None override the scene.
"""

from penetrations.application.config.schema import SceneConfiguration, SettingsConfig


def merge_config_with_cli(
    config: SceneConfiguration,
    *,
    clearance_mm: float | None = None,
    merge_threshold_mm: float | None = None,
) -> SceneConfiguration:
    """Apply CLI overrides to a scene's settings.

    Args:
        config: The loaded scene.
        clearance_mm: Override for settings.clearance_mm (if not None).
        merge_threshold_mm: Override for settings.merge_threshold_mm
            (if not None).

    Returns:
        A new SceneConfiguration; the input is left unchanged.

    Raises:
        pydantic.ValidationError: If an override is out of range.

    Example:
        >>> merged = merge_config_with_cli(config, merge_threshold_mm=100)
        >>> merged.settings.merge_threshold_mm
        100.0
    """
    settings_data = config.settings.model_dump()
    if clearance_mm is not None:
        settings_data["clearance_mm"] = clearance_mm
    if merge_threshold_mm is not None:
        settings_data["merge_threshold_mm"] = merge_threshold_mm

    return config.model_copy(
        update={"settings": SettingsConfig.model_validate(settings_data)}
    )
