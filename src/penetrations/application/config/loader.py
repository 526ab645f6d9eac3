"""Scene file loader with error reporting.

Loads JSON scene files and validates them against the scene schema. File
system errors, JSON syntax errors and schema violations are all reported
as ConfigError with a category and per-field details.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from penetrations.application.config.schema import SceneConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised when a scene cannot be loaded.

    Attributes:
        message: The primary error message.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: Path of the scene file, if any.
        details: Per-error details (JSON path, message, value) for
            validation errors; line and column for JSON errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path.

    Examples:
        >>> format_json_path(("settings", "clearance_mm"))
        'settings.clearance_mm'
        >>> format_json_path(("hosts", 0, "bbox", "min"))
        'hosts[0].bbox.min'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Scene validation failed:"]
    for detail in details:
        location = detail["path"] or "<root>"
        value = detail.get("value")
        if value is None or isinstance(value, dict):
            lines.append(f"  - {location}: {detail['message']}")
        else:
            lines.append(f"  - {location}: {detail['message']} (got: {value!r})")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> SceneConfiguration:
    try:
        return SceneConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> SceneConfiguration:
    """Load and validate a scene from a JSON file.

    Args:
        path: Path to the scene file.

    Returns:
        The validated SceneConfiguration.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Scene file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading scene file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading scene file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in scene file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    config = _validate(data, path)
    logger.debug(
        f"Loaded scene {path}: {len(config.hosts)} host(s), "
        f"{len(config.conduits)} conduit(s)"
    )
    return config


def load_config_from_dict(data: dict[str, Any]) -> SceneConfiguration:
    """Validate a scene given as a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
