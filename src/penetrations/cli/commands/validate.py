"""Validate command for checking scene files.

Checks a JSON scene for syntax and schema errors, then lists the elements
an analysis pass would skip (missing geometry, unsupported categories).
"""

from pathlib import Path
from typing import Annotated

import typer

from penetrations.application.config import (
    ConfigError,
    config_to_model_query,
    load_config,
)


def validate_command(
    scene_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON scene file to validate"),
    ],
) -> None:
    """Validate a penetration scene file.

    Exit codes:
        0 - Scene is valid (elements that would be skipped are listed)
        1 - Scene has errors and cannot be analyzed

    Example:
        penetrations validate scene.json
    """
    typer.echo(f"Validating {scene_file}...")
    typer.echo()

    try:
        config = load_config(scene_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    query = config_to_model_query(config)
    element_errors = query.element_errors()
    if element_errors:
        typer.echo("Warnings:")
        for error in element_errors:
            typer.echo(f"  {error.element_id}: {error} [{error.category}]")
        typer.echo()

    typer.echo(
        f"Validation passed: {len(query.hosts())} host(s), "
        f"{len(query.conduits())} conduit(s), "
        f"{len(element_errors)} element(s) will be skipped."
    )


def display_load_error(error: ConfigError) -> None:
    """Print a scene loading error to stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(
                f"    Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                f"{detail.get('message', 'Unknown error')}",
                err=True,
            )
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path") or "<root>"
            typer.echo(f"  {path}: {detail.get('message', 'Unknown error')}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, dict):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)
