"""Typer CLI for MEP penetration analysis."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from penetrations.application import get_factory
from penetrations.application.config import (
    ConfigError,
    config_to_settings,
    load_config,
    merge_config_with_cli,
)
from penetrations.cli.commands import display_load_error, validate_command
from penetrations.domain import AnalysisAbortedError
from penetrations.infrastructure import ExporterRegistry, JsonReportExporter

app = typer.Typer(
    name="penetrations",
    help="Find where pipes, ducts and cable trays cross walls and slabs, and size the openings.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.command()
def analyze(
    scene_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON scene file"),
    ],
    clearance: Annotated[
        float | None,
        typer.Option("--clearance", "-c", help="Clearance per side in mm"),
    ] = None,
    merge_threshold: Annotated[
        float | None,
        typer.Option(
            "--merge-threshold",
            "-m",
            help="Merge openings closer than this many mm (0 disables merging)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, csv"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file"),
    ] = None,
    show_trace: Annotated[
        bool,
        typer.Option("--trace", help="Include the decision trace"),
    ] = False,
) -> None:
    """Analyze a scene and list the openings to cut.

    Example:
        penetrations analyze scene.json --merge-threshold 100 --format json
    """
    output_format = output_format.lower()
    if output_format != "text" and not ExporterRegistry.is_registered(output_format):
        available = ", ".join(["text", *ExporterRegistry.available_formats()])
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {available}", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(scene_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        config = merge_config_with_cli(
            config, clearance_mm=clearance, merge_threshold_mm=merge_threshold
        )
    except ValidationError as e:
        typer.echo("Invalid command line override:", err=True)
        for err in e.errors():
            typer.echo(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}", err=True)
        raise typer.Exit(code=1)

    factory = get_factory()
    command = factory.create_analyze_command(config_to_settings(config))
    try:
        result = command.execute(factory.create_model_query(config))
    except AnalysisAbortedError as e:
        typer.echo(f"Analysis aborted: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "text":
        parts = [
            factory.get_opening_table_formatter().format(result.openings),
            factory.get_host_summary_formatter().format(result),
        ]
        if show_trace:
            parts.append("DECISION TRACE\n" + str(result.trace))
        content = "\n\n".join(parts) + "\n"
        if output_file is not None:
            output_file.write_text(content, encoding="utf-8")
            typer.echo(f"Report written to {output_file}")
        else:
            typer.echo(content, nl=False)
        return

    if output_format == "json":
        exporter = JsonReportExporter(include_trace=show_trace)
    else:
        exporter = factory.get_exporter(output_format)
    if output_file is not None:
        exporter.export(result, output_file)
        typer.echo(f"Report written to {output_file}")
    else:
        typer.echo(exporter.export_string(result))


if __name__ == "__main__":
    app()
