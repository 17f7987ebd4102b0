"""Generate command: calculate and print the cut list of a project file."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cutlist.application import CutListOutput, GenerateCutListCommand
from cutlist.application.config import (
    ConfigError,
    ProjectConfiguration,
    config_to_project,
    load_config,
)
from cutlist.cli.commands.validate import display_load_error
from cutlist.infrastructure import CsvExporter, CutListFormatter, JsonExporter

OUTPUT_FORMATS = ("table", "csv", "csv-generic", "json")


def configure_logging(verbose: bool) -> None:
    """Send engine diagnostics to stderr; per-rule tracing with ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def render_output(
    output: CutListOutput,
    config: ProjectConfiguration,
    output_format: str,
    consolidate: bool,
) -> str:
    """Render command output in one of the supported formats."""
    parts = output.consolidated if consolidate else output.cut_list
    if output_format == "json":
        return JsonExporter().export(output, consolidate=consolidate)
    if output_format == "csv":
        return CsvExporter(
            layout="cutlist-optimizer",
            group_by_material=config.output.group_by_material,
        ).export(parts)
    if output_format == "csv-generic":
        return CsvExporter(
            layout="generic",
            group_by_material=config.output.group_by_material,
        ).export(parts)
    return CutListFormatter(units=config.settings.units).format_output(
        output, consolidate=consolidate
    )


def generate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file"),
    ],
    output_format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table, csv, csv-generic, json (default: from project file)",
        ),
    ] = None,
    consolidate: Annotated[
        bool,
        typer.Option("--consolidate", help="Merge identical parts across cabinets"),
    ] = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result to a file instead of stdout"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show per-part calculation details"),
    ] = False,
) -> None:
    """Generate the cut list of every cabinet in a project file.

    Examples:
        cutlist generate kitchen.json
        cutlist generate kitchen.json --format csv --consolidate -o kitchen.csv
    """
    configure_logging(verbose)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    fmt = (output_format or config.output.format).lower()
    if fmt not in OUTPUT_FORMATS:
        typer.echo(f"Error: Unknown format: {fmt}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    try:
        project = config_to_project(config)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    result = GenerateCutListCommand().execute(project)
    rendered = render_output(result, config, fmt, consolidate or config.output.consolidate)

    if output_file is not None:
        try:
            output_file.write_text(rendered + "\n", encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: Could not write file: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Cut list written to {output_file}")
    else:
        typer.echo(rendered)

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)
