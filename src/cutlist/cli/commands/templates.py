"""The ``cutlist templates`` sub-commands."""

from pathlib import Path
from typing import Annotated

import typer

from cutlist.application.templates import TemplateManager, TemplateNotFoundError

templates_app = typer.Typer(
    name="templates",
    help="Manage project templates.",
)


@templates_app.command(name="list")
def list_templates() -> None:
    """List the bundled project templates."""
    templates = TemplateManager().list_templates()

    typer.echo("Available templates:")
    typer.echo()
    width = max((len(info.name) for info in templates), default=0)
    for info in templates:
        cabinets = f"{info.cabinet_count} cabinet{'s' if info.cabinet_count != 1 else ''}"
        typer.echo(f"  {info.name:<{width}}  - {info.description} ({cabinets})")
    typer.echo()
    typer.echo("Use 'cutlist templates init <name>' to create a project file from a template.")


@templates_app.command(name="init")
def init_template(
    name: Annotated[str, typer.Argument(help="Template name")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Project file to write (default: <name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing project file"),
    ] = False,
) -> None:
    """Write a bundled template as a new project file.

    Example:
        cutlist templates init wardrobe -o bedroom.json
    """
    manager = TemplateManager()
    output = output or Path(f"{name}.json")

    try:
        manager.init_template(name, output, overwrite=force)
    except TemplateNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo(f"Available templates: {', '.join(manager.template_names())}", err=True)
        raise typer.Exit(code=1)
    except FileExistsError:
        typer.echo(f"Error: {output} already exists. Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: Could not write {output}: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Created: {output}")
