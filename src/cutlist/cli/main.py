"""Typer CLI for cut list generation."""

import typer

from cutlist.cli.commands import generate_command, templates_app, validate_command

app = typer.Typer(
    name="cutlist",
    help="Resolve parametric cabinet patterns into cut lists.",
)

app.command(name="generate")(generate_command)
app.command(name="validate")(validate_command)
app.add_typer(templates_app, name="templates")


if __name__ == "__main__":
    app()
