"""CLI command implementations for the cutlist application.

This package contains subcommands for the cutlist CLI, including:
- generate: Calculate the cut list of a project file
- validate: Validate a project file
- templates: Manage project templates
"""

from cutlist.cli.commands.generate import generate_command
from cutlist.cli.commands.templates import templates_app
from cutlist.cli.commands.validate import validate_command

__all__ = ["generate_command", "templates_app", "validate_command"]
