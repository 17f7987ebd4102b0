"""Bundled project templates for common cabinet types."""

from cutlist.application.templates.manager import (
    TemplateInfo,
    TemplateManager,
    TemplateNotFoundError,
)

__all__ = [
    "TemplateInfo",
    "TemplateManager",
    "TemplateNotFoundError",
]
