"""Infrastructure layer - external concerns and formatters."""

from .formatters import CsvExporter, CutListFormatter, JsonExporter

__all__ = [
    "CsvExporter",
    "CutListFormatter",
    "JsonExporter",
]
