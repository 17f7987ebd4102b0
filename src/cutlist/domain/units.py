"""Dimension formatting and parsing for display and configuration input."""

from __future__ import annotations

import re

from .services.expression import round_half_up

__all__ = ["MM_PER_INCH", "format_dimension", "parse_dimension"]

MM_PER_INCH = 25.4

_NON_NUMERIC = re.compile(r"[^\d.]")


def format_dimension(value: float, units: str = "mm") -> str:
    """Format a millimetre value for display.

    >>> format_dimension(600)
    '600mm'
    >>> format_dimension(609.6, "inches")
    '24.00"'
    """
    if units == "inches":
        return f'{value / MM_PER_INCH:.2f}"'
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}mm"


def parse_dimension(text: str | float, units: str = "mm") -> int:
    """Parse a dimension such as ``"600"``, ``"600mm"``, ``'24"'`` or ``"24in"``.

    Inch-marked input is converted to millimetres when ``units`` is "mm".
    The result is rounded to whole millimetres (or whole inches).

    Raises:
        ValueError: If the text holds no number.
    """
    if isinstance(text, (int, float)):
        return int(round_half_up(text))

    cleaned = _NON_NUMERIC.sub("", text)
    try:
        value = float(cleaned)
    except ValueError:
        raise ValueError(f"Cannot parse dimension: {text!r}") from None

    lowered = text.lower()
    if units == "mm" and ('"' in lowered or "in" in lowered):
        return int(round_half_up(value * MM_PER_INCH))
    return int(round_half_up(value))
