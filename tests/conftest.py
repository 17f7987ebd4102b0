"""Pytest configuration and shared fixtures for cut list tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cutlist.domain import (
    CabinetPattern,
    Dimensions,
    GlobalSettings,
    PartRule,
)


@pytest.fixture
def settings() -> GlobalSettings:
    """Global settings with an 18mm carcass and a 6mm back."""
    return GlobalSettings(material_thickness=18, back_panel_thickness=6)


@pytest.fixture
def dimensions() -> Dimensions:
    """A standard 720 x 600 x 560 base cabinet."""
    return Dimensions(height=720, width=600, depth=560)


@pytest.fixture
def lateral_pattern() -> CabinetPattern:
    """Pattern with a single side-panel rule."""
    return CabinetPattern(
        id="lateral-only",
        name="Lateral only",
        part_rules=(
            PartRule(
                id="lateral",
                part_name="Lateral",
                length_expression="total_height - 2*material_thickness",
                width_expression="total_depth - back_thickness",
                quantity_expression="2",
            ),
        ),
    )


@pytest.fixture
def project_data() -> dict[str, Any]:
    """A small valid project file as a dictionary."""
    return {
        "schema_version": "1.0",
        "name": "Test kitchen",
        "settings": {"material_thickness": 18, "back_panel_thickness": 6},
        "materials": [
            {"id": "board-18", "name": "Board 18mm", "thickness": 18},
            {"id": "board-16", "name": "Board 16mm", "thickness": 16},
        ],
        "rule_sets": [],
        "patterns": [
            {
                "id": "box",
                "name": "Box",
                "default_dimensions": {"height": 720, "width": 600, "depth": 560},
                "zones": [{"id": "main", "type": "shelf"}],
                "parts": [
                    {
                        "id": "side",
                        "name": "Side",
                        "length": "total_height - 2*material_thickness",
                        "width": "total_depth - back_thickness",
                        "quantity": "2",
                    },
                    {
                        "id": "shelf",
                        "name": "Shelf",
                        "length": "internal_width",
                        "width": "internal_depth - shelf_inset",
                        "quantity": "shelf_count",
                        "edge_banding": {"length1": True},
                    },
                ],
            }
        ],
        "cabinets": [
            {"id": "c1", "name": "Left box", "pattern": "box"},
            {
                "id": "c2",
                "name": "Right box",
                "pattern": "box",
                "dimensions": {"height": 720, "width": 400, "depth": 560},
            },
        ],
    }


@pytest.fixture
def project_file(tmp_path: Path, project_data: dict[str, Any]) -> Path:
    """The shared project written to a JSON file."""
    path = tmp_path / "kitchen.json"
    path.write_text(json.dumps(project_data, indent=2))
    return path
