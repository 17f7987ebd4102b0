"""Bundled project templates.

Each template is a complete project file shipped as package data under
``templates/data``. The listing is read from the files themselves.
"""

import json
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from cutlist.application.config import ProjectConfiguration, load_config_from_dict

DATA_PACKAGE = "cutlist.application.templates.data"


class TemplateNotFoundError(Exception):
    """Raised when a requested template does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")


@dataclass(frozen=True)
class TemplateInfo:
    """Summary of one bundled template."""

    name: str
    project_name: str
    description: str
    pattern_ids: tuple[str, ...]
    cabinet_count: int


class TemplateManager:
    """Lists, loads and copies the bundled project templates."""

    def __init__(self, data_package: str = DATA_PACKAGE) -> None:
        self._root = resources.files(data_package)

    def _file(self, name: str) -> Traversable:
        template_file = self._root.joinpath(f"{name}.json")
        if not template_file.is_file():
            raise TemplateNotFoundError(name)
        return template_file

    def template_names(self) -> list[str]:
        return sorted(
            entry.name.removesuffix(".json")
            for entry in self._root.iterdir()
            if entry.name.endswith(".json")
        )

    def template_exists(self, name: str) -> bool:
        return name in self.template_names()

    def get_template(self, name: str) -> str:
        """Return the raw JSON text of a template."""
        return self._file(name).read_text(encoding="utf-8")

    def load_template(self, name: str) -> ProjectConfiguration:
        """Parse a template into a validated project configuration."""
        return load_config_from_dict(json.loads(self.get_template(name)))

    def list_templates(self) -> list[TemplateInfo]:
        infos = []
        for name in self.template_names():
            config = self.load_template(name)
            description = next((p.description for p in config.patterns if p.description), "")
            infos.append(
                TemplateInfo(
                    name=name,
                    project_name=config.name,
                    description=description,
                    pattern_ids=tuple(p.id for p in config.patterns),
                    cabinet_count=len(config.cabinets),
                )
            )
        return infos

    def init_template(self, name: str, output_path: Path, overwrite: bool = False) -> None:
        """Write a template to ``output_path``.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            FileExistsError: If the file exists and ``overwrite`` is False.
        """
        content = self.get_template(name)
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"File already exists: {output_path}")
        output_path.write_text(content, encoding="utf-8")
