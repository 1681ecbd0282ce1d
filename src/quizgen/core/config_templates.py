"""Packaged configuration templates."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Iterable

from ..errors import QuizgenConfigError
from .config import write_toml_template

__all__ = [
    "ConfigTemplate",
    "get_template",
    "iter_templates",
]


@dataclass(frozen=True)
class ConfigTemplate:
    """A TOML template shipped inside a quizgen package."""

    name: str
    filename: str
    description: str
    package: str

    def read_text(self) -> str:
        try:
            resource = resources.files(self.package).joinpath(self.filename)
            return resource.read_text(encoding="utf-8")
        except (FileNotFoundError, ModuleNotFoundError) as exc:
            raise QuizgenConfigError(
                f"Template '{self.name}' is missing from {self.package}."
            ) from exc

    def write(self, path: Path, *, overwrite: bool = False) -> Path:
        return write_toml_template(
            path, template=self.read_text(), overwrite=overwrite
        )


_TEMPLATES: dict[str, ConfigTemplate] = {
    "quiz": ConfigTemplate(
        name="quiz",
        filename="quizgen.toml",
        description="Generation, export and logging defaults.",
        package="quizgen.quiz",
    ),
}


def get_template(name: str) -> ConfigTemplate:
    try:
        return _TEMPLATES[name]
    except KeyError as exc:
        raise QuizgenConfigError(f"Unknown config template '{name}'.") from exc


def iter_templates() -> Iterable[ConfigTemplate]:
    return tuple(_TEMPLATES.values())
