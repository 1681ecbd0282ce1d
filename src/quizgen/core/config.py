"""TOML helpers shared by quizgen configuration loaders."""

from __future__ import annotations

import copy
import tomllib
from pathlib import Path
from typing import Any, Mapping, MutableMapping

from ..errors import QuizgenConfigError

__all__ = [
    "load_toml",
    "merge_defaults",
    "write_toml_template",
]


def load_toml(path: Path) -> Mapping[str, Any]:
    """Parse the TOML document at ``path``.

    IO and syntax problems surface as :class:`QuizgenConfigError` so command
    entry points only need to handle one error type.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise QuizgenConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise QuizgenConfigError(f"Invalid TOML in {path}: {exc}") from exc


def merge_defaults(
    defaults: Mapping[str, Any],
    override: Mapping[str, Any],
) -> dict[str, Any]:
    """Return a copy of ``defaults`` with ``override`` applied on top.

    Keys missing from ``defaults`` are rejected so typos in a config file are
    reported instead of silently ignored.
    """

    merged = copy.deepcopy(dict(defaults))
    _merge_into(merged, override, prefix="")
    return merged


def _merge_into(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    prefix: str,
) -> None:
    for key, value in override.items():
        dotted = f"{prefix}{key}"
        if key not in base:
            raise QuizgenConfigError(f"Unknown configuration key '{dotted}'.")
        current = base[key]
        if isinstance(current, MutableMapping):
            if not isinstance(value, Mapping):
                raise QuizgenConfigError(
                    f"Expected a table for '{dotted}', "
                    f"found {type(value).__name__}."
                )
            _merge_into(current, value, prefix=f"{dotted}.")
            continue
        base[key] = value


def write_toml_template(
    path: Path,
    *,
    template: str,
    overwrite: bool = False,
) -> Path:
    """Write ``template`` to ``path`` unless it exists and ``overwrite`` is off."""

    if path.exists() and not overwrite:
        raise QuizgenConfigError(f"Config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template, encoding="utf-8")
    try:
        path.chmod(0o600)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return path
