"""Configuration loader for the quiz and export commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from ..core import config as core_config
from ..core import workspace as workspace_mod
from ..errors import QuizgenConfigError
from .generator import DIFFICULTIES, GenerationSettings, validate_settings

CONFIG_FILENAME = "quizgen.toml"
CONFIG_ENV = "QUIZGEN_CONFIG"
ENV_PREFIX = "QUIZGEN_"


@dataclass(frozen=True)
class QuizConfig:
    """Fully resolved settings for a quiz run."""

    generation: GenerationSettings
    difficulty: str
    count: int
    output_dir: Path
    prefix: str
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced values applied over environment and file options."""

    difficulty: Optional[str] = None
    count: Optional[int] = None
    output_dir: Optional[Path] = None
    model: Optional[str] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Resolve settings with precedence CLI > environment > TOML > defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env
    layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)

    explicit = config_path or _env_path(env_map, CONFIG_ENV)
    requested = explicit or layout.path_for("config") / CONFIG_FILENAME
    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        table = core_config.merge_defaults(table, core_config.load_toml(requested))
        loaded_path = requested
    elif explicit is not None:
        raise QuizgenConfigError(f"Config file not found: {requested}")

    generation = table["generation"]
    difficulty = str(
        _pick_first(
            overrides.difficulty,
            _env_value(env_map, "DIFFICULTY"),
            generation["difficulty"],
        )
    ).strip().lower()
    count = _as_int(
        _pick_first(
            overrides.count, _env_value(env_map, "COUNT"), generation["count"]
        ),
        "generation.count",
    )
    try:
        validate_settings(difficulty, count)
    except ValueError as exc:
        raise QuizgenConfigError(str(exc)) from exc

    settings = GenerationSettings(
        model=str(
            _pick_first(
                overrides.model, _env_value(env_map, "MODEL"), generation["model"]
            )
        ),
        temperature=_as_float(generation["temperature"], "generation.temperature"),
        max_tokens=_as_int(generation["max_tokens"], "generation.max_tokens"),
    )

    export = table["export"]
    output_dir = _resolve_output_dir(
        _pick_first(
            overrides.output_dir,
            _env_path(env_map, f"{ENV_PREFIX}OUTPUT_DIR"),
            _optional_path(export["output_dir"]),
        ),
        layout,
    )
    prefix = str(export["prefix"]).strip()
    if not prefix:
        raise QuizgenConfigError("export.prefix must be a non-empty string.")

    level = str(
        _pick_first(
            overrides.log_level,
            _env_value(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        )
    ).strip()
    if not level:
        raise QuizgenConfigError("logging.level must be a non-empty string.")

    config = QuizConfig(
        generation=settings,
        difficulty=difficulty,
        count=count,
        output_dir=output_dir,
        prefix=prefix,
        log_level=level.upper(),
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    defaults = GenerationSettings()
    return {
        "generation": {
            "model": defaults.model,
            "temperature": defaults.temperature,
            "max_tokens": defaults.max_tokens,
            "difficulty": DIFFICULTIES[1],
            "count": 5,
        },
        "export": {"output_dir": "", "prefix": "quiz-results"},
        "logging": {"level": "INFO"},
    }


def _resolve_output_dir(
    candidate: Optional[Path], layout: workspace_mod.WorkspaceLayout
) -> Path:
    if candidate is None:
        return layout.path_for("exports")
    candidate = candidate.expanduser()
    if not candidate.is_absolute():
        return (layout.home / candidate).resolve()
    return candidate.resolve()


def _optional_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise QuizgenConfigError("export.output_dir must be a string.")
    return Path(value) if value.strip() else None


def _as_int(value: object, key: str) -> int:
    if isinstance(value, bool):
        raise QuizgenConfigError(f"{key} must be an integer.")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise QuizgenConfigError(f"{key} must be an integer.") from exc


def _as_float(value: object, key: str) -> float:
    if isinstance(value, bool):
        raise QuizgenConfigError(f"{key} must be a number.")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise QuizgenConfigError(f"{key} must be a number.") from exc


def _env_value(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _env_path(env_map: Mapping[str, str], name: str) -> Optional[Path]:
    raw = (env_map.get(name) or "").strip()
    return Path(raw).expanduser() if raw else None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
