"""Data-home layout shared by quizgen commands."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ..errors import QuizgenError

WORKSPACE_ENV = "QUIZGEN_DATA_HOME"
DEFAULT_WORKSPACE = Path.home() / ".quizgen-data"

_SUBDIRS = {
    "config": "config",
    "logs": "logs",
    "exports": "exports",
}

__all__ = [
    "WORKSPACE_ENV",
    "DEFAULT_WORKSPACE",
    "WorkspaceError",
    "WorkspaceLayout",
    "ensure_workspace",
]


class WorkspaceError(QuizgenError):
    """Raised when the workspace directories cannot be prepared."""


@dataclass(frozen=True)
class WorkspaceLayout:
    """Resolved workspace root and its named subdirectories."""

    home: Path
    directories: Mapping[str, Path]

    def path_for(self, key: str) -> Path:
        try:
            return self.directories[key]
        except KeyError as exc:
            raise WorkspaceError(f"Unknown workspace directory '{key}'.") from exc


def ensure_workspace(
    *,
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
    create: bool = True,
) -> WorkspaceLayout:
    """Resolve the workspace and create its directories when ``create``.

    An explicit ``path`` wins over ``QUIZGEN_DATA_HOME``. When the default
    location is not writable the layout moves to the temp directory.
    """

    env_map = os.environ if env is None else env
    base, explicit = _resolve_base(env_map, path)
    candidates = [base]
    if create and not explicit:
        candidates.append(Path(tempfile.gettempdir()) / "quizgen-data")

    last_error: Exception | None = None
    for candidate in candidates:
        try:
            return _build_layout(candidate, create=create)
        except PermissionError as exc:
            last_error = exc
    raise WorkspaceError(f"Unable to prepare workspace at {base}") from last_error


def _resolve_base(
    env: Mapping[str, str], override: Path | None
) -> tuple[Path, bool]:
    if override is not None:
        return override.expanduser().resolve(), True
    custom = (env.get(WORKSPACE_ENV) or "").strip()
    if custom:
        return Path(custom).expanduser().resolve(), True
    return DEFAULT_WORKSPACE, False


def _build_layout(base: Path, *, create: bool) -> WorkspaceLayout:
    if base.exists() and not base.is_dir():
        raise WorkspaceError(f"Workspace path is not a directory: {base}")
    directories = {key: base / name for key, name in _SUBDIRS.items()}
    if create:
        for target in (base, *directories.values()):
            target.mkdir(parents=True, exist_ok=True)
            try:
                target.chmod(0o700)
            except (PermissionError, NotImplementedError):
                pass
    return WorkspaceLayout(
        home=base,
        directories=MappingProxyType(directories),
    )
