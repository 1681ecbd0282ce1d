"""Core shared helpers for quizgen commands."""

from __future__ import annotations

from .ai import load_client
from .config import load_toml, merge_defaults, write_toml_template
from .config_templates import ConfigTemplate, get_template, iter_templates
from .logging import JsonLogFormatter, configure_logger
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "load_client",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
    "ConfigTemplate",
    "get_template",
    "iter_templates",
    "JsonLogFormatter",
    "configure_logger",
    "WORKSPACE_ENV",
    "WorkspaceError",
    "WorkspaceLayout",
    "ensure_workspace",
]
