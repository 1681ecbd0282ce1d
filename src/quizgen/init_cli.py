"""``quizgen init``: prepare the workspace and its config template."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .core import config_templates
from .core import workspace as workspace_mod
from .errors import QuizgenConfigError
from .quiz.config import CONFIG_FILENAME


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizgen init",
        description=(
            "Create the quizgen workspace (config, logs, exports) and write "
            f"the default {CONFIG_FILENAME}."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to QUIZGEN_DATA_HOME or "
            "~/.quizgen-data)."
        ),
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help=f"Overwrite an existing {CONFIG_FILENAME}.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    layout = workspace_mod.ensure_workspace(path=args.path)
    target = layout.path_for("config") / CONFIG_FILENAME
    if target.exists() and not args.force:
        status = "kept existing; use --force to replace"
    else:
        try:
            config_templates.get_template("quiz").write(target, overwrite=True)
        except QuizgenConfigError as exc:
            sys.stderr.write(f"{exc}\n")
            return 1
        status = "written"

    if args.quiet:
        return 0

    lines = [f"Workspace ready at {layout.home}"]
    width = max(len(name) for name in layout.directories)
    for name, directory in layout.directories.items():
        lines.append(f"  {name.ljust(width)}  {directory}")
    lines.append(f"Config {target} ({status})")
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
