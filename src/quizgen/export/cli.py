"""``quizgen export``: convert marked-up text files into export formats."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from ..core.logging import configure_logger
from ..errors import ExportEncodingFailure, QuizgenConfigError
from ..quiz.config import ConfigOverrides, load_config
from .writer import ExportFormat, export_content


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizgen export",
        description=(
            "Export text written in the quiz markup (headings, bullets, bold, "
            "italic) as plain text, Word or PDF files."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Text files to export.",
    )
    parser.add_argument(
        "--format",
        dest="formats",
        nargs="+",
        required=True,
        choices=[fmt.value for fmt in ExportFormat],
        help="One or more target formats.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for exported files (defaults to the workspace).",
    )
    parser.add_argument(
        "--prefix",
        help="File name prefix (defaults to each source file's name).",
    )
    parser.add_argument("--config", type=Path, help="Path to a quizgen.toml.")
    parser.add_argument("--workspace", type=Path, help="Workspace root.")
    parser.add_argument("--log-level", help="Logging level (defaults to INFO).")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else sys.argv[1:])

    try:
        load_result = load_config(
            config_path=args.config,
            overrides=ConfigOverrides(
                output_dir=args.output_dir, log_level=args.log_level
            ),
            workspace_path=args.workspace,
        )
    except QuizgenConfigError as exc:
        parser.error(str(exc))
    config = load_result.config

    logger, log_path = configure_logger(
        "quizgen.export",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    formats = [ExportFormat.from_value(value) for value in args.formats]

    failures = 0
    for source in args.paths:
        if not source.is_file():
            sys.stderr.write(f"Input not found: {source}\n")
            failures += 1
            continue
        content = source.read_text(encoding="utf-8", errors="replace")
        prefix = args.prefix or source.stem
        for fmt in formats:
            try:
                written = export_content(
                    content, fmt, config.output_dir, prefix=prefix
                )
            except ExportEncodingFailure as exc:
                logger.error(
                    "Export failed",
                    extra={"source": source, "format": fmt.value, "error": str(exc)},
                )
                sys.stderr.write(f"Failed to export {source} as {fmt.value}.\n")
                failures += 1
                continue
            if written is None:
                sys.stdout.write(f"Skipped {source}: nothing to export.\n")
                break
            logger.info(
                "Export written",
                extra={"source": source, "format": fmt.value, "path": written},
            )
            sys.stdout.write(f"Wrote {written}\n")

    if failures:
        sys.stderr.write(f"See {log_path} for details.\n")
    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
