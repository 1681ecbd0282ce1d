"""``quizgen quiz``: generate a quiz, take it and export the results."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console

from ..core import load_client
from ..core.logging import configure_logger
from ..errors import NoFileSelected, NoTopicProvided, QuizgenConfigError
from ..export.writer import ExportFormat
from ..notify import ConsoleNotifier, Notification
from .config import ConfigOverrides, load_config
from .generator import DIFFICULTIES, MAX_QUESTIONS, MIN_QUESTIONS, build_request
from .session import ResetRequested, SessionState, apply, results_summary
from .view import (
    InputProvider,
    export_results,
    prompt_another_quiz,
    prompt_export_formats,
    render_fallback,
    request_quiz,
    run_quiz_session,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizgen quiz",
        description=(
            "Generate a multiple-choice quiz from a topic or a file name, take "
            "it in the terminal and export the results."
        ),
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--topic", help="Topic to write the quiz about.")
    source.add_argument(
        "--file",
        type=Path,
        help="Derive the topic from this file's name (content is not read).",
    )
    parser.add_argument("--difficulty", choices=DIFFICULTIES)
    parser.add_argument(
        "--count",
        type=int,
        help=f"Number of questions ({MIN_QUESTIONS}-{MAX_QUESTIONS}).",
    )
    parser.add_argument(
        "--export",
        nargs="+",
        choices=[fmt.value for fmt in ExportFormat],
        help="Export formats to write after the quiz (skips the prompt).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for exported files (defaults to the workspace).",
    )
    parser.add_argument("--model", help="Override the OpenAI chat model.")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a quizgen.toml (defaults to the workspace config).",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root for config, logs and exports.",
    )
    parser.add_argument("--log-level", help="Logging level (defaults to INFO).")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log output to stderr.",
    )
    return parser


def _make_console() -> Console:
    return Console()


def _make_input_provider(console: Console) -> InputProvider:
    return lambda: console.input("[bold]> [/]")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else sys.argv[1:])

    overrides = ConfigOverrides(
        difficulty=args.difficulty,
        count=args.count,
        output_dir=args.output_dir,
        model=args.model,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except QuizgenConfigError as exc:
        parser.error(str(exc))
    config = load_result.config

    logger, _ = configure_logger(
        "quizgen.quiz",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    console = _make_console()
    read_input = _make_input_provider(console)
    notify = ConsoleNotifier(console, logger)

    try:
        request = build_request(
            "file" if args.file is not None else "topic",
            topic=args.topic,
            file=args.file,
            difficulty=config.difficulty,
            count=config.count,
        )
    except NoFileSelected as exc:
        notify(Notification("No file selected", str(exc), "destructive"))
        return 2
    except NoTopicProvided as exc:
        notify(Notification("Topic required", str(exc), "destructive"))
        return 2

    try:
        client = load_client()
    except RuntimeError as exc:
        logger.error("OpenAI client unavailable", extra={"error": str(exc)})
        console.print(f"[red]{exc}[/]")
        return 1

    exit_code = 0
    state = SessionState()
    while True:
        state = request_quiz(
            request,
            client=client,
            notify=notify,
            logger=logger,
            settings=config.generation,
            state=state,
        )
        if state.is_fallback:
            render_fallback(console, state)
            content = state.raw_output
        elif state.phase == "answering":
            result = run_quiz_session(state, console, read_input, logger=logger)
            if result.exit_action != "completed":
                return exit_code
            state = result.state
            content = results_summary(state)
        else:
            return 1

        if args.export:
            formats = [ExportFormat.from_value(value) for value in args.export]
        else:
            formats = prompt_export_formats(console, read_input)
        written = export_results(
            content,
            formats,
            config.output_dir,
            notify=notify,
            logger=logger,
            prefix=config.prefix,
        )
        if len(written) != len(formats):
            exit_code = 1

        if not prompt_another_quiz(console, read_input):
            return exit_code
        state = apply(ResetRequested(), state)
        logger.info("Session reset for a new quiz", extra={"topic": request.topic})


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
