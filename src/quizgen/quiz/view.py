"""Rich console front end for quiz sessions.

The functions here are the boundary between the user and the pure session
state machine: they read commands, dispatch events through
:func:`quizgen.quiz.session.apply`, render the current state and turn the
recoverable quizgen errors into notifications.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..errors import ExportEncodingFailure, GenerationFailure, InvalidTransition
from ..export.markup import Heading, Run, parse_markup
from ..export.writer import ExportFormat, export_content
from ..notify import Notification, Notifier
from .generator import GenerationRequest, GenerationSettings, generate_quiz
from .session import (
    AnswerSelected,
    NextRequested,
    PreviousRequested,
    QuizReceived,
    SessionEvent,
    SessionState,
    answer_for,
    apply,
    current_question,
)

InputProvider = Callable[[], str]
ExitAction = Literal["completed", "quit"]

_HEADING_STYLES = {1: "bold magenta", 2: "bold cyan", 3: "bold"}


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: Literal["next", "prev", "quit", "select"]
    choice: Optional[str] = None


@dataclass(frozen=True)
class QuizRunResult:
    """Return value from :func:`run_quiz_session`."""

    state: SessionState
    exit_action: ExitAction


def parse_session_command(raw: Optional[str]) -> Optional[SessionCommand]:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in {"n", "next"}:
        return SessionCommand("next")
    if lowered in {"p", "prev", "previous"}:
        return SessionCommand("prev")
    if lowered in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if len(text) == 1 and text.isalnum():
        return SessionCommand("select", text.upper())
    return None


def render_markup(text: str) -> Text:
    """Convert the markup dialect into styled Rich text."""

    output = Text()
    for index, block in enumerate(parse_markup(text)):
        if index:
            output.append("\n")
        if isinstance(block, Heading):
            output.append(block.text, style=_HEADING_STYLES[block.level])
            continue
        for run in block.runs:
            output.append(run.text, style=_run_style(run))
    return output


def _run_style(run: Run) -> str:
    styles = []
    if run.bold:
        styles.append("bold")
    if run.italic:
        styles.append("italic")
    return " ".join(styles)


def request_quiz(
    request: GenerationRequest,
    *,
    client: object,
    notify: Notifier,
    logger: logging.Logger,
    settings: GenerationSettings = GenerationSettings(),
    state: SessionState = SessionState(),
) -> SessionState:
    """Run the generation call for ``request`` and load the result.

    A failed call leaves ``state`` untouched. Output that is not a valid quiz
    moves the session into its raw-text fallback.
    """

    logger.info(
        "Quiz generation requested",
        extra={
            "topic": request.topic,
            "difficulty": request.difficulty,
            "count": request.count,
            "source_file": request.source_file,
        },
    )
    try:
        raw = generate_quiz(
            request.topic,
            request.difficulty,
            request.count,
            client=client,
            settings=settings,
        )
    except GenerationFailure as exc:
        logger.error("Quiz generation failed", extra={"error": str(exc)})
        label = "process the file" if request.source_file else "generate quiz"
        notify(
            Notification(
                "Error",
                f"Failed to {label}. Please try again.",
                "destructive",
            )
        )
        return state

    loaded = apply(QuizReceived(raw), state)
    if loaded.is_fallback:
        logger.warning(
            "Quiz payload malformed; showing raw text",
            extra={"error": loaded.parse_error},
        )
        notify(
            Notification(
                "Format Error",
                "The quiz format is incorrect. Showing plain text instead.",
                "destructive",
            )
        )
    else:
        logger.info(
            "Quiz loaded",
            extra={"questions": loaded.total_questions},
        )
    if request.source_file is not None:
        notify(
            Notification(
                "File processed",
                f"Generated quiz based on {request.source_file.name}.",
            )
        )
    return loaded


def run_quiz_session(
    state: SessionState,
    console: Console,
    input_provider: InputProvider,
    *,
    logger: logging.Logger,
) -> QuizRunResult:
    """Drive an answering session until completion or quit."""

    if state.phase != "answering":
        raise InvalidTransition("A quiz must be loaded before it can be taken.")

    while state.phase == "answering":
        _render_question(console, state)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            return QuizRunResult(state, "quit")
        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            console.print("\n[bold yellow]Ending quiz without a score.[/]")
            logger.info("Quiz abandoned", extra={"step": state.step})
            return QuizRunResult(state, "quit")
        event = _event_for(command, state, console)
        if event is None:
            continue
        try:
            state = apply(event, state)
        except InvalidTransition as exc:
            console.print(f"[red]{exc}[/]")
            continue
        logger.debug(
            "Session event applied",
            extra={"event": type(event).__name__, "step": state.step},
        )

    logger.info("Quiz completed", extra={"score": state.score})
    render_summary(console, state)
    return QuizRunResult(state, "completed")


def _event_for(
    command: SessionCommand, state: SessionState, console: Console
) -> Optional[SessionEvent]:
    if command.type == "next":
        return NextRequested()
    if command.type == "prev":
        return PreviousRequested()
    question = current_question(state)
    if question is None or command.choice is None:
        return None
    if question.option_for(command.choice) is None:
        console.print(
            f"[red]'{command.choice}' is not a valid choice for this question.[/]"
        )
        return None
    console.print(f"Selected [bold]{command.choice}[/].")
    return AnswerSelected(question.id, command.choice)


def _render_question(console: Console, state: SessionState) -> None:
    question = current_question(state)
    if question is None or state.quiz is None:
        raise InvalidTransition(f"Step {state.step} has no question to show.")
    header = Text.assemble(
        (f"Question {state.step}", "bold cyan"),
        (f" / {state.total_questions}", "dim"),
        (f"  {state.quiz.title}", "dim"),
    )
    console.print()
    console.rule(header)
    console.print(render_markup(question.question), style="bold")

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("Key", justify="center", style="cyan")
    table.add_column("Option")
    selected = answer_for(state, question.id)
    for option in question.options:
        marker = "•" if option.id == selected else " "
        row = Text(marker + " ")
        label = render_markup(option.text)
        if option.id == selected:
            label.stylize("bold green")
        row += label
        table.add_row(option.id, row)
    console.print(table)

    answered = sum(
        1
        for item in state.quiz.questions
        if answer_for(state, item.id) is not None
    )
    keys = ", ".join(option.id for option in question.options)
    forward = "finish" if state.step == state.total_questions else "next"
    console.print(
        Text(
            f"Answered {answered}/{state.total_questions} | Commands: "
            f"choices [{keys}], n ({forward}), p (prev), q (quit)",
            style="dim",
        )
    )


def render_summary(console: Console, state: SessionState) -> None:
    quiz = state.quiz
    if quiz is None:
        return
    console.print()
    console.rule(Text(f"Quiz Results: {quiz.title}", style="bold magenta"))

    correct = sum(
        1
        for question in quiz.questions
        if answer_for(state, question.id) == question.correct_answer
    )
    overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Difficulty", quiz.difficulty or "-")
    overview.add_row("Questions", str(len(quiz.questions)))
    overview.add_row("Correct", str(correct))
    overview.add_row("Score", f"{state.score}%")
    console.print(overview)

    responses = Table(title="Responses", box=box.SIMPLE, expand=True)
    responses.add_column("#", justify="right")
    responses.add_column("Question", overflow="fold")
    responses.add_column("Your answer")
    responses.add_column("Correct answer")
    responses.add_column("Result", justify="center")
    for position, question in enumerate(quiz.questions, start=1):
        chosen = answer_for(state, question.id)
        responses.add_row(
            str(position),
            render_markup(question.question),
            chosen or "-",
            question.correct_answer,
            "✅" if chosen == question.correct_answer else "❌",
        )
    console.print(responses)

    for position, question in enumerate(quiz.questions, start=1):
        if not question.explanation:
            continue
        right = answer_for(state, question.id) == question.correct_answer
        console.print(
            Panel(
                render_markup(question.explanation),
                title=f"Explanation {position}",
                border_style="green" if right else "red",
            )
        )


def render_fallback(console: Console, state: SessionState) -> None:
    """Show generator output that could not be read as a quiz."""

    console.print(
        Panel(
            render_markup(state.raw_output),
            title="Generated quiz (unstructured)",
            border_style="yellow",
        )
    )


def prompt_export_formats(
    console: Console, input_provider: InputProvider
) -> list[ExportFormat]:
    """Ask which formats to export; blank input or EOF means none."""

    console.print(
        Text(
            "Export results? Enter formats (txt docx pdf) or leave blank:",
            style="dim",
        )
    )
    try:
        raw = input_provider()
    except (EOFError, KeyboardInterrupt, StopIteration):
        return []
    formats: list[ExportFormat] = []
    for token in (raw or "").replace(",", " ").split():
        try:
            chosen = ExportFormat.from_value(token)
        except ValueError as exc:
            console.print(f"[red]{exc}[/]")
            continue
        if chosen not in formats:
            formats.append(chosen)
    return formats


def prompt_another_quiz(console: Console, input_provider: InputProvider) -> bool:
    """Ask whether to start a new quiz; anything but yes means no."""

    console.print(Text("Take another quiz on this topic? [y/N]", style="dim"))
    try:
        raw = input_provider()
    except (EOFError, KeyboardInterrupt, StopIteration):
        return False
    return (raw or "").strip().lower() in {"y", "yes"}


_FORMAT_LABELS = {
    ExportFormat.TXT: "Text file",
    ExportFormat.DOCX: "Word document",
    ExportFormat.PDF: "PDF file",
}


def export_results(
    content: str,
    formats: Sequence[ExportFormat],
    out_dir: Path,
    *,
    notify: Notifier,
    logger: logging.Logger,
    prefix: str = "quiz-results",
) -> list[Path]:
    """Export ``content`` once per format; failures are reported, not raised."""

    written: list[Path] = []
    for fmt in formats:
        try:
            path = export_content(content, fmt, out_dir, prefix=prefix)
        except ExportEncodingFailure as exc:
            logger.error(
                "Export failed",
                extra={"format": fmt.value, "error": str(exc)},
            )
            notify(
                Notification(
                    "Download Error",
                    "Failed to download file.",
                    "destructive",
                )
            )
            continue
        if path is None:
            logger.info("Nothing to export", extra={"format": fmt.value})
            continue
        logger.info(
            "Export written",
            extra={"format": fmt.value, "path": path},
        )
        notify(
            Notification(
                "Download Complete",
                f"{_FORMAT_LABELS[fmt]} saved to {path}.",
            )
        )
        written.append(path)
    return written
