"""Quiz session state machine.

The session moves through three phases: ``setup`` (step 0, nothing loaded
or only unstructured generator output), ``answering`` (steps 1..N) and
``completed`` (score frozen). Every user action is an event and
:func:`apply` maps ``(event, state)`` to a new :class:`SessionState` without
mutating its input, which keeps the console loop thin and the transitions
testable on their own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Union

from ..errors import InvalidTransition, MalformedQuizPayload
from .models import Quiz, QuizQuestion, UserAnswer, parse_quiz

__all__ = [
    "Phase",
    "SessionState",
    "QuizReceived",
    "AnswerSelected",
    "NextRequested",
    "PreviousRequested",
    "ResetRequested",
    "SessionEvent",
    "apply",
    "current_question",
    "is_answered",
    "answer_for",
    "compute_score",
    "results_summary",
]

Phase = Literal["setup", "answering", "completed"]


@dataclass(frozen=True)
class SessionState:
    """Snapshot of one quiz session."""

    quiz: Quiz | None = None
    raw_output: str = ""
    parse_error: str = ""
    step: int = 0
    answers: tuple[UserAnswer, ...] = ()
    completed: bool = False
    score: int = 0

    @property
    def phase(self) -> Phase:
        if self.completed:
            return "completed"
        if self.quiz is not None and self.step > 0:
            return "answering"
        return "setup"

    @property
    def total_questions(self) -> int:
        return len(self.quiz.questions) if self.quiz else 0

    @property
    def is_fallback(self) -> bool:
        """True when generator output arrived but was not a usable quiz."""
        return self.quiz is None and bool(self.raw_output)


@dataclass(frozen=True)
class QuizReceived:
    raw_text: str


@dataclass(frozen=True)
class AnswerSelected:
    question_id: int
    option_id: str


@dataclass(frozen=True)
class NextRequested:
    pass


@dataclass(frozen=True)
class PreviousRequested:
    pass


@dataclass(frozen=True)
class ResetRequested:
    pass


SessionEvent = Union[
    QuizReceived,
    AnswerSelected,
    NextRequested,
    PreviousRequested,
    ResetRequested,
]


def apply(event: SessionEvent, state: SessionState) -> SessionState:
    """Return the state that follows ``event``.

    Raises :class:`InvalidTransition` when the event is not allowed in the
    current phase. A payload that fails to parse is not an error here: the
    session stays in setup and keeps the raw text for display.
    """

    if isinstance(event, ResetRequested):
        return SessionState()
    if isinstance(event, QuizReceived):
        return _receive(event, state)
    if isinstance(event, AnswerSelected):
        return _select(event, state)
    if isinstance(event, NextRequested):
        return _advance(state)
    if isinstance(event, PreviousRequested):
        return _retreat(state)
    raise InvalidTransition(f"Unsupported session event: {event!r}")


def _receive(event: QuizReceived, state: SessionState) -> SessionState:
    if state.phase != "setup":
        raise InvalidTransition("Reset the current quiz before loading another.")
    try:
        quiz = parse_quiz(event.raw_text)
    except MalformedQuizPayload as exc:
        return SessionState(raw_output=event.raw_text, parse_error=str(exc))
    return SessionState(quiz=quiz, raw_output=event.raw_text, step=1)


def _select(event: AnswerSelected, state: SessionState) -> SessionState:
    _require_answering(state)
    kept = tuple(
        answer
        for answer in state.answers
        if answer.question_id != event.question_id
    )
    chosen = UserAnswer(event.question_id, event.option_id)
    return replace(state, answers=kept + (chosen,))


def _advance(state: SessionState) -> SessionState:
    quiz = _require_answering(state)
    if not is_answered(state):
        raise InvalidTransition(
            f"Question {state.step} needs an answer before moving on."
        )
    if state.step < state.total_questions:
        return replace(state, step=state.step + 1)
    return replace(
        state,
        completed=True,
        score=compute_score(quiz, state.answers),
    )


def _retreat(state: SessionState) -> SessionState:
    _require_answering(state)
    if state.step > 1:
        return replace(state, step=state.step - 1)
    return state


def _require_answering(state: SessionState) -> Quiz:
    phase = state.phase
    if phase != "answering" or state.quiz is None:
        raise InvalidTransition(f"No question is open while in {phase}.")
    return state.quiz


def current_question(state: SessionState) -> QuizQuestion | None:
    if state.quiz is None or not 1 <= state.step <= state.total_questions:
        return None
    return state.quiz.questions[state.step - 1]


def answer_for(state: SessionState, question_id: int) -> str | None:
    for answer in state.answers:
        if answer.question_id == question_id:
            return answer.selected_option
    return None


def is_answered(state: SessionState) -> bool:
    question = current_question(state)
    if question is None:
        return False
    return answer_for(state, question.id) is not None


def compute_score(quiz: Quiz, answers: tuple[UserAnswer, ...]) -> int:
    """Percentage of correct answers, rounded half up; 0 for no questions."""

    total = len(quiz.questions)
    if total == 0:
        return 0
    selected = {answer.question_id: answer.selected_option for answer in answers}
    correct = sum(
        1
        for question in quiz.questions
        if selected.get(question.id) == question.correct_answer
    )
    return (200 * correct + total) // (2 * total)


def results_summary(state: SessionState) -> str:
    """Marked-up results text for display and export; empty without a quiz."""

    quiz = state.quiz
    if quiz is None:
        return ""
    score = state.score if state.completed else compute_score(quiz, state.answers)
    lines = [
        f"# Quiz Results: {quiz.title}",
        f"**Difficulty:** {quiz.difficulty or '-'}",
        f"**Score:** {score}%",
        "",
    ]
    for position, question in enumerate(quiz.questions, start=1):
        lines.append(f"## Question {position}")
        lines.append(question.question)
        lines.extend(
            f"- {option.id}. {option.text}" for option in question.options
        )
        lines.append(f"**Your answer:** {answer_for(state, question.id) or '-'}")
        lines.append(f"**Correct answer:** {question.correct_answer}")
        if question.explanation:
            lines.append(f"**Explanation:** {question.explanation}")
        lines.append("")
    return "\n".join(lines)
