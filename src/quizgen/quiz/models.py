"""Quiz data model and the parser for generator output."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Mapping

from ..errors import MalformedQuizPayload

__all__ = [
    "QuizOption",
    "QuizQuestion",
    "Quiz",
    "UserAnswer",
    "parse_quiz",
]

_FENCE_RE = re.compile(r"```(?:json)?\s*(.+)```", re.DOTALL)


@dataclass(frozen=True)
class QuizOption:
    """One labelled choice, e.g. ``A`` / ``Paris``."""

    id: str
    text: str


@dataclass(frozen=True)
class QuizQuestion:
    id: int
    question: str
    options: tuple[QuizOption, ...]
    correct_answer: str
    explanation: str

    def option_for(self, option_id: str | None) -> QuizOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


@dataclass(frozen=True)
class Quiz:
    """A generated quiz; never mutated once parsed."""

    title: str
    difficulty: str
    questions: tuple[QuizQuestion, ...]

    def question_by_id(self, question_id: int) -> QuizQuestion | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


@dataclass(frozen=True)
class UserAnswer:
    question_id: int
    selected_option: str


def parse_quiz(raw: str) -> Quiz:
    """Parse generator text into a :class:`Quiz`.

    The payload is JSON, optionally wrapped in a fenced code block. Raises
    :class:`MalformedQuizPayload` with an actionable message when the text is
    not JSON or does not satisfy the quiz invariants: non-empty questions,
    unique question ids, unique option ids and a correct answer that names
    one of the options.
    """

    data = _load_json((raw or "").strip())
    if not isinstance(data, Mapping):
        raise MalformedQuizPayload("quiz payload must be a JSON object")

    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list) or not raw_questions:
        raise MalformedQuizPayload("quiz must contain a non-empty questions list")

    questions = tuple(
        _parse_question(item, index)
        for index, item in enumerate(raw_questions, start=1)
    )
    ids = [question.id for question in questions]
    if len(set(ids)) != len(ids):
        raise MalformedQuizPayload("duplicate question ids detected")

    return Quiz(
        title=_text(data.get("title")) or "Untitled quiz",
        difficulty=_text(data.get("difficulty")),
        questions=questions,
    )


def _load_json(text: str) -> Any:
    # Plain JSON wins; strings inside it may contain their own fences.
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        fenced = _FENCE_RE.search(text)
        if not fenced:
            raise MalformedQuizPayload(f"quiz payload is not JSON: {exc}") from exc
    try:
        return json.loads(fenced.group(1).strip())
    except json.JSONDecodeError as exc:
        raise MalformedQuizPayload(f"quiz payload is not JSON: {exc}") from exc


def _parse_question(item: Any, position: int) -> QuizQuestion:
    if not isinstance(item, Mapping):
        raise MalformedQuizPayload(f"question {position} must be an object")
    stem = _text(item.get("question"))
    if not stem:
        raise MalformedQuizPayload(f"question {position} has no text")

    raw_id = item.get("id", position)
    if isinstance(raw_id, bool):
        raise MalformedQuizPayload(f"question {position} id must be an integer")
    try:
        question_id = int(raw_id)
    except (TypeError, ValueError) as exc:
        raise MalformedQuizPayload(
            f"question {position} id must be an integer"
        ) from exc

    options = _parse_options(item.get("options"), position)
    answer = _text(item.get("correctAnswer", item.get("correct_answer")))
    if answer not in {option.id for option in options}:
        raise MalformedQuizPayload(
            f"question {position} correct answer '{answer}' is not an option"
        )
    return QuizQuestion(
        id=question_id,
        question=stem,
        options=options,
        correct_answer=answer,
        explanation=_text(item.get("explanation")),
    )


def _parse_options(raw: Any, position: int) -> tuple[QuizOption, ...]:
    if not isinstance(raw, list) or not raw:
        raise MalformedQuizPayload(f"question {position} has no options")
    options: list[QuizOption] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise MalformedQuizPayload(
                f"question {position} options must be objects with id and text"
            )
        option_id = _text(entry.get("id"))
        if not option_id:
            raise MalformedQuizPayload(f"question {position} has an option without id")
        options.append(QuizOption(id=option_id, text=_text(entry.get("text"))))
    keys = [option.id for option in options]
    if len(set(keys)) != len(keys):
        raise MalformedQuizPayload(f"question {position} has duplicate option ids")
    return tuple(options)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
