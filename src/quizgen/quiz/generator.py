"""Submission validation and the remote quiz generation call."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Tuple

from ..errors import GenerationFailure, NoFileSelected, NoTopicProvided

DIFFICULTIES = ("easy", "medium", "hard")
MIN_QUESTIONS = 1
MAX_QUESTIONS = 20

InputMethod = Literal["topic", "file"]

_SEPARATOR_RE = re.compile(r"[-_]")


@dataclass(frozen=True)
class GenerationSettings:
    model: str = "gpt-4o-mini"
    temperature: float = 0.4
    max_tokens: int = 3000


@dataclass(frozen=True)
class GenerationRequest:
    """A validated submission ready for :func:`generate_quiz`."""

    topic: str
    difficulty: str
    count: int
    source_file: Optional[Path] = None


def topic_from_filename(name: str) -> str:
    """Derive a topic from a file name: ``cell-biology_notes.pdf`` -> ``cell biology notes``."""
    base = Path(name).name.split(".")[0]
    return _SEPARATOR_RE.sub(" ", base).strip()


def validate_settings(difficulty: str, count: int) -> None:
    if difficulty not in DIFFICULTIES:
        raise ValueError(
            f"difficulty must be one of {', '.join(DIFFICULTIES)}, "
            f"got '{difficulty}'"
        )
    if isinstance(count, bool) or not MIN_QUESTIONS <= int(count) <= MAX_QUESTIONS:
        raise ValueError(
            f"question count must be between {MIN_QUESTIONS} and "
            f"{MAX_QUESTIONS}, got {count}"
        )


def build_request(
    method: InputMethod,
    *,
    topic: Optional[str] = None,
    file: Optional[Path] = None,
    difficulty: str = "medium",
    count: int = 5,
) -> GenerationRequest:
    """Validate a submission before any remote call is made.

    Topic submissions need a non-blank topic. File submissions need an
    existing file; only its name is used, to derive the topic.
    """

    validate_settings(difficulty, count)
    if method == "file":
        if file is None or not Path(file).is_file():
            raise NoFileSelected("Please select a file to upload.")
        derived = topic_from_filename(Path(file).name)
        if not derived:
            raise NoTopicProvided(
                f"Could not derive a topic from '{Path(file).name}'."
            )
        return GenerationRequest(derived, difficulty, int(count), Path(file))
    if not topic or not topic.strip():
        raise NoTopicProvided("Please enter a topic for your quiz.")
    return GenerationRequest(topic.strip(), difficulty, int(count))


def _build_prompts(topic: str, difficulty: str, count: int) -> Tuple[str, str]:
    system_prompt = (
        "You write multiple-choice study quizzes. Reply with JSON only."
    )
    schema = (
        '{"title": str, "difficulty": str, "questions": [{"id": int, '
        '"question": str, "options": [{"id": "A", "text": str}], '
        '"correctAnswer": str, "explanation": str}]}'
    )
    user_prompt = (
        f"Create a {difficulty} quiz about: {topic}\n"
        f"Number of questions: {count}\n\n"
        f"Schema:\n{schema}\n\n"
        "Constraints: four options labelled A-D per question; exactly one "
        "correct answer given by its option id; number question ids from 1; "
        "explanations of one or two sentences. Explanations may use "
        "**bold** and *italic* markup."
    )
    return system_prompt, user_prompt


def generate_quiz(
    topic: str,
    difficulty: str,
    count: int,
    *,
    client: object,
    settings: GenerationSettings = GenerationSettings(),
) -> str:
    """Ask the model for a quiz and return its raw text.

    The text is not parsed here. Raises :class:`GenerationFailure` when the
    client call fails or returns nothing.
    """

    validate_settings(difficulty, count)
    system_prompt, user_prompt = _build_prompts(topic, difficulty, count)
    try:
        response = client.chat.completions.create(  # type: ignore[attr-defined]
            model=settings.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
        content = response.choices[0].message.content  # type: ignore[index]
    except Exception as exc:
        raise GenerationFailure(f"Quiz generation failed: {exc}") from exc
    text = (content or "").strip()
    if not text:
        raise GenerationFailure("Quiz generation returned no content.")
    return text
