from __future__ import annotations

import json

import pytest

from fixtures import as_text, geo_payload, multi_payload
from quizgen.errors import MalformedQuizPayload
from quizgen.quiz.models import QuizOption, parse_quiz


def test_parse_quiz_builds_typed_model() -> None:
    quiz = parse_quiz(as_text(geo_payload()))

    assert quiz.title == "Geo"
    assert quiz.difficulty == "easy"
    assert len(quiz.questions) == 1
    question = quiz.questions[0]
    assert question.id == 1
    assert question.options == (
        QuizOption("A", "Paris"),
        QuizOption("B", "Lyon"),
    )
    assert question.correct_answer == "A"
    assert question.explanation == "Paris is the capital."
    assert question.option_for("B") == QuizOption("B", "Lyon")
    assert question.option_for("Z") is None
    assert quiz.question_by_id(1) is question
    assert quiz.question_by_id(9) is None


def test_parse_quiz_accepts_fenced_json_and_snake_case_answer() -> None:
    payload = multi_payload(2)
    for item in payload["questions"]:
        item["correct_answer"] = item.pop("correctAnswer")
    raw = "Here you go:\n```json\n" + json.dumps(payload) + "\n```\n"

    quiz = parse_quiz(raw)

    assert [q.id for q in quiz.questions] == [1, 2]
    assert all(q.correct_answer == "A" for q in quiz.questions)


def test_parse_quiz_defaults_title_and_question_ids() -> None:
    payload = multi_payload(2)
    payload.pop("title")
    for item in payload["questions"]:
        item.pop("id")

    quiz = parse_quiz(as_text(payload))

    assert quiz.title == "Untitled quiz"
    assert [q.id for q in quiz.questions] == [1, 2]


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("not json at all", "not JSON"),
        ("[1, 2]", "JSON object"),
        ('{"questions": []}', "non-empty questions"),
    ],
)
def test_parse_quiz_rejects_bad_envelopes(raw: str, message: str) -> None:
    with pytest.raises(MalformedQuizPayload, match=message):
        parse_quiz(raw)


def test_parse_quiz_rejects_duplicate_question_ids() -> None:
    payload = multi_payload(2)
    payload["questions"][1]["id"] = 1

    with pytest.raises(MalformedQuizPayload, match="duplicate question ids"):
        parse_quiz(as_text(payload))


def test_parse_quiz_rejects_duplicate_option_ids() -> None:
    payload = geo_payload()
    payload["questions"][0]["options"][1]["id"] = "A"

    with pytest.raises(MalformedQuizPayload, match="duplicate option ids"):
        parse_quiz(as_text(payload))


def test_parse_quiz_rejects_answer_outside_options() -> None:
    payload = geo_payload()
    payload["questions"][0]["correctAnswer"] = "D"

    with pytest.raises(MalformedQuizPayload, match="'D' is not an option"):
        parse_quiz(as_text(payload))


def test_parse_quiz_rejects_boolean_and_text_ids() -> None:
    payload = geo_payload()
    payload["questions"][0]["id"] = True
    with pytest.raises(MalformedQuizPayload, match="must be an integer"):
        parse_quiz(as_text(payload))

    payload["questions"][0]["id"] = "first"
    with pytest.raises(MalformedQuizPayload, match="must be an integer"):
        parse_quiz(as_text(payload))


def test_parse_quiz_requires_options_and_question_text() -> None:
    payload = geo_payload()
    payload["questions"][0]["options"] = []
    with pytest.raises(MalformedQuizPayload, match="has no options"):
        parse_quiz(as_text(payload))

    payload = geo_payload()
    payload["questions"][0]["question"] = "   "
    with pytest.raises(MalformedQuizPayload, match="has no text"):
        parse_quiz(as_text(payload))


def test_parse_quiz_keeps_backticks_inside_plain_json() -> None:
    payload = geo_payload()
    payload["questions"][0]["question"] = "What does ```print(1)``` output?"

    quiz = parse_quiz(as_text(payload))

    assert quiz.questions[0].question == "What does ```print(1)``` output?"


def test_parse_quiz_unwraps_fence_around_json_with_backticks() -> None:
    payload = geo_payload()
    payload["questions"][0]["explanation"] = "Run ```ls``` to check."
    raw = "```json\n" + as_text(payload) + "\n```"

    quiz = parse_quiz(raw)

    assert quiz.questions[0].explanation == "Run ```ls``` to check."
