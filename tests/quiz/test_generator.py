from __future__ import annotations

import pytest

from fixtures import FakeOpenAIClient
from quizgen.errors import GenerationFailure, NoFileSelected, NoTopicProvided
from quizgen.quiz import generator


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("photosynthesis-notes.pdf", "photosynthesis notes"),
        ("cell_biology-ch1.docx", "cell biology ch1"),
        ("archive.tar.gz", "archive"),
        ("/tmp/some/dir/world_war_2.txt", "world war 2"),
    ],
)
def test_topic_from_filename(name, expected):
    assert generator.topic_from_filename(name) == expected


def test_build_request_for_topic_strips_whitespace():
    request = generator.build_request(
        "topic", topic="  Photosynthesis ", difficulty="easy", count=3
    )

    assert request == generator.GenerationRequest("Photosynthesis", "easy", 3)


def test_build_request_requires_topic():
    with pytest.raises(NoTopicProvided):
        generator.build_request("topic", topic="   ")
    with pytest.raises(NoTopicProvided):
        generator.build_request("topic", topic=None)


def test_build_request_for_file_derives_topic(tmp_path):
    source = tmp_path / "photosynthesis-notes.pdf"
    source.write_bytes(b"%PDF")

    request = generator.build_request("file", file=source, difficulty="hard")

    assert request.topic == "photosynthesis notes"
    assert request.source_file == source
    assert request.difficulty == "hard"


def test_build_request_for_file_requires_existing_file(tmp_path):
    with pytest.raises(NoFileSelected):
        generator.build_request("file", file=None)
    with pytest.raises(NoFileSelected):
        generator.build_request("file", file=tmp_path / "missing.pdf")


def test_build_request_rejects_file_without_usable_name(tmp_path):
    source = tmp_path / ".hidden"
    source.write_text("x", encoding="utf-8")

    with pytest.raises(NoTopicProvided, match="Could not derive"):
        generator.build_request("file", file=source)


@pytest.mark.parametrize(
    ("difficulty", "count"),
    [("extreme", 5), ("easy", 0), ("easy", 21), ("easy", True)],
)
def test_validate_settings_rejects_out_of_range(difficulty, count):
    with pytest.raises(ValueError):
        generator.validate_settings(difficulty, count)


def test_generate_quiz_calls_model_with_settings(fake_client):
    client = fake_client
    client.queue_response('  {"title": "Photosynthesis"}  ')
    settings = generator.GenerationSettings(
        model="test-model", temperature=0.1, max_tokens=500
    )

    text = generator.generate_quiz(
        "Photosynthesis", "easy", 3, client=client, settings=settings
    )

    assert text == '{"title": "Photosynthesis"}'
    call = client.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.1
    assert call["max_tokens"] == 500
    assert "Create a easy quiz about: Photosynthesis" in client.last_user_prompt
    assert "Number of questions: 3" in client.last_user_prompt


def test_generate_quiz_wraps_client_errors():
    client = FakeOpenAIClient(error=RuntimeError("rate limited"))

    with pytest.raises(GenerationFailure, match="rate limited"):
        generator.generate_quiz("Topic", "medium", 5, client=client)


def test_generate_quiz_rejects_empty_content():
    client = FakeOpenAIClient()
    client.queue_response(None)

    with pytest.raises(GenerationFailure, match="no content"):
        generator.generate_quiz("Topic", "medium", 5, client=client)
