from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import FakeOpenAIClient  # noqa: E402


@pytest.fixture
def fake_client() -> FakeOpenAIClient:
    """A fake OpenAI client; queue responses with ``queue_response``."""

    return FakeOpenAIClient()


@pytest.fixture(autouse=True)
def _isolate_workspace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    monkeypatch.setenv("QUIZGEN_DATA_HOME", str(tmp_path / "data"))
    for name in (
        "QUIZGEN_CONFIG",
        "QUIZGEN_OUTPUT_DIR",
        "QUIZGEN_DIFFICULTY",
        "QUIZGEN_COUNT",
        "QUIZGEN_MODEL",
        "QUIZGEN_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    for name in ("quizgen.quiz", "quizgen.export"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
