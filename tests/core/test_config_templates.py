from __future__ import annotations

import tomllib

import pytest

from quizgen.core import config_templates
from quizgen.errors import QuizgenConfigError


def test_quiz_template_is_valid_toml():
    template = config_templates.get_template("quiz")

    data = tomllib.loads(template.read_text())

    assert set(data) == {"generation", "export", "logging"}
    assert data["export"]["prefix"] == "quiz-results"


def test_iter_templates_lists_quiz():
    names = [template.name for template in config_templates.iter_templates()]

    assert names == ["quiz"]


def test_unknown_template_raises():
    with pytest.raises(QuizgenConfigError, match="Unknown config template"):
        config_templates.get_template("missing")


def test_template_write_creates_file(tmp_path):
    target = tmp_path / "config" / "quizgen.toml"

    config_templates.get_template("quiz").write(target)

    assert "[generation]" in target.read_text(encoding="utf-8")
