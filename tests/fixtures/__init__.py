"""Shared testing fixtures for the quizgen test suite."""

from .openai import FakeOpenAIClient  # noqa: F401
from .quizzes import as_text, geo_payload, multi_payload  # noqa: F401

__all__ = [
    "FakeOpenAIClient",
    "as_text",
    "geo_payload",
    "multi_payload",
]
