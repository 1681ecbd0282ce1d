"""Exception hierarchy shared by the quizgen commands."""

from __future__ import annotations

__all__ = [
    "QuizgenError",
    "QuizgenConfigError",
    "GenerationFailure",
    "MalformedQuizPayload",
    "NoTopicProvided",
    "NoFileSelected",
    "InvalidTransition",
    "ExportEncodingFailure",
]


class QuizgenError(RuntimeError):
    """Base class for recoverable quizgen failures."""


class QuizgenConfigError(QuizgenError):
    """Raised when configuration parsing or validation fails."""


class GenerationFailure(QuizgenError):
    """Raised when the remote quiz generation call fails."""


class MalformedQuizPayload(QuizgenError):
    """Raised when generator output does not describe a valid quiz."""


class NoTopicProvided(QuizgenError):
    """Raised when a topic submission is blank."""


class NoFileSelected(QuizgenError):
    """Raised when a file submission has no usable file."""


class InvalidTransition(QuizgenError):
    """Raised when a session event is not allowed in the current state."""


class ExportEncodingFailure(QuizgenError):
    """Raised when an export artifact cannot be encoded or written."""
