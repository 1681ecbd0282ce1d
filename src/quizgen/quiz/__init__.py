from .models import Quiz, QuizOption, QuizQuestion, UserAnswer, parse_quiz
from .generator import (
    GenerationRequest,
    GenerationSettings,
    build_request,
    generate_quiz,
    topic_from_filename,
)
from .session import (
    AnswerSelected,
    NextRequested,
    PreviousRequested,
    QuizReceived,
    ResetRequested,
    SessionState,
    answer_for,
    apply,
    compute_score,
    current_question,
    is_answered,
    results_summary,
)
from .view import export_results, request_quiz, run_quiz_session

__all__ = [
    "Quiz",
    "QuizOption",
    "QuizQuestion",
    "UserAnswer",
    "parse_quiz",
    "GenerationRequest",
    "GenerationSettings",
    "build_request",
    "generate_quiz",
    "topic_from_filename",
    "AnswerSelected",
    "NextRequested",
    "PreviousRequested",
    "QuizReceived",
    "ResetRequested",
    "SessionState",
    "answer_for",
    "apply",
    "compute_score",
    "current_question",
    "is_answered",
    "results_summary",
    "export_results",
    "request_quiz",
    "run_quiz_session",
]
