"""Generate, take and export AI-written study quizzes."""
