"""Sample quiz payloads shared by tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List


def geo_payload() -> Dict[str, Any]:
    return {
        "title": "Geo",
        "difficulty": "easy",
        "questions": [
            {
                "id": 1,
                "question": "Capital of France?",
                "options": [
                    {"id": "A", "text": "Paris"},
                    {"id": "B", "text": "Lyon"},
                ],
                "correctAnswer": "A",
                "explanation": "Paris is the capital.",
            }
        ],
    }


def multi_payload(count: int = 3) -> Dict[str, Any]:
    questions: List[Dict[str, Any]] = []
    for number in range(1, count + 1):
        questions.append(
            {
                "id": number,
                "question": f"What is {number} + {number}?",
                "options": [
                    {"id": "A", "text": str(number * 2)},
                    {"id": "B", "text": str(number * 2 + 1)},
                    {"id": "C", "text": str(number * 3)},
                ],
                "correctAnswer": "A",
                "explanation": f"**{number} + {number}** is *{number * 2}*.",
            }
        )
    return {"title": "Arithmetic", "difficulty": "medium", "questions": questions}


def as_text(payload: Dict[str, Any]) -> str:
    return json.dumps(payload)
