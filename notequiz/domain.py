"""Domain values shared across the generation pipeline."""
from __future__ import annotations

from dataclasses import dataclass

from .models import Difficulty, QuestionType


DEFAULT_DIFFICULTY: Difficulty = "medium"
DEFAULT_QUESTION_TYPE: QuestionType = "multiple-choice"


@dataclass(frozen=True)
class GenerationParameters:
    """Difficulty and question format requested for one generation."""

    difficulty: Difficulty = DEFAULT_DIFFICULTY
    question_type: QuestionType = DEFAULT_QUESTION_TYPE

    def with_overrides(
        self, difficulty: Difficulty | None = None, question_type: QuestionType | None = None
    ) -> "GenerationParameters":
        return GenerationParameters(
            difficulty=difficulty or self.difficulty,
            question_type=question_type or self.question_type,
        )

    def to_dict(self) -> dict:
        return {"difficulty": self.difficulty, "question_type": self.question_type}


__all__ = ["DEFAULT_DIFFICULTY", "DEFAULT_QUESTION_TYPE", "GenerationParameters"]
