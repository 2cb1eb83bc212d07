"""Prompt text and the builder that fills it for a single generation."""
from __future__ import annotations

from dataclasses import dataclass


SYSTEM_PROMPT = """You are a quiz generator AI. Create educational quiz questions based on the provided study notes. Generate questions that test comprehension, application, and analysis of the material. Respond with valid JSON in this exact format:
{
  "question": "The question text here",
  "type": "multiple-choice",
  "options": ["A) Option 1", "B) Option 2", "C) Option 3", "D) Option 4"],
  "correctAnswer": "A",
  "explanation": "Explanation of why this is correct",
  "difficulty": "medium"
}

For essay questions, omit the options and correctAnswer fields. Valid difficulty levels are: easy, medium, hard. Valid types are: multiple-choice, essay, true-false."""

USER_PROMPT_TEMPLATE = """Based on these study notes:

{notes}

Generate a quiz question. Make it {difficulty} difficulty and format it as {question_type}. The question should test understanding of the key concepts from the notes."""


@dataclass(frozen=True)
class PromptTemplates:
    """Immutable prompt configuration handed to ``PromptBuilder``."""

    system: str = SYSTEM_PROMPT
    user: str = USER_PROMPT_TEMPLATE
    separator: str = "\n\n"


class PromptBuilder:
    """Combines the system instruction with notes and inferred parameters."""

    def __init__(self, templates: PromptTemplates | None = None) -> None:
        self._templates = templates or PromptTemplates()

    @property
    def templates(self) -> PromptTemplates:
        return self._templates

    def build(self, grounding_text: str, difficulty: str, question_type: str) -> str:
        user_prompt = self._templates.user.format(
            notes=grounding_text,
            difficulty=difficulty,
            question_type=question_type,
        )
        return f"{self._templates.system}{self._templates.separator}{user_prompt}"


__all__ = ["SYSTEM_PROMPT", "USER_PROMPT_TEMPLATE", "PromptTemplates", "PromptBuilder"]
