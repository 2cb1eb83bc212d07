"""Keyword heuristics that turn a learner request into generation parameters."""
from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

from .domain import DEFAULT_DIFFICULTY, DEFAULT_QUESTION_TYPE, GenerationParameters
from .models import Difficulty, QuestionType


logger = logging.getLogger(__name__)

# Checked in order; the first matching rule wins.
DIFFICULTY_RULES: Sequence[Tuple[Difficulty, Tuple[str, ...]]] = (
    ("easy", ("easy", "simple", "basic", "beginner")),
    ("hard", ("hard", "difficult", "challenging", "advanced")),
)
QUESTION_TYPE_RULES: Sequence[Tuple[QuestionType, Tuple[str, ...]]] = (
    ("essay", ("essay", "explain", "describe", "discuss")),
    ("true-false", ("true", "false", "yes", "no")),
)


def contains_keywords(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def infer_difficulty(text: str) -> Difficulty:
    for difficulty, keywords in DIFFICULTY_RULES:
        if contains_keywords(text, keywords):
            return difficulty
    return DEFAULT_DIFFICULTY


def infer_question_type(text: str) -> QuestionType:
    for question_type, keywords in QUESTION_TYPE_RULES:
        if contains_keywords(text, keywords):
            return question_type
    return DEFAULT_QUESTION_TYPE


def infer_parameters(text: str) -> GenerationParameters:
    """Derive difficulty and question type from the latest user message.

    Matching is a case-insensitive substring test, so "know" counts as "no".
    """

    parameters = GenerationParameters(
        difficulty=infer_difficulty(text),
        question_type=infer_question_type(text),
    )
    logger.debug(
        "Inferred difficulty=%s question_type=%s", parameters.difficulty, parameters.question_type
    )
    return parameters


__all__ = [
    "DIFFICULTY_RULES",
    "QUESTION_TYPE_RULES",
    "contains_keywords",
    "infer_difficulty",
    "infer_question_type",
    "infer_parameters",
]
