from __future__ import annotations

from typing import List

import pytest

from notequiz.llm import ModelInvoker
from notequiz.metrics import MetricsRegistry
from notequiz.services import QuizService
from notequiz.storage import InMemoryNoteRepository


VALID_COMPLETION = (
    "Sure! Here is your question:\n"
    '{"question": "What drives the spacing effect?", "type": "essay", '
    '"explanation": "Spaced reviews strengthen recall.", "difficulty": "hard"}\n'
    "Good luck!"
)


class StubModel:
    """Returns a canned completion and remembers every prompt."""

    def __init__(self, completion: str = VALID_COMPLETION) -> None:
        self.completion = completion
        self.calls: List[tuple] = []

    def complete(self, prompt: str, temperature: float) -> str:
        self.calls.append((prompt, temperature))
        return self.completion


@pytest.fixture
def repository() -> InMemoryNoteRepository:
    repo = InMemoryNoteRepository()
    repo.create("Spaced repetition schedules reviews just before forgetting.")
    repo.create("Active recall means retrieving facts without looking at them.")
    return repo


@pytest.fixture
def stub_model() -> StubModel:
    return StubModel()


@pytest.fixture
def metrics() -> MetricsRegistry:
    return MetricsRegistry()


@pytest.fixture
def quiz_service(repository, stub_model, metrics) -> QuizService:
    return QuizService(repository, ModelInvoker(stub_model), metrics=metrics)
