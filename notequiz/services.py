"""Core services implementing quiz generation and note management."""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from .aggregation import ContentAggregator
from .domain import GenerationParameters
from .errors import NoteQuizError
from .extraction import extract_question
from .inference import infer_parameters
from .llm import ModelInvoker
from .metrics import METRICS, MetricsRegistry
from .models import (
    ConversationTurn,
    Note,
    QuizGenerationResult,
    QuizMetadata,
    QuizOptions,
)
from .prompts import PromptBuilder
from .repositories import NoteRepository
from .validators import validate_conversation, validate_note_content, validate_note_id


logger = logging.getLogger(__name__)

ASSISTANT_INTRO = "Here's a quiz question based on your notes:"


class NoteService:
    """Validates note payloads before delegating to the repository."""

    def __init__(self, repository: NoteRepository) -> None:
        self._repository = repository

    def create(self, content: Optional[str]) -> Note:
        return self._repository.create(validate_note_content(content))

    def get(self, note_id: int) -> Note:
        validate_note_id(note_id)
        return self._repository.get(note_id)

    def list_all(self) -> List[Note]:
        return self._repository.get_all()

    def update(self, note_id: int, content: Optional[str]) -> Note:
        validate_note_id(note_id)
        return self._repository.update(note_id, validate_note_content(content))

    def delete(self, note_id: int) -> None:
        validate_note_id(note_id)
        self._repository.delete(note_id)


class QuizService:
    """Turns the latest user request plus study notes into a quiz question."""

    def __init__(
        self,
        repository: NoteRepository,
        invoker: ModelInvoker,
        prompt_builder: Optional[PromptBuilder] = None,
        metrics: Optional[MetricsRegistry] = None,
    ) -> None:
        self._metrics = metrics if metrics is not None else METRICS
        self._aggregator = ContentAggregator(repository, metrics=self._metrics)
        self._invoker = invoker
        self._prompt_builder = prompt_builder or PromptBuilder()

    def _resolve_parameters(self, text: str, options: Optional[QuizOptions]) -> GenerationParameters:
        parameters = infer_parameters(text)
        if options is not None:
            parameters = parameters.with_overrides(options.difficulty, options.question_type)
        self._metrics.record_parameters(parameters.difficulty, parameters.question_type)
        return parameters

    def generate(
        self,
        conversation: Sequence[ConversationTurn],
        note_ids: Sequence[int],
        options: Optional[QuizOptions] = None,
    ) -> Tuple[List[ConversationTurn], float]:
        """Run the pipeline and return the extended conversation with elapsed seconds.

        Any stage failure propagates unchanged and nothing is appended.
        """

        started = time.perf_counter()
        logger.info(
            "Starting quiz generation with %d conversation messages and %d note IDs",
            len(conversation),
            len(note_ids),
        )
        last_turn = validate_conversation(conversation)

        grounding_text = self._aggregator.resolve(note_ids)

        parameters = self._resolve_parameters(last_turn.content, options)
        prompt = self._prompt_builder.build(
            grounding_text, parameters.difficulty, parameters.question_type
        )
        completion = self._invoker.invoke(prompt)
        question = extract_question(completion, note_ids)

        reply = ConversationTurn(role="assistant", content=ASSISTANT_INTRO, question=question)
        updated = [*conversation, reply]
        elapsed = time.perf_counter() - started
        logger.info(
            "Quiz generation completed: question %s, type=%s, difficulty=%s in %.3fs",
            question.id,
            question.type,
            question.difficulty,
            elapsed,
        )
        return updated, elapsed

    def generate_quiz(
        self,
        conversation: Sequence[ConversationTurn],
        note_ids: Sequence[int],
        options: Optional[QuizOptions] = None,
    ) -> QuizGenerationResult:
        self._metrics.record_generation_attempt()
        try:
            updated, elapsed = self.generate(conversation, note_ids, options)
        except NoteQuizError as exc:
            logger.error("Quiz generation failed at %s stage: %s", exc.stage, exc.message)
            self._metrics.record_generation_failure(exc.error_code)
            raise

        processing_time_ms = int(elapsed * 1000)
        self._metrics.record_generation_success(processing_time_ms)
        metadata = QuizMetadata(
            generated_at=datetime.now(timezone.utc).isoformat(),
            tokens_used=None,
            processing_time_ms=processing_time_ms,
        )
        return QuizGenerationResult(conversation=updated, metadata=metadata)


__all__ = ["ASSISTANT_INTRO", "NoteService", "QuizService"]
