"""Tolerant extraction of the question payload embedded in model output."""
from __future__ import annotations

import itertools
import logging
import time
from typing import Sequence

from pydantic import ValidationError

from .errors import MalformedResponse, MissingRequiredField
from .models import GeneratedQuestion, QuestionRecord


logger = logging.getLogger(__name__)

QUESTION_ID_PREFIX = "q_llm_"

_sequence = itertools.count(1)


def next_question_id() -> str:
    """Timestamp-based identifier, unique within this process."""

    return f"{QUESTION_ID_PREFIX}{time.time_ns()}_{next(_sequence)}"


def locate_payload(raw: str) -> str:
    """Return the text between the first ``{`` and the last ``}``, inclusive.

    Models tend to wrap the object in prose or code fences; everything
    outside the outermost braces is ignored.
    """

    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise MalformedResponse("no valid JSON found in response")
    return raw[start : end + 1]


def extract_question(raw: str, note_ids: Sequence[int]) -> QuestionRecord:
    """Decode the model output into a ``QuestionRecord``.

    ``type`` and ``difficulty`` are passed through exactly as the model wrote
    them. ``based_on_notes`` echoes the ids the caller asked for, not the ones
    that resolved.
    """

    logger.info("Parsing model response with %d characters", len(raw))
    payload_text = locate_payload(raw)
    logger.debug("Located payload of %d characters", len(payload_text))

    try:
        payload = GeneratedQuestion.model_validate_json(payload_text)
    except ValidationError as exc:
        raise MalformedResponse(
            f"failed to parse JSON: {exc.errors()[0]['msg']}",
            context={"errors": exc.error_count()},
        ) from exc

    if not payload.question:
        raise MissingRequiredField("question")

    record = QuestionRecord(
        id=next_question_id(),
        text=payload.question,
        type=payload.type or "",
        options=payload.options,
        correct_answer=payload.correct_answer,
        explanation=payload.explanation,
        difficulty=payload.difficulty or "",
        based_on_notes=list(note_ids),
    )
    logger.info(
        "Parsed question %s type=%s difficulty=%s", record.id, record.type, record.difficulty
    )
    return record


__all__ = ["QUESTION_ID_PREFIX", "next_question_id", "locate_payload", "extract_question"]
