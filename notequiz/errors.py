"""Error taxonomy for the quiz generation pipeline and note storage."""
from __future__ import annotations

from typing import Any, Dict, Optional


class NoteQuizError(Exception):
    """Base class for every failure surfaced by the NoteQuiz core."""

    error_code = "INTERNAL_ERROR"
    status_code = 500
    stage = "unknown"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class InvalidConversation(NoteQuizError):
    """The conversation does not end with a non-empty user turn."""

    error_code = "INVALID_CONVERSATION"
    status_code = 400
    stage = "conversation"


class NoContentFound(NoteQuizError):
    """None of the requested notes could be resolved."""

    error_code = "NO_CONTENT_FOUND"
    status_code = 400
    stage = "aggregation"


class ModelCallFailed(NoteQuizError):
    """The completion model raised instead of returning text."""

    error_code = "MODEL_CALL_FAILED"
    status_code = 502
    stage = "model"


class MalformedResponse(NoteQuizError):
    """The model output holds no decodable question payload."""

    error_code = "MALFORMED_RESPONSE"
    status_code = 502
    stage = "extraction"


class MissingRequiredField(NoteQuizError):
    """The decoded payload lacks a mandatory field."""

    error_code = "MISSING_REQUIRED_FIELD"
    status_code = 502
    stage = "extraction"

    def __init__(self, field_name: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.field_name = field_name
        super().__init__(f"{field_name} field is required", context=context)


class NoteNotFound(NoteQuizError):
    error_code = "NOTE_NOT_FOUND"
    status_code = 404
    stage = "storage"

    def __init__(self, note_id: int) -> None:
        self.note_id = note_id
        super().__init__(f"note with id {note_id} not found", context={"note_id": note_id})


class NoteStorageError(NoteQuizError):
    """The note store failed while listing or reading notes."""

    error_code = "NOTE_STORAGE_ERROR"
    status_code = 500
    stage = "storage"


class InvalidNote(NoteQuizError):
    """Rejected note payload or identifier."""

    error_code = "INVALID_NOTE"
    status_code = 400
    stage = "notes"


__all__ = [
    "NoteQuizError",
    "InvalidConversation",
    "NoContentFound",
    "ModelCallFailed",
    "MalformedResponse",
    "MissingRequiredField",
    "NoteNotFound",
    "NoteStorageError",
    "InvalidNote",
]
