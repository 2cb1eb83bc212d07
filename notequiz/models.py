"""Pydantic models for the NoteQuiz backend."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator


Difficulty = Literal["easy", "medium", "hard"]
QuestionType = Literal["multiple-choice", "essay", "true-false"]

DIFFICULTIES = get_args(Difficulty)
QUESTION_TYPES = get_args(QuestionType)


def _known_value(value, allowed):
    """Normalise an override, dropping anything outside ``allowed``."""

    if not isinstance(value, str):
        return None
    normalised = value.strip().lower()
    return normalised if normalised in allowed else None


class CamelModel(BaseModel):
    """Accepts both field names and their camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class Note(CamelModel):
    """Stored study note."""

    id: int
    content: str
    created_at: datetime = Field(default_factory=datetime.utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.utcnow, alias="updatedAt")


class CreateNoteRequest(BaseModel):
    content: str


class UpdateNoteRequest(BaseModel):
    content: Optional[str] = None


class QuestionRecord(CamelModel):
    """Question produced by a single successful generation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    text: str
    # type and difficulty carry the model's raw strings
    type: str
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = Field(default=None, alias="correctAnswer")
    explanation: Optional[str] = None
    difficulty: str
    based_on_notes: List[int] = Field(default_factory=list, alias="basedOnNotes")


class ConversationTurn(BaseModel):
    """One message exchanged between the learner and the assistant."""

    # role and content are checked by validate_conversation so malformed
    # turns surface as InvalidConversation
    role: str = ""
    content: str = ""
    question: Optional[QuestionRecord] = None


class GeneratedQuestion(CamelModel):
    """Payload the completion model is asked to emit."""

    question: Optional[str] = None
    type: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = Field(default=None, alias="correctAnswer")
    explanation: Optional[str] = None
    difficulty: Optional[str] = None


class QuizOptions(CamelModel):
    """Explicit generation parameters overriding the inferred ones."""

    difficulty: Optional[str] = None
    question_type: Optional[str] = Field(default=None, alias="questionType")

    @field_validator("difficulty", mode="before")
    @classmethod
    def known_difficulty(cls, value):
        return _known_value(value, DIFFICULTIES)

    @field_validator("question_type", mode="before")
    @classmethod
    def known_question_type(cls, value):
        return _known_value(value, QUESTION_TYPES)


class QuizRequest(CamelModel):
    """Input body for /notes/generate-quiz."""

    note_ids: List[int] = Field(default_factory=list, alias="noteIds")
    conversation: List[ConversationTurn] = Field(default_factory=list)
    options: Optional[QuizOptions] = Field(default_factory=QuizOptions)


class QuizMetadata(CamelModel):
    generated_at: str = Field(alias="generatedAt")
    # None means usage is not measured
    tokens_used: Optional[int] = Field(default=None, alias="tokensUsed")
    processing_time_ms: int = Field(alias="processingTimeMs")


class QuizGenerationResult(BaseModel):
    conversation: List[ConversationTurn]
    metadata: QuizMetadata


class QuizResponseData(BaseModel):
    conversation: List[ConversationTurn]


class QuizResponse(BaseModel):
    """Response body for /notes/generate-quiz."""

    success: bool = True
    data: QuizResponseData
    metadata: QuizMetadata


__all__ = [
    "Difficulty",
    "QuestionType",
    "DIFFICULTIES",
    "QUESTION_TYPES",
    "Note",
    "CreateNoteRequest",
    "UpdateNoteRequest",
    "QuestionRecord",
    "ConversationTurn",
    "GeneratedQuestion",
    "QuizOptions",
    "QuizRequest",
    "QuizMetadata",
    "QuizGenerationResult",
    "QuizResponseData",
    "QuizResponse",
]
