"""Validation utilities applied before generation or persistence."""
from __future__ import annotations

from typing import Optional, Sequence

from .errors import InvalidConversation, InvalidNote
from .models import ConversationTurn


MAX_NOTE_LENGTH = 2000


def validate_conversation(conversation: Sequence[ConversationTurn]) -> ConversationTurn:
    """Return the final user turn, raising if the conversation cannot be answered."""

    if not conversation:
        raise InvalidConversation("conversation cannot be empty")

    last_turn = conversation[-1]
    if last_turn.role != "user":
        raise InvalidConversation(
            "last message must be from user", context={"role": last_turn.role}
        )
    if not last_turn.content.strip():
        raise InvalidConversation("user message cannot be empty")
    return last_turn


def validate_note_id(note_id: int) -> None:
    if note_id <= 0:
        raise InvalidNote(f"invalid note ID: {note_id}", context={"note_id": note_id})


def validate_note_content(content: Optional[str]) -> str:
    """Return trimmed note content, rejecting blank or oversized text."""

    if content is None:
        raise InvalidNote("content field must be provided")
    trimmed = content.strip()
    if not trimmed:
        raise InvalidNote("content is required")
    if len(trimmed) > MAX_NOTE_LENGTH:
        raise InvalidNote(f"content cannot exceed {MAX_NOTE_LENGTH} characters")
    return trimmed


__all__ = [
    "MAX_NOTE_LENGTH",
    "validate_conversation",
    "validate_note_id",
    "validate_note_content",
]
