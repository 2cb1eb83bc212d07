"""Repository interfaces for NoteQuiz persistent state."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .models import Note


class NoteRepository(ABC):
    """Create, read, update and delete study notes keyed by integer id."""

    @abstractmethod
    def create(self, content: str) -> Note:
        """Persist a new note and return it with its assigned id."""

    @abstractmethod
    def get(self, note_id: int) -> Note:
        """Return the note or raise ``NoteNotFound``."""

    @abstractmethod
    def get_all(self) -> List[Note]:
        """Return every note, newest first."""

    @abstractmethod
    def update(self, note_id: int, content: str) -> Note:
        """Replace the note content or raise ``NoteNotFound``."""

    @abstractmethod
    def delete(self, note_id: int) -> None:
        """Remove the note or raise ``NoteNotFound``."""


__all__ = ["NoteRepository"]
