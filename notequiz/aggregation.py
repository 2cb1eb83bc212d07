"""Resolve note identifiers into the grounding text handed to the model."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .errors import NoContentFound, NoteQuizError, NoteStorageError
from .metrics import MetricsRegistry
from .models import Note
from .repositories import NoteRepository


logger = logging.getLogger(__name__)

NOTE_SEPARATOR = "\n\n---\n\n"


@dataclass
class AggregatedContent:
    """Notes that resolved, the ids that did not, and their joined text."""

    notes: List[Note] = field(default_factory=list)
    skipped_ids: List[int] = field(default_factory=list)

    @property
    def text(self) -> str:
        return NOTE_SEPARATOR.join(f"Note {note.id}: {note.content}" for note in self.notes)


class ContentAggregator:
    """Fetches notes from the repository, tolerating individual misses."""

    def __init__(self, repository: NoteRepository, metrics: Optional[MetricsRegistry] = None) -> None:
        self._repository = repository
        self._metrics = metrics

    def collect(self, note_ids: Sequence[int]) -> AggregatedContent:
        if not note_ids:
            logger.info("No specific note IDs provided, fetching all notes")
            try:
                notes = self._repository.get_all()
            except NoteQuizError:
                raise
            except Exception as exc:
                raise NoteStorageError(f"failed to load notes: {exc}") from exc
            result = AggregatedContent(notes=list(notes))
        else:
            logger.info("Fetching %d specific notes by ID", len(note_ids))
            result = AggregatedContent()
            for note_id in note_ids:
                try:
                    result.notes.append(self._repository.get(note_id))
                except NoteQuizError as exc:
                    logger.warning("Skipping note %s: %s", note_id, exc)
                    result.skipped_ids.append(note_id)
                except Exception:
                    logger.exception("Failed to fetch note %s, skipping", note_id)
                    result.skipped_ids.append(note_id)

        if not result.notes:
            raise NoContentFound("no notes found", context={"note_ids": list(note_ids)})
        return result

    def resolve(self, note_ids: Sequence[int]) -> str:
        """Return the concatenated content of every note that could be fetched."""

        content = self.collect(note_ids)
        if content.skipped_ids and self._metrics is not None:
            self._metrics.record_skipped_notes(len(content.skipped_ids))
        text = content.text
        logger.info(
            "Combined %d notes into %d characters (%d skipped)",
            len(content.notes),
            len(text),
            len(content.skipped_ids),
        )
        return text


__all__ = ["NOTE_SEPARATOR", "AggregatedContent", "ContentAggregator"]
