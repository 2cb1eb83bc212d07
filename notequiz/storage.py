"""Concrete note repositories backed by process memory and SQLite."""
from __future__ import annotations

import itertools
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from .errors import NoteNotFound
from .models import Note
from .repositories import NoteRepository


class InMemoryNoteRepository(NoteRepository):
    """Keeps notes in a dict; used for development and tests."""

    def __init__(self) -> None:
        self._notes: Dict[int, Note] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, content: str) -> Note:
        now = datetime.utcnow()
        with self._lock:
            note = Note(id=next(self._ids), content=content, created_at=now, updated_at=now)
            self._notes[note.id] = note
        return note

    def get(self, note_id: int) -> Note:
        try:
            return self._notes[note_id]
        except KeyError:
            raise NoteNotFound(note_id) from None

    def get_all(self) -> List[Note]:
        return sorted(self._notes.values(), key=lambda note: (note.created_at, note.id), reverse=True)

    def update(self, note_id: int, content: str) -> Note:
        with self._lock:
            current = self.get(note_id)
            note = current.model_copy(update={"content": content, "updated_at": datetime.utcnow()})
            self._notes[note_id] = note
        return note

    def delete(self, note_id: int) -> None:
        with self._lock:
            if self._notes.pop(note_id, None) is None:
                raise NoteNotFound(note_id)


class SqliteNoteRepository(NoteRepository):
    """Stores notes in a SQLite database."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._initialise_schema()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _initialise_schema(self) -> None:
        with self._lock:
            cursor = self._conn.cursor()
            cursor.executescript(
                """
                CREATE TABLE IF NOT EXISTS notes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    content TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_notes_created_at ON notes (created_at);
                """
            )
            self._conn.commit()

    @staticmethod
    def _row_to_note(row: sqlite3.Row) -> Note:
        return Note(
            id=row["id"],
            content=row["content"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def create(self, content: str) -> Note:
        now = datetime.utcnow().isoformat()
        with self._lock:
            cursor = self._conn.cursor()
            cursor.execute(
                "INSERT INTO notes (content, created_at, updated_at) VALUES (?, ?, ?)",
                (content, now, now),
            )
            self._conn.commit()
            note_id = cursor.lastrowid
        return self.get(note_id)

    def get(self, note_id: int) -> Note:
        with self._lock:
            cursor = self._conn.cursor()
            row = cursor.execute(
                "SELECT id, content, created_at, updated_at FROM notes WHERE id = ?",
                (note_id,),
            ).fetchone()
        if not row:
            raise NoteNotFound(note_id)
        return self._row_to_note(row)

    def get_all(self) -> List[Note]:
        with self._lock:
            cursor = self._conn.cursor()
            rows = cursor.execute(
                "SELECT id, content, created_at, updated_at FROM notes ORDER BY created_at DESC, id DESC"
            ).fetchall()
        return [self._row_to_note(row) for row in rows]

    def update(self, note_id: int, content: str) -> Note:
        with self._lock:
            cursor = self._conn.cursor()
            cursor.execute(
                """
                UPDATE notes
                   SET content = ?, updated_at = ?
                 WHERE id = ?
                """,
                (content, datetime.utcnow().isoformat(), note_id),
            )
            if cursor.rowcount == 0:
                raise NoteNotFound(note_id)
            self._conn.commit()
        return self.get(note_id)

    def delete(self, note_id: int) -> None:
        with self._lock:
            cursor = self._conn.cursor()
            cursor.execute("DELETE FROM notes WHERE id = ?", (note_id,))
            if cursor.rowcount == 0:
                raise NoteNotFound(note_id)
            self._conn.commit()


__all__ = ["InMemoryNoteRepository", "SqliteNoteRepository"]
