# SPDX-License-Identifier: GPL-3.0-or-later

import json
import logging
import os
import sqlite3

from gi.repository import GLib

from tidynotes.constants import STORAGE_KEY
from tidynotes.note import Note, note_from_dict, note_to_dict

logger = logging.getLogger(__name__)


class NoteStore:
    """All notes stored as one JSON document, so every write replaces the set."""

    def __init__(self, db_path=None, key=STORAGE_KEY):
        if db_path is None:
            data_dir = os.path.join(GLib.get_user_data_dir(), 'tidynotes')
            os.makedirs(data_dir, exist_ok=True)
            db_path = os.path.join(data_dir, 'notes.db')

        self._key = key
        self._db = sqlite3.connect(db_path)
        self._db.execute('PRAGMA journal_mode=WAL')
        self._db.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self):
        self._db.executescript('''
            CREATE TABLE IF NOT EXISTS documents (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        ''')

    # --- Read ---

    def load_notes(self) -> list[Note]:
        """All stored notes; [] if nothing is stored or it cannot be read."""
        row = self._db.execute(
            'SELECT value FROM documents WHERE key = ?', (self._key,)
        ).fetchone()
        if row is None:
            return []
        try:
            data = json.loads(row['value'])
        except json.JSONDecodeError as e:
            logger.warning('Ignoring unreadable notes under %s: %s', self._key, e)
            return []
        if not isinstance(data, list):
            logger.warning('Ignoring notes under %s: expected a list, got %s',
                           self._key, type(data).__name__)
            return []

        notes = []
        for index, item in enumerate(data):
            try:
                notes.append(note_from_dict(item))
            except (TypeError, KeyError, ValueError, AttributeError) as e:
                logger.warning('Skipping unreadable note %d under %s: %s',
                               index, self._key, e)
        return notes

    def load_note(self, note_id) -> Note | None:
        for note in self.load_notes():
            if note.id == note_id:
                return note
        return None

    # --- Write ---

    def save_notes(self, notes):
        """Persist the full note list, replacing whatever was stored."""
        value = json.dumps([note_to_dict(n) for n in notes])
        self._db.execute(
            'INSERT INTO documents (key, value) VALUES (?, ?) '
            'ON CONFLICT(key) DO UPDATE SET value = excluded.value',
            (self._key, value),
        )
        self._db.commit()

    def save_note(self, note):
        notes = self.load_notes()
        for index, existing in enumerate(notes):
            if existing.id == note.id:
                notes[index] = note
                break
        else:
            notes.append(note)
        self.save_notes(notes)

    def delete_note(self, note_id):
        notes = self.load_notes()
        remaining = [n for n in notes if n.id != note_id]
        if len(remaining) != len(notes):
            self.save_notes(remaining)

    def close(self):
        self._db.close()
