# SPDX-License-Identifier: GPL-3.0-or-later

import logging

from tidynotes.editor_state import LoadNotes, SetActiveNote, apply
from tidynotes.list_keymap import handle_key
from tidynotes.note import EditorState, Note
from tidynotes.rich_text_serializer import resolve_body

logger = logging.getLogger(__name__)


class EditorSession:
    """Holds the editor state and routes input through the reducer.

    `save` receives the full note list whenever it changes; by default it is
    a debounced AutoSave writing to `store`.
    """

    def __init__(self, store, save=None, nested_tasks=True):
        if save is None:
            from tidynotes.auto_save import AutoSave
            save = AutoSave(store)

        self._store = store
        self._save = save
        self._nested_tasks = nested_tasks
        self._state = EditorState()
        self._listeners = []
        self._hydrating = False

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def active_note(self) -> Note | None:
        for note in self._state.notes:
            if note.id == self._state.active_note_id:
                return note
        return None

    def active_body(self) -> str | None:
        """Markup for the active note, migrating legacy blocks if needed."""
        note = self.active_note
        if note is None:
            return None
        return resolve_body(note)

    def subscribe(self, callback):
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def dispatch(self, action) -> EditorState:
        previous = self._state
        self._state = apply(previous, action)
        if self._state is previous:
            return self._state

        for callback in list(self._listeners):
            callback(self._state)

        if self._state.notes is not previous.notes and not self._hydrating:
            self._save(self._state.notes)
        return self._state

    def hydrate(self):
        """Load stored notes and open the first one, without saving back."""
        notes = self._store.load_notes()
        logger.debug('Loaded %d notes', len(notes))
        if not notes:
            return

        self._hydrating = True
        try:
            self.dispatch(LoadNotes(notes=notes))
            self.dispatch(SetActiveNote(note_id=notes[0].id))
        finally:
            self._hydrating = False

    def flush(self):
        flush = getattr(self._save, 'flush', None)
        if flush is not None:
            flush()

    def handle_key(self, tree, cursor, key, kind, commands) -> bool:
        """Route a list key press to the editing engine; False to propagate."""
        return handle_key(tree, cursor, key, kind, commands,
                          nested_tasks=self._nested_tasks)


def open_session(db_path=None) -> EditorSession:
    """Build a session backed by the on-disk store and the user's settings."""
    from tidynotes.auto_save import AutoSave
    from tidynotes.log import setup_logging
    from tidynotes.note_store import NoteStore
    from tidynotes.settings import load_settings

    settings = load_settings()
    setup_logging(settings.log_level)

    store = NoteStore(db_path)
    session = EditorSession(
        store,
        save=AutoSave(store, delay_ms=settings.autosave_delay_ms),
        nested_tasks=settings.nested_tasks,
    )
    session.hydrate()
    return session
