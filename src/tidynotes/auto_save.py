# SPDX-License-Identifier: GPL-3.0-or-later

from gi.repository import GLib

from tidynotes.constants import AUTOSAVE_DELAY_MS


class AutoSave:
    """Debounced whole-set save of the notes using GLib.timeout_add."""

    def __init__(self, store, delay_ms=AUTOSAVE_DELAY_MS):
        self._store = store
        self._delay_ms = delay_ms
        self._timeout_id = None
        self._pending = None

    def __call__(self, notes):
        self.schedule(notes)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, notes):
        """Remember the latest notes and (re)start the debounce timer."""
        self._pending = notes
        self.cancel()
        self._timeout_id = GLib.timeout_add(self._delay_ms, self._on_timeout)

    def cancel(self):
        """Cancel the timer; the pending notes are kept."""
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
            self._timeout_id = None

    def flush(self):
        """Save immediately, canceling any pending debounce."""
        self.cancel()
        self._save()

    def _on_timeout(self):
        self._timeout_id = None
        self._save()
        return GLib.SOURCE_REMOVE

    def _save(self):
        if self._pending is None:
            return
        notes, self._pending = self._pending, None
        self._store.save_notes(notes)
