# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Optional

import gi
gi.require_version('Gdk', '4.0')
from gi.repository import Gdk

from tidynotes.list_keymap import KeyEvent


ENTER_KEYS = (Gdk.KEY_Return, Gdk.KEY_KP_Enter)

# Ctrl/Alt chords are never list navigation.
BLOCKING_MODIFIERS = Gdk.ModifierType.CONTROL_MASK | Gdk.ModifierType.ALT_MASK


def key_event_for(keyval, state=0) -> Optional[KeyEvent]:
    """Translate a key press from a Gtk key controller into a KeyEvent."""
    if state & BLOCKING_MODIFIERS:
        return None
    shift = bool(state & Gdk.ModifierType.SHIFT_MASK)

    if keyval in ENTER_KEYS and not shift:
        return KeyEvent.ENTER
    if keyval == Gdk.KEY_ISO_Left_Tab:
        return KeyEvent.SHIFT_TAB
    if keyval == Gdk.KEY_Tab:
        return KeyEvent.SHIFT_TAB if shift else KeyEvent.TAB
    if keyval == Gdk.KEY_BackSpace:
        return KeyEvent.BACKSPACE
    if keyval == Gdk.KEY_Delete:
        return KeyEvent.DELETE
    return None
