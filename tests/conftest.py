# SPDX-License-Identifier: GPL-3.0-or-later

import pytest

from tidynotes.editor_state import CreateNote, apply
from tidynotes.note import EditorState

from helpers import MemoryStore, RecordingCommands


@pytest.fixture
def state():
    """State holding one freshly created, active note."""
    return apply(EditorState(), CreateNote())


@pytest.fixture
def note(state):
    return state.notes[0]


@pytest.fixture
def commands():
    return RecordingCommands()


@pytest.fixture
def memory_store():
    return MemoryStore()
