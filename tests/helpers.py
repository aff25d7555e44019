# SPDX-License-Identifier: GPL-3.0-or-later
"""Builders for editing engine documents and in-memory collaborators."""


# --- Editing engine JSON builders ---

def text(value, *marks):
    node = {'type': 'text', 'text': value}
    if marks:
        node['marks'] = [{'type': m} for m in marks]
    return node


def para(*children):
    return {'type': 'paragraph', 'content': list(children)}


def heading(level, *children):
    return {'type': 'heading', 'attrs': {'level': level}, 'content': list(children)}


def li(*children):
    return {'type': 'listItem', 'content': list(children)}


def task(*children, checked=False):
    return {'type': 'taskItem', 'attrs': {'checked': checked}, 'content': list(children)}


def bullet_list(*items):
    return {'type': 'bulletList', 'content': list(items)}


def ordered_list(*items):
    return {'type': 'orderedList', 'content': list(items)}


def task_list(*items):
    return {'type': 'taskList', 'content': list(items)}


def doc(*children):
    return {'type': 'doc', 'content': list(children)}


class RecordingCommands:
    """Stands in for the editing engine's list commands."""

    def __init__(self, result=True):
        self.calls = []
        self.result = result

    def lift_list_item(self, kind):
        self.calls.append(('lift', kind))
        return self.result

    def split_list_item(self, kind):
        self.calls.append(('split', kind))
        return self.result

    def sink_list_item(self, kind):
        self.calls.append(('sink', kind))
        return self.result


class MemoryStore:

    def __init__(self, notes=None):
        self.notes = list(notes or [])
        self.saves = []

    def load_notes(self):
        return list(self.notes)

    def save_notes(self, notes):
        self.notes = list(notes)
        self.saves.append(list(notes))
