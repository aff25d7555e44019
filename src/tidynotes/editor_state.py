# SPDX-License-Identifier: GPL-3.0-or-later
"""
Editor state management as a pure reducer: (state, action) -> state.

Nothing here mutates its inputs or touches storage; the session persists
whatever state the reducer hands back.
"""

import enum
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from tidynotes.errors import assert_never
from tidynotes.note import (
    HEADING_LEVELS,
    Block,
    ChecklistBlock,
    EditorState,
    HeadingBlock,
    ListBlock,
    Note,
    ParagraphBlock,
    TextSpan,
    create_checklist_item,
    create_note,
    create_paragraph_block,
    empty_content,
    now_ms,
)

logger = logging.getLogger(__name__)


class Direction(str, enum.Enum):
    UP = 'up'
    DOWN = 'down'


class EditorAction:
    pass


# --- Notes ---

@dataclass
class LoadNotes(EditorAction):
    notes: list[Note]


@dataclass
class CreateNote(EditorAction):
    pass


@dataclass
class DeleteNote(EditorAction):
    note_id: str


@dataclass
class SetActiveNote(EditorAction):
    note_id: Optional[str]


@dataclass
class UpdateTitle(EditorAction):
    note_id: str
    title: str


@dataclass
class UpdateBody(EditorAction):
    note_id: str
    body: str


# --- Blocks (legacy) ---

@dataclass
class AddBlock(EditorAction):
    note_id: str
    after_block_id: Optional[str]
    block: Block


@dataclass
class RemoveBlock(EditorAction):
    note_id: str
    block_id: str


@dataclass
class UpdateBlock(EditorAction):
    note_id: str
    block_id: str
    patch: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class ReplaceBlock(EditorAction):
    note_id: str
    block_id: str
    block: Block


@dataclass
class MoveBlock(EditorAction):
    note_id: str
    block_id: str
    direction: Direction


@dataclass
class UpdateBlockContent(EditorAction):
    note_id: str
    block_id: str
    content: list[TextSpan]


# --- List items ---

@dataclass
class UpdateListItem(EditorAction):
    note_id: str
    block_id: str
    item_index: int
    content: list[TextSpan]


@dataclass
class AddListItem(EditorAction):
    note_id: str
    block_id: str
    after_index: int


@dataclass
class RemoveListItem(EditorAction):
    note_id: str
    block_id: str
    item_index: int


# --- Checklist items ---

@dataclass
class ToggleChecklistItem(EditorAction):
    note_id: str
    block_id: str
    item_id: str


@dataclass
class UpdateChecklistItem(EditorAction):
    note_id: str
    block_id: str
    item_id: str
    content: list[TextSpan]


@dataclass
class AddChecklistItem(EditorAction):
    note_id: str
    block_id: str
    after_item_id: Optional[str]


@dataclass
class RemoveChecklistItem(EditorAction):
    note_id: str
    block_id: str
    item_id: str


# --- Helpers ---

def touch(note: Note) -> Note:
    """Stamp a fresh updated_at, strictly later than the previous one."""
    return replace(note, updated_at=max(now_ms(), note.updated_at + 1))


def _update_note(state, note_id, fn):
    """Replace one note with fn(note); the same state if nothing changed."""
    for index, note in enumerate(state.notes):
        if note.id != note_id:
            continue
        new_note = fn(note)
        if new_note is note:
            return state
        notes = list(state.notes)
        notes[index] = new_note
        return replace(state, notes=notes)

    logger.debug('Note %s not found, action ignored', note_id)
    return state


def _edit_note(state, note_id, fn):
    return _update_note(state, note_id, lambda note: touch(fn(note)))


def _update_block(state, note_id, block_id, fn):
    def update(note):
        for index, block in enumerate(note.blocks):
            if block.id != block_id:
                continue
            new_block = fn(block)
            if new_block is block:
                return note
            blocks = list(note.blocks)
            blocks[index] = new_block
            return touch(replace(note, blocks=blocks))

        logger.debug('Block %s not found in note %s', block_id, note_id)
        return note

    return _update_note(state, note_id, update)


def _populated(block: Block) -> Block:
    """Fill an empty list or checklist with its placeholder item."""
    if isinstance(block, ListBlock) and not block.items:
        return replace(block, items=[empty_content()])
    if isinstance(block, ChecklistBlock) and not block.items:
        return replace(block, items=[create_checklist_item()])
    return block


def _patch_block(block: Block, patch) -> Block:
    # id and type always come from the original block.
    allowed = {f.name for f in fields(block)} - {'id'}
    changes = {key: value for key, value in patch.items() if key in allowed}

    if isinstance(block, HeadingBlock) and 'level' in changes \
            and changes['level'] not in HEADING_LEVELS:
        logger.debug('Ignoring invalid heading level %r', changes['level'])
        del changes['level']
    if 'items' in changes and not changes['items']:
        del changes['items']

    return replace(block, **changes)


def _update_checklist_items(state, action, fn):
    def update(block):
        if not isinstance(block, ChecklistBlock):
            return block
        items = fn(block.items)
        if items is block.items:
            return block
        return replace(block, items=items)

    return _update_block(state, action.note_id, action.block_id, update)


def _map_checklist_item(items, item_id, fn):
    for index, item in enumerate(items):
        if item.id == item_id:
            items = list(items)
            items[index] = fn(item)
            return items
    logger.debug('Checklist item %s not found', item_id)
    return items


# --- Block and item handlers ---

def _add_block(state, action):
    def update(note):
        blocks = list(note.blocks)
        at = len(blocks)
        for index, block in enumerate(blocks):
            if block.id == action.after_block_id:
                at = index + 1
                break
        blocks.insert(at, _populated(action.block))
        return replace(note, blocks=blocks)

    return _edit_note(state, action.note_id, update)


def _remove_block(state, action):
    def update(note):
        blocks = [b for b in note.blocks if b.id != action.block_id]
        if len(blocks) == len(note.blocks):
            logger.debug('Block %s not found in note %s', action.block_id, note.id)
            return note
        # Never leave a note without blocks.
        return touch(replace(note, blocks=blocks or [create_paragraph_block()]))

    return _update_note(state, action.note_id, update)


def _move_block(state, action):
    def update(note):
        blocks = list(note.blocks)
        index = next(
            (i for i, b in enumerate(blocks) if b.id == action.block_id), -1)
        if index < 0:
            return note
        if action.direction == Direction.UP:
            target = index - 1
        elif action.direction == Direction.DOWN:
            target = index + 1
        else:
            logger.debug('Ignoring unknown direction %r', action.direction)
            return note
        if not 0 <= target < len(blocks):
            return note
        blocks[index], blocks[target] = blocks[target], blocks[index]
        return touch(replace(note, blocks=blocks))

    return _update_note(state, action.note_id, update)


def _update_block_content(block, content):
    if isinstance(block, (ParagraphBlock, HeadingBlock)):
        return replace(block, content=list(content))
    if isinstance(block, (ListBlock, ChecklistBlock)):
        return block
    assert_never(block)


def _update_list_item(block, action):
    if not isinstance(block, ListBlock):
        return block
    if not 0 <= action.item_index < len(block.items):
        return block
    items = list(block.items)
    items[action.item_index] = list(action.content)
    return replace(block, items=items)


def _add_list_item(block, action):
    if not isinstance(block, ListBlock):
        return block
    items = list(block.items)
    at = min(max(action.after_index + 1, 0), len(items))
    items.insert(at, empty_content())
    return replace(block, items=items)


def _remove_list_item(block, action):
    if not isinstance(block, ListBlock):
        return block
    if not 0 <= action.item_index < len(block.items):
        return block
    items = [item for i, item in enumerate(block.items) if i != action.item_index]
    return replace(block, items=items or [empty_content()])


def _add_checklist_item(items, after_item_id):
    items = list(items)
    at = len(items)
    for index, item in enumerate(items):
        if item.id == after_item_id:
            at = index + 1
            break
    items.insert(at, create_checklist_item())
    return items


def _remove_checklist_item(items, item_id):
    remaining = [item for item in items if item.id != item_id]
    if len(remaining) == len(items):
        return items
    return remaining or [create_checklist_item()]


# --- Reducer ---

def apply(state: EditorState, action) -> EditorState:
    if not isinstance(action, EditorAction):
        logger.debug('Ignoring unrecognized action %r', action)
        return state

    if isinstance(action, LoadNotes):
        return replace(state, notes=[
            note if note.blocks
            else replace(note, blocks=[create_paragraph_block()])
            for note in action.notes
        ])

    if isinstance(action, CreateNote):
        note = create_note()
        return replace(state, notes=[note] + state.notes, active_note_id=note.id)

    if isinstance(action, DeleteNote):
        remaining = [n for n in state.notes if n.id != action.note_id]
        if len(remaining) == len(state.notes):
            logger.debug('Note %s not found, nothing deleted', action.note_id)
            return state
        active_note_id = state.active_note_id
        if active_note_id == action.note_id:
            active_note_id = remaining[0].id if remaining else None
        return replace(state, notes=remaining, active_note_id=active_note_id)

    if isinstance(action, SetActiveNote):
        return replace(state, active_note_id=action.note_id)

    if isinstance(action, UpdateTitle):
        return _edit_note(state, action.note_id,
                          lambda n: replace(n, title=action.title))

    if isinstance(action, UpdateBody):
        return _edit_note(state, action.note_id,
                          lambda n: replace(n, body=action.body))

    if isinstance(action, AddBlock):
        return _add_block(state, action)

    if isinstance(action, RemoveBlock):
        return _remove_block(state, action)

    if isinstance(action, UpdateBlock):
        return _update_block(state, action.note_id, action.block_id,
                             lambda b: _patch_block(b, action.patch))

    if isinstance(action, ReplaceBlock):
        return _update_block(state, action.note_id, action.block_id,
                             lambda b: _populated(action.block))

    if isinstance(action, MoveBlock):
        return _move_block(state, action)

    if isinstance(action, UpdateBlockContent):
        return _update_block(state, action.note_id, action.block_id,
                             lambda b: _update_block_content(b, action.content))

    if isinstance(action, UpdateListItem):
        return _update_block(state, action.note_id, action.block_id,
                             lambda b: _update_list_item(b, action))

    if isinstance(action, AddListItem):
        return _update_block(state, action.note_id, action.block_id,
                             lambda b: _add_list_item(b, action))

    if isinstance(action, RemoveListItem):
        return _update_block(state, action.note_id, action.block_id,
                             lambda b: _remove_list_item(b, action))

    if isinstance(action, ToggleChecklistItem):
        return _update_checklist_items(state, action, lambda items: _map_checklist_item(
            items, action.item_id, lambda item: replace(item, checked=not item.checked)))

    if isinstance(action, UpdateChecklistItem):
        return _update_checklist_items(state, action, lambda items: _map_checklist_item(
            items, action.item_id, lambda item: replace(item, content=list(action.content))))

    if isinstance(action, AddChecklistItem):
        return _update_checklist_items(
            state, action, lambda items: _add_checklist_item(items, action.after_item_id))

    if isinstance(action, RemoveChecklistItem):
        return _update_checklist_items(
            state, action, lambda items: _remove_checklist_item(items, action.item_id))

    assert_never(action)


editor_reducer = apply
