# SPDX-License-Identifier: GPL-3.0-or-later
"""
Enter / Tab / Shift-Tab behaviour inside list items and task items.

The editing engine's stock Enter always splits the current item, even an
empty one, so the user gets a second blank bullet instead of leaving the
list. `decide` replaces that with a two-phase check:

    Key          | In non-empty item   | In empty item (no sub-list)
    -------------+---------------------+-----------------------------
    Enter        | split (new item)    | lift (outdent / exit list)
    Tab          | indent              | indent
    Shift-Tab    | outdent             | outdent
    Backspace    | engine default      | engine default
    Delete       | engine default      | engine default

An item whose text is empty but which still holds a nested sub-list is not
empty: lifting it would orphan the nested items, so Enter splits instead.
A nested list with no text at all does not count as a sub-list.
"""

import enum
import logging
from typing import Protocol

from tidynotes.errors import assert_never
from tidynotes.rich_document import LIST_TYPES, TEXTBLOCK_TYPES

logger = logging.getLogger(__name__)


class ListNodeKind(str, enum.Enum):
    LIST_ITEM = 'listItem'
    TASK_ITEM = 'taskItem'


class KeyEvent(str, enum.Enum):
    ENTER = 'Enter'
    TAB = 'Tab'
    SHIFT_TAB = 'Shift-Tab'
    BACKSPACE = 'Backspace'
    DELETE = 'Delete'


class Decision(str, enum.Enum):
    SPLIT = 'split'
    LIFT = 'lift'
    INDENT = 'indent'
    OUTDENT = 'outdent'
    DEFER = 'defer'


class ItemState(str, enum.Enum):
    OUTSIDE_LIST = 'outside-list'
    ITEM_NONEMPTY = 'item-nonempty'
    ITEM_EMPTY_LEAF = 'item-empty-leaf'
    ITEM_EMPTY_WITH_SUBLIST = 'item-empty-with-sublist'


LIST_ITEM_TYPES = frozenset(kind.value for kind in ListNodeKind)


class DocumentTree(Protocol):
    """The reads the engine needs from the editing engine's live tree."""

    def depth(self, cursor) -> int: ...

    def ancestor(self, cursor, depth: int): ...

    def type_name(self, node) -> str: ...

    def child_count(self, node) -> int: ...

    def child(self, node, index: int): ...

    def text_content(self, node) -> str: ...


class ListCommands(Protocol):

    def lift_list_item(self, kind: str) -> bool: ...

    def split_list_item(self, kind: str) -> bool: ...

    def sink_list_item(self, kind: str) -> bool: ...


def enclosing_list_item(tree: DocumentTree, cursor):
    """Innermost listItem/taskItem around the cursor, or None."""
    for depth in range(tree.depth(cursor), 0, -1):
        node = tree.ancestor(cursor, depth)
        if tree.type_name(node) in LIST_ITEM_TYPES:
            return node
    return None


def _is_blank_sublist(tree, node) -> bool:
    return tree.type_name(node) in LIST_TYPES and not tree.text_content(node)


def classify(tree: DocumentTree, cursor) -> ItemState:
    """State of the list item around `cursor`.

    ITEM_EMPTY_WITH_SUBLIST covers any empty item holding more than its
    first text block, whether the extra child is a nested list or another
    paragraph; lifting would strand that content either way.
    """
    item = enclosing_list_item(tree, cursor)
    if item is None:
        return ItemState.OUTSIDE_LIST

    container = tree.ancestor(cursor, tree.depth(cursor))
    if tree.type_name(container) not in TEXTBLOCK_TYPES:
        return ItemState.ITEM_NONEMPTY
    if len(tree.text_content(container)) != 0:
        return ItemState.ITEM_NONEMPTY

    rest = [tree.child(item, i) for i in range(1, tree.child_count(item))]
    if all(_is_blank_sublist(tree, node) for node in rest):
        return ItemState.ITEM_EMPTY_LEAF
    return ItemState.ITEM_EMPTY_WITH_SUBLIST


def is_at_empty_list_item(tree: DocumentTree, cursor) -> bool:
    return classify(tree, cursor) is ItemState.ITEM_EMPTY_LEAF


def decide(tree: DocumentTree, cursor, key, kind, nested_tasks=True) -> Decision:
    """Decide how `key` is handled for items of `kind` at `cursor`.

    Returns Decision.DEFER when the engine's default handling should run:
    outside any list, inside an item of the other kind, for Backspace and
    Delete, for keys it does not handle, and for Tab in task items when
    task nesting is disabled.
    """
    try:
        key = KeyEvent(key)
    except ValueError:
        return Decision.DEFER
    kind = ListNodeKind(kind)

    if key in (KeyEvent.BACKSPACE, KeyEvent.DELETE):
        return Decision.DEFER

    item = enclosing_list_item(tree, cursor)
    if item is None or tree.type_name(item) != kind.value:
        return Decision.DEFER

    if key is KeyEvent.ENTER:
        if is_at_empty_list_item(tree, cursor):
            return Decision.LIFT
        return Decision.SPLIT

    if key is KeyEvent.TAB:
        if kind is ListNodeKind.TASK_ITEM and not nested_tasks:
            return Decision.DEFER
        return Decision.INDENT

    if key is KeyEvent.SHIFT_TAB:
        return Decision.OUTDENT

    assert_never(key)


def run_decision(decision: Decision, kind, commands: ListCommands) -> bool:
    """Issue the engine command for `decision`; False if nothing ran."""
    kind = ListNodeKind(kind).value

    if decision is Decision.DEFER:
        return False
    if decision is Decision.SPLIT:
        return bool(commands.split_list_item(kind))
    if decision in (Decision.LIFT, Decision.OUTDENT):
        return bool(commands.lift_list_item(kind))
    if decision is Decision.INDENT:
        return bool(commands.sink_list_item(kind))

    assert_never(decision)


def handle_key(tree, cursor, key, kind, commands, nested_tasks=True) -> bool:
    decision = decide(tree, cursor, key, kind, nested_tasks=nested_tasks)
    logger.debug('%s in %s: %s', key, ListNodeKind(kind).value, decision.value)
    return run_decision(decision, kind, commands)
