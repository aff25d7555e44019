# SPDX-License-Identifier: GPL-3.0-or-later

import pytest

from tidynotes.note import InlineFormat
from tidynotes.rich_document import Cursor, RichDocument

from helpers import bullet_list, doc, li, para, task, task_list, text


@pytest.fixture
def tree():
    return RichDocument.from_json(doc(
        para(text('intro')),
        bullet_list(
            li(para(text('plain '), text('bold', 'bold'), text(' both', 'bold', 'italic'))),
            li(para(text('outer')), task_list(task(para(text('inner')), checked=True))),
        ),
    ))


def test_depth_and_ancestors(tree):
    cursor = tree.find_text('inner')

    assert tree.depth(cursor) == 5
    path = [tree.type_name(tree.ancestor(cursor, d)) for d in range(tree.depth(cursor) + 1)]
    assert path == ['doc', 'bulletList', 'listItem', 'taskList', 'taskItem', 'paragraph']


def test_ancestor_out_of_range(tree):
    cursor = tree.find_text('intro')
    with pytest.raises(IndexError):
        tree.ancestor(cursor, 5)


def test_children_and_text(tree):
    cursor = tree.find_text('outer')
    item = tree.ancestor(cursor, 2)

    assert tree.child_count(item) == 2
    assert tree.type_name(tree.child(item, 1)) == 'taskList'
    assert tree.text_content(item) == 'outerinner'
    assert tree.text_content(0) == 'introplain bold bothouterinner'


def test_attrs_are_kept(tree):
    cursor = tree.find_text('inner')
    assert tree.attrs(tree.ancestor(cursor, 4)) == {'checked': True}


def test_find_text_occurrence():
    tree = RichDocument.from_json(doc(para(), para(text('x')), para()))

    first, second = tree.find_text(''), tree.find_text('', occurrence=1)
    assert first != second
    assert tree.find_text('', occurrence=2) is None
    assert tree.find_text('missing') is None


def test_active_formats(tree):
    cursor = tree.find_text('plain bold both')

    assert tree.active_formats(Cursor(cursor.node, 3)) == set()
    assert tree.active_formats(Cursor(cursor.node, 8)) == {InlineFormat.BOLD}
    assert tree.active_formats(cursor) == {InlineFormat.BOLD, InlineFormat.ITALIC}


def test_build_by_hand():
    tree = RichDocument()
    bullets = tree.add(0, 'bulletList')
    item = tree.add(bullets, 'listItem')
    block = tree.add(item, 'paragraph')
    tree.add(block, 'text', text='hi', marks=['underline'])

    cursor = Cursor(block, 2)
    assert tree.ancestor(cursor, 2) == item
    assert tree.is_textblock(block)
    assert tree.active_formats(cursor) == {InlineFormat.UNDERLINE}
    assert len(tree) == 5
