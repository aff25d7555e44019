# SPDX-License-Identifier: GPL-3.0-or-later

import pytest

from tidynotes.constants import EMPTY_DOCUMENT
from tidynotes.note import (
    ChecklistBlock,
    HeadingBlock,
    InlineFormat,
    ListBlock,
    ParagraphBlock,
    TextSpan,
    block_from_dict,
    block_to_dict,
    create_checklist_block,
    create_heading_block,
    create_list_block,
    create_note,
    create_paragraph_block,
    note_from_dict,
    note_to_dict,
    span_to_dict,
)


class TestFactories:

    def test_blank_blocks_hold_one_empty_span(self):
        assert create_paragraph_block().content == [TextSpan('')]
        assert create_heading_block(2).content == [TextSpan('')]
        assert create_list_block(True).items == [[TextSpan('')]]

        item, = create_checklist_block().items
        assert item.checked is False
        assert item.content == [TextSpan('')]

    def test_ids_are_unique(self):
        blocks = [create_paragraph_block() for _ in range(50)]
        assert len({b.id for b in blocks}) == 50

    def test_invalid_heading_level(self):
        with pytest.raises(ValueError):
            create_heading_block(4)

    def test_fresh_note(self):
        note = create_note()

        assert note.title == ''
        assert note.body == EMPTY_DOCUMENT
        assert note.created_at == note.updated_at
        assert len(note.blocks) == 1
        assert isinstance(note.blocks[0], ParagraphBlock)

    def test_block_type_tags(self):
        assert create_paragraph_block().type == 'paragraph'
        assert create_heading_block(1).type == 'heading'
        assert create_list_block(False).type == 'list'
        assert create_checklist_block().type == 'checklist'


class TestNoteProperties:

    @pytest.mark.parametrize('title, expected', [
        ('', 'Untitled'), ('   ', 'Untitled'), (' Plans ', 'Plans'),
    ])
    def test_display_title(self, title, expected):
        assert create_note(title=title).display_title == expected

    def test_preview_text(self):
        note = create_note(blocks=[create_paragraph_block([TextSpan('x' * 300)])])
        assert note.preview_text == 'x' * 200

    def test_span_formats(self):
        span = TextSpan('hi', bold=True, underline=True)
        assert span.formats == {InlineFormat.BOLD, InlineFormat.UNDERLINE}


class TestSerialization:

    def test_span_omits_unset_flags(self):
        assert span_to_dict(TextSpan('a')) == {'text': 'a'}
        assert span_to_dict(TextSpan('a', italic=True)) == {'text': 'a', 'italic': True}

    @pytest.mark.parametrize('block', [
        create_paragraph_block([TextSpan('p', bold=True)]),
        create_heading_block(3, [TextSpan('h')]),
        create_list_block(True, [[TextSpan('1')], [TextSpan('2', underline=True)]]),
        create_checklist_block(),
    ], ids=['paragraph', 'heading', 'list', 'checklist'])
    def test_block_survives_storage(self, block):
        assert block_from_dict(block_to_dict(block)) == block

    def test_note_uses_camel_case_timestamps(self):
        note = create_note(title='t')
        data = note_to_dict(note)

        assert data['createdAt'] == note.created_at
        assert data['updatedAt'] == note.updated_at
        assert note_from_dict(data) == note

    def test_stored_collections_are_never_empty(self):
        lst = block_from_dict({'id': 'l', 'type': 'list', 'items': []})
        checklist = block_from_dict({'id': 'c', 'type': 'checklist'})
        para = block_from_dict({'id': 'p', 'type': 'paragraph', 'content': []})

        assert isinstance(lst, ListBlock) and lst.items == [[TextSpan('')]]
        assert isinstance(checklist, ChecklistBlock) and len(checklist.items) == 1
        assert para.content == [TextSpan('')]

    def test_unknown_block_type_reads_as_paragraph(self):
        block = block_from_dict({'id': 'x', 'type': 'table',
                                 'content': [{'text': 'cells', 'bold': True}]})

        assert block == ParagraphBlock(id='x', content=[TextSpan('cells', bold=True)])
        assert block_from_dict({'id': 'y'}).content == [TextSpan('')]

    @pytest.mark.parametrize('stored, level', [(9, 3), (0, 1), (-2, 1), ('2', 2), ('big', 1), (None, 1)])
    def test_bad_heading_level_is_clamped(self, stored, level):
        block = block_from_dict({'id': 'x', 'type': 'heading', 'level': stored})

        assert isinstance(block, HeadingBlock)
        assert block.level == level

    @pytest.mark.parametrize('blocks', [None, []])
    def test_note_without_blocks_gets_a_paragraph(self, blocks):
        data = {'id': 'a', 'createdAt': 1, 'body': '<p>x</p>'}
        if blocks is not None:
            data['blocks'] = blocks

        note = note_from_dict(data)

        assert len(note.blocks) == 1
        assert isinstance(note.blocks[0], ParagraphBlock)
        assert note.blocks[0].content == [TextSpan('')]

    def test_heading_defaults(self):
        block = block_from_dict({'type': 'heading', 'content': [{'text': 'h'}]})
        assert isinstance(block, HeadingBlock)
        assert block.level == 1
        assert block.id
