# SPDX-License-Identifier: GPL-3.0-or-later

import enum
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from tidynotes.constants import EMPTY_DOCUMENT, PREVIEW_LENGTH, UNTITLED
from tidynotes.errors import assert_never

logger = logging.getLogger(__name__)

HEADING_LEVELS = (1, 2, 3)


class InlineFormat(str, enum.Enum):
    BOLD = 'bold'
    ITALIC = 'italic'
    UNDERLINE = 'underline'


@dataclass
class TextSpan:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def formats(self) -> set[InlineFormat]:
        return {fmt for fmt in InlineFormat if getattr(self, fmt.value)}


@dataclass
class ParagraphBlock:
    id: str
    content: list[TextSpan]

    type: ClassVar[str] = 'paragraph'


@dataclass
class HeadingBlock:
    id: str
    level: int
    content: list[TextSpan]

    type: ClassVar[str] = 'heading'


@dataclass
class ListBlock:
    id: str
    ordered: bool
    items: list[list[TextSpan]]  # one span run per entry

    type: ClassVar[str] = 'list'


@dataclass
class ChecklistItem:
    id: str
    content: list[TextSpan]
    checked: bool = False


@dataclass
class ChecklistBlock:
    id: str
    items: list[ChecklistItem]

    type: ClassVar[str] = 'checklist'


Block = Union[ParagraphBlock, HeadingBlock, ListBlock, ChecklistBlock]

BLOCK_TYPES = {
    cls.type: cls
    for cls in (ParagraphBlock, HeadingBlock, ListBlock, ChecklistBlock)
}


@dataclass
class Note:
    id: str
    title: str
    body: str  # editing engine markup, stored verbatim
    created_at: int  # ms since the epoch
    updated_at: int
    # Legacy block model, only read to migrate old notes into `body`.
    blocks: list[Block] = field(default_factory=list)

    @property
    def display_title(self) -> str:
        return self.title.strip() or UNTITLED

    @property
    def preview_text(self) -> str:
        """Plain text preview of the legacy blocks."""
        from tidynotes.rich_text_serializer import get_plain_text
        return get_plain_text(self.blocks)[:PREVIEW_LENGTH]


@dataclass
class EditorState:
    notes: list[Note] = field(default_factory=list)
    active_note_id: Optional[str] = None


# --- Construction helpers ---

def generate_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def plain_span(text: str) -> TextSpan:
    return TextSpan(text=text)


def empty_content() -> list[TextSpan]:
    """The "blank line": one empty span."""
    return [plain_span('')]


def create_paragraph_block(content=None) -> ParagraphBlock:
    return ParagraphBlock(
        id=generate_id(),
        content=content if content is not None else empty_content(),
    )


def create_heading_block(level, content=None) -> HeadingBlock:
    if level not in HEADING_LEVELS:
        raise ValueError(f'Heading level must be one of {HEADING_LEVELS}, got {level!r}')
    return HeadingBlock(
        id=generate_id(),
        level=level,
        content=content if content is not None else empty_content(),
    )


def create_list_block(ordered, items=None) -> ListBlock:
    return ListBlock(
        id=generate_id(),
        ordered=ordered,
        items=items if items else [empty_content()],
    )


def create_checklist_item(content=None, checked=False) -> ChecklistItem:
    return ChecklistItem(
        id=generate_id(),
        content=content if content is not None else empty_content(),
        checked=checked,
    )


def create_checklist_block(items=None) -> ChecklistBlock:
    return ChecklistBlock(
        id=generate_id(),
        items=items if items else [create_checklist_item()],
    )


def create_note(title='', blocks=None) -> Note:
    now = now_ms()
    return Note(
        id=generate_id(),
        title=title,
        body=EMPTY_DOCUMENT,
        blocks=blocks if blocks else [create_paragraph_block()],
        created_at=now,
        updated_at=now,
    )


# --- Serialization ---

def span_to_dict(span: TextSpan) -> dict:
    data = {'text': span.text}
    for fmt in InlineFormat:
        if getattr(span, fmt.value):
            data[fmt.value] = True
    return data


def span_from_dict(data) -> TextSpan:
    return TextSpan(
        text=data.get('text', ''),
        bold=bool(data.get('bold', False)),
        italic=bool(data.get('italic', False)),
        underline=bool(data.get('underline', False)),
    )


def _spans_to_list(spans):
    return [span_to_dict(s) for s in spans]


def _spans_from_list(data):
    spans = [span_from_dict(s) for s in data or []]
    return spans or empty_content()


def block_to_dict(block: Block) -> dict:
    if isinstance(block, ParagraphBlock):
        return {'id': block.id, 'type': block.type,
                'content': _spans_to_list(block.content)}
    if isinstance(block, HeadingBlock):
        return {'id': block.id, 'type': block.type, 'level': block.level,
                'content': _spans_to_list(block.content)}
    if isinstance(block, ListBlock):
        return {'id': block.id, 'type': block.type, 'ordered': block.ordered,
                'items': [_spans_to_list(item) for item in block.items]}
    if isinstance(block, ChecklistBlock):
        return {
            'id': block.id,
            'type': block.type,
            'items': [
                {'id': item.id, 'checked': item.checked,
                 'content': _spans_to_list(item.content)}
                for item in block.items
            ],
        }
    assert_never(block)


def _heading_level(value) -> int:
    if value in HEADING_LEVELS:
        return value
    try:
        level = min(max(int(value), HEADING_LEVELS[0]), HEADING_LEVELS[-1])
    except (TypeError, ValueError):
        level = HEADING_LEVELS[0]
    logger.warning('Stored heading level %r read as %d', value, level)
    return level


def block_from_dict(data) -> Block:
    """Read a stored block, never rejecting it for its contents.

    Heading levels are clamped into 1..3 and blocks of an unknown type
    come back as a paragraph holding their text.
    """
    block_type = data.get('type')
    block_id = data.get('id') or generate_id()

    if block_type == ParagraphBlock.type:
        return ParagraphBlock(id=block_id,
                              content=_spans_from_list(data.get('content')))
    if block_type == HeadingBlock.type:
        level = _heading_level(data.get('level', 1))
        return HeadingBlock(id=block_id, level=level,
                            content=_spans_from_list(data.get('content')))
    if block_type == ListBlock.type:
        items = [_spans_from_list(item) for item in data.get('items') or []]
        return ListBlock(id=block_id, ordered=bool(data.get('ordered', False)),
                         items=items or [empty_content()])
    if block_type == ChecklistBlock.type:
        items = [
            ChecklistItem(
                id=item.get('id') or generate_id(),
                checked=bool(item.get('checked', False)),
                content=_spans_from_list(item.get('content')),
            )
            for item in data.get('items') or []
        ]
        return ChecklistBlock(id=block_id,
                              items=items or [create_checklist_item()])

    logger.warning('Stored block %s has unknown type %r, read as paragraph',
                   block_id, block_type)
    content = data.get('content')
    return ParagraphBlock(
        id=block_id,
        content=_spans_from_list(content if isinstance(content, list) else None),
    )


def note_to_dict(note: Note) -> dict:
    return {
        'id': note.id,
        'title': note.title,
        'body': note.body,
        'blocks': [block_to_dict(b) for b in note.blocks],
        'createdAt': note.created_at,
        'updatedAt': note.updated_at,
    }


def note_from_dict(data) -> Note:
    created_at = int(data['createdAt'])
    return Note(
        id=data['id'],
        title=data.get('title', ''),
        body=data.get('body', ''),
        blocks=[block_from_dict(b) for b in data.get('blocks') or []]
        or [create_paragraph_block()],
        created_at=created_at,
        updated_at=int(data.get('updatedAt', created_at)),
    )
