# SPDX-License-Identifier: GPL-3.0-or-later
"""
Conversions between the span model, plain strings and editor markup.

Legacy notes stored their content as a list of blocks. The editing engine
works on markup instead, so `blocks_to_html` is used once per note to
migrate old content:

    [ParagraphBlock([TextSpan('hi', bold=True)])]  ->  <p><strong>hi</strong></p>

Supported marks: bold, italic, underline
"""

from tidynotes.constants import EMPTY_DOCUMENT
from tidynotes.errors import assert_never
from tidynotes.note import (
    ChecklistBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    TextSpan,
)


# Applied innermost first.
MARK_TAGS = (
    ('bold', 'strong'),
    ('italic', 'em'),
    ('underline', 'u'),
)


def spans_to_text(spans) -> str:
    """Flatten spans into one plain string, dropping formatting."""
    return ''.join(span.text for span in spans)


def text_to_spans(text) -> list[TextSpan]:
    """Wrap a plain string in a single unformatted span."""
    return [TextSpan(text=text)]


flatten = spans_to_text
unflatten = text_to_spans


def escape(text) -> str:
    return (
        text.replace('&', '&amp;')
        .replace('<', '&lt;')
        .replace('>', '&gt;')
        .replace('"', '&quot;')
    )


def spans_to_html(spans) -> str:
    parts = []
    for span in spans:
        html = escape(span.text)
        if not html:
            continue
        for attr, tag in MARK_TAGS:
            if getattr(span, attr):
                html = f'<{tag}>{html}</{tag}>'
        parts.append(html)
    return ''.join(parts)


def _checklist_item_to_html(item) -> str:
    checked = 'true' if item.checked else 'false'
    checkbox = '<input type="checkbox" checked="checked">' if item.checked \
        else '<input type="checkbox">'
    return (
        f'<li data-type="taskItem" data-checked="{checked}">'
        f'<label>{checkbox}<span></span></label>'
        f'<div><p>{spans_to_html(item.content)}</p></div>'
        '</li>'
    )


def block_to_html(block) -> str:
    if isinstance(block, ParagraphBlock):
        return f'<p>{spans_to_html(block.content)}</p>'

    if isinstance(block, HeadingBlock):
        return f'<h{block.level}>{spans_to_html(block.content)}</h{block.level}>'

    if isinstance(block, ListBlock):
        tag = 'ol' if block.ordered else 'ul'
        items = ''.join(
            f'<li><p>{spans_to_html(spans)}</p></li>' for spans in block.items
        )
        return f'<{tag}>{items}</{tag}>'

    if isinstance(block, ChecklistBlock):
        items = ''.join(_checklist_item_to_html(item) for item in block.items)
        return f'<ul data-type="taskList">{items}</ul>'

    assert_never(block)


def blocks_to_html(blocks) -> str:
    """Migrate legacy blocks to editor markup.

    Never returns an empty string: no blocks, or a single blank paragraph,
    give EMPTY_DOCUMENT.
    """
    if not blocks:
        return EMPTY_DOCUMENT
    return ''.join(block_to_html(b) for b in blocks) or EMPTY_DOCUMENT


migrate = blocks_to_html


def resolve_body(note) -> str:
    """Markup to load into the editor, migrating legacy blocks if needed."""
    if note.body:
        return note.body
    if note.blocks:
        return blocks_to_html(note.blocks)
    return EMPTY_DOCUMENT


def get_plain_text(blocks) -> str:
    """Extract plain text from legacy blocks (for previews and search)."""
    lines = []
    for block in blocks:
        if isinstance(block, (ParagraphBlock, HeadingBlock)):
            lines.append(spans_to_text(block.content))
        elif isinstance(block, ListBlock):
            lines.extend(spans_to_text(item) for item in block.items)
        elif isinstance(block, ChecklistBlock):
            lines.extend(spans_to_text(item.content) for item in block.items)
        else:
            assert_never(block)
    return '\n'.join(lines)
