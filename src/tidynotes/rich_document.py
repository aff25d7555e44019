# SPDX-License-Identifier: GPL-3.0-or-later
"""
Read-only view of the editing engine's document tree.

The engine hands out its document as JSON:

{
  "type": "doc",
  "content": [
    {
      "type": "bulletList",
      "content": [
        {"type": "listItem", "content": [
          {"type": "paragraph", "content": [
            {"type": "text", "text": "milk", "marks": [{"type": "bold"}]}
          ]}
        ]}
      ]
    }
  ]
}

Nodes are stored in a flat arena and addressed by index; every node keeps
the index of its parent, so ancestor lookups are a loop over parent links.
"""

from dataclasses import dataclass, field
from typing import Optional

from tidynotes.note import InlineFormat


TEXTBLOCK_TYPES = frozenset({'paragraph', 'heading'})
LIST_TYPES = frozenset({'bulletList', 'orderedList', 'taskList'})
ROOT = 0


@dataclass
class DocNode:
    type_name: str
    parent: Optional[int]
    depth: int
    text: str = ''
    marks: frozenset = frozenset()
    attrs: dict = field(default_factory=dict)
    children: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Cursor:
    """Caret position: the text block it sits in and the offset inside it."""
    node: int
    offset: int = 0


class RichDocument:

    def __init__(self):
        self._nodes = [DocNode(type_name='doc', parent=None, depth=0)]

    @classmethod
    def from_json(cls, data) -> 'RichDocument':
        doc = cls()
        stack = [(ROOT, child) for child in reversed(data.get('content', []))]
        while stack:
            parent, node_data = stack.pop()
            index = doc.add(
                parent,
                node_data['type'],
                text=node_data.get('text', ''),
                marks=[m['type'] for m in node_data.get('marks', [])],
                attrs=node_data.get('attrs'),
            )
            stack.extend(
                (index, child) for child in reversed(node_data.get('content', [])))
        return doc

    def add(self, parent, type_name, text='', marks=(), attrs=None) -> int:
        parent_node = self._nodes[parent]
        index = len(self._nodes)
        self._nodes.append(DocNode(
            type_name=type_name,
            parent=parent,
            depth=parent_node.depth + 1,
            text=text,
            marks=frozenset(marks),
            attrs=dict(attrs or {}),
        ))
        parent_node.children.append(index)
        return index

    def __len__(self):
        return len(self._nodes)

    # --- Tree reads ---

    def depth(self, cursor: Cursor) -> int:
        return self._nodes[cursor.node].depth

    def ancestor(self, cursor: Cursor, depth: int) -> int:
        """Index of the node at `depth` on the path from the root to the cursor."""
        node = self._nodes[cursor.node]
        if not 0 <= depth <= node.depth:
            raise IndexError(f'Depth {depth} outside 0..{node.depth}')
        index = cursor.node
        while node.depth > depth:
            index = node.parent
            node = self._nodes[index]
        return index

    def type_name(self, node: int) -> str:
        return self._nodes[node].type_name

    def attrs(self, node: int) -> dict:
        return dict(self._nodes[node].attrs)

    def child_count(self, node: int) -> int:
        return len(self._nodes[node].children)

    def child(self, node: int, index: int) -> int:
        return self._nodes[node].children[index]

    def is_textblock(self, node: int) -> bool:
        return self._nodes[node].type_name in TEXTBLOCK_TYPES

    def text_content(self, node: int) -> str:
        """Text of every text node below `node`, in document order."""
        parts = []
        stack = [node]
        while stack:
            current = self._nodes[stack.pop()]
            if current.type_name == 'text':
                parts.append(current.text)
            stack.extend(reversed(current.children))
        return ''.join(parts)

    def textblocks(self):
        stack = [ROOT]
        while stack:
            index = stack.pop()
            if self.is_textblock(index):
                yield index
            stack.extend(reversed(self._nodes[index].children))

    def find_text(self, text, occurrence=0) -> Optional[Cursor]:
        """Cursor at the end of the n-th text block whose text equals `text`."""
        seen = 0
        for index in self.textblocks():
            if self.text_content(index) == text:
                if seen == occurrence:
                    return Cursor(node=index, offset=len(text))
                seen += 1
        return None

    def active_formats(self, cursor: Cursor) -> set[InlineFormat]:
        """Marks carried by the character just before the caret."""
        position = 0
        last_marks = frozenset()
        for child in self._nodes[cursor.node].children:
            node = self._nodes[child]
            if node.type_name != 'text':
                continue
            last_marks = node.marks
            position += len(node.text)
            if position >= cursor.offset:
                break
        return {fmt for fmt in InlineFormat if fmt.value in last_marks}
