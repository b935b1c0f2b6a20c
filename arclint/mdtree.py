"""A small Markdown syntax tree with source line numbers and a visitor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from markdown_it import MarkdownIt


class NodeKind(Enum):
    """The kinds of node a parsed document can hold."""

    DOCUMENT = "document"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    ITEM = "item"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    HTML_BLOCK = "html_block"
    THEMATIC_BREAK = "thematic_break"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    TEXT = "text"
    SOFT_BREAK = "soft_break"
    LINE_BREAK = "line_break"
    CODE = "code"
    HTML_INLINE = "html_inline"
    EMPH = "emph"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"


@dataclass(eq=False)
class Node:
    """One node of the tree; ``start_line`` counts from one."""

    kind: NodeKind
    start_line: int
    literal: str = ""
    url: str = ""
    title: str = ""
    level: int = 0
    info: str = ""
    children: list[Node] = field(default_factory=list)

    def descendants(self) -> Iterator[Node]:
        """Yield this node and everything below it, in document order."""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def text(self) -> str:
        """Concatenate the text nodes at or below this node."""
        return "".join(n.literal for n in self.descendants() if n.kind is NodeKind.TEXT)

    def visit(self, visitor: Visitor) -> None:
        """Walk the tree, calling the visitor on entry and departure of each node."""
        if visitor.enter(self):
            for child in self.children:
                child.visit(visitor)
        visitor.depart(self)


class Visitor:
    """Base for tree walkers.

    Subclasses define ``enter_<kind>(node)`` and ``depart_<kind>(node)`` for
    the kinds they care about. An ``enter_`` method that returns ``False``
    stops the walk from descending into that node's children.
    """

    def enter(self, node: Node) -> bool:
        handler = getattr(self, f"enter_{node.kind.value}", None)
        if handler is None:
            return True
        return handler(node) is not False

    def depart(self, node: Node) -> None:
        handler = getattr(self, f"depart_{node.kind.value}", None)
        if handler is not None:
            handler(node)


_PARSER = MarkdownIt("commonmark").enable("table")

_CONTAINERS = {
    "paragraph_open": NodeKind.PARAGRAPH,
    "heading_open": NodeKind.HEADING,
    "bullet_list_open": NodeKind.LIST,
    "ordered_list_open": NodeKind.LIST,
    "list_item_open": NodeKind.ITEM,
    "blockquote_open": NodeKind.BLOCK_QUOTE,
    "table_open": NodeKind.TABLE,
    "tr_open": NodeKind.TABLE_ROW,
    "th_open": NodeKind.TABLE_CELL,
    "td_open": NodeKind.TABLE_CELL,
    "em_open": NodeKind.EMPH,
    "strong_open": NodeKind.STRONG,
    "s_open": NodeKind.STRIKETHROUGH,
    "link_open": NodeKind.LINK,
}

_LEAVES = {
    "fence": NodeKind.CODE_BLOCK,
    "code_block": NodeKind.CODE_BLOCK,
    "html_block": NodeKind.HTML_BLOCK,
    "hr": NodeKind.THEMATIC_BREAK,
    "code_inline": NodeKind.CODE,
    "html_inline": NodeKind.HTML_INLINE,
    "softbreak": NodeKind.SOFT_BREAK,
    "hardbreak": NodeKind.LINE_BREAK,
}


def _append_text(parent: Node, content: str, line: int) -> None:
    if parent.children and parent.children[-1].kind is NodeKind.TEXT:
        parent.children[-1].literal += content
    else:
        parent.children.append(Node(NodeKind.TEXT, line, literal=content))


def _attach(tokens, root: Node, default_line: int, offset: int) -> None:
    stack = [root]
    for token in tokens:
        line = token.map[0] + 1 + offset if token.map else default_line

        if token.nesting == -1:
            stack.pop()
            continue

        if token.type == "inline":
            _attach(token.children or [], stack[-1], line, offset)
            continue

        if token.type in ("text", "text_special"):
            _append_text(stack[-1], token.content, line)
            continue

        if token.type == "image":
            node = Node(
                NodeKind.IMAGE,
                line,
                url=str(token.attrGet("src") or ""),
                title=str(token.attrGet("title") or ""),
            )
            stack[-1].children.append(node)
            _attach(token.children or [], node, line, offset)
            continue

        if token.nesting == 1:
            kind = _CONTAINERS.get(token.type)
            if kind is None:
                stack.append(stack[-1])
                continue
            node = Node(kind, line)
            if kind is NodeKind.HEADING:
                node.level = int(token.tag[1:])
            elif kind is NodeKind.LINK:
                node.url = str(token.attrGet("href") or "")
                node.title = str(token.attrGet("title") or "")
            stack[-1].children.append(node)
            stack.append(node)
            continue

        kind = _LEAVES.get(token.type)
        if kind is not None:
            stack[-1].children.append(
                Node(kind, line, literal=token.content, info=token.info or "")
            )


def parse_markdown(source: str, line_offset: int = 0) -> Node:
    """Parse Markdown (with tables) into a tree whose lines are shifted by ``line_offset``."""
    root = Node(NodeKind.DOCUMENT, 1 + line_offset)
    _attach(_PARSER.parse(source), root, root.start_line, line_offset)
    return root