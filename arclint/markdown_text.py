"""Lints that match patterns against the text of the document body."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from arclint.context import Context, Lint, LintError
from arclint.mdtree import Node, NodeKind
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet

# Nodes whose contents are never matched: code, raw HTML and front matter.
_OPAQUE_KINDS = frozenset(
    {"CODE", "CODE_INLINE", "CODE_BLOCK", "FENCE", "HTML_INLINE", "HTML_BLOCK", "FRONT_MATTER"}
)


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as error:
        raise LintError(f"invalid pattern `{pattern}`: {error}") from error


def _subtree_ids(node: Node) -> set[int]:
    return {id(d) for d in node.descendants() if d is not node}


def _walk(root: Node) -> Iterator[tuple[Node, bool]]:
    """Yield each visible node in document order, with whether it lies inside a link."""
    hidden: set[int] = set()
    linked: set[int] = set()
    for node in root.descendants():
        if id(node) in hidden:
            continue
        if node.kind.name in _OPAQUE_KINDS:
            hidden |= _subtree_ids(node)
            continue
        yield node, id(node) in linked
        if node.kind is NodeKind.LINK:
            linked |= _subtree_ids(node)


def _report_match(
    ctx: Context, slug: str, label: str, pattern: str, node: Node, text: str
) -> None:
    ctx.report(
        Snippet(
            title=Annotation(AnnotationType.ERROR, label, slug),
            slices=[
                Slice(
                    source=ctx.source_for_text(node.start_line, text),
                    line_start=node.start_line,
                    origin=ctx.origin,
                )
            ],
            footer=[Annotation(AnnotationType.INFO, f"the pattern in question: `{pattern}`")],
        )
    )


class MarkdownMode(Enum):
    """How a body pattern is applied."""

    EXCLUDES = "excludes"
    """Each syntax node individually must not contain the pattern."""


@dataclass(frozen=True)
class MarkdownRegex(Lint):
    """No text, link title or image title of the body may match the pattern."""

    mode: MarkdownMode
    pattern: str
    message: str

    def lint(self, slug: str, ctx: Context) -> None:
        compiled = _compile(self.pattern)
        for node, _ in _walk(ctx.body):
            if node.kind is NodeKind.TEXT:
                text = node.text()
            elif node.kind in (NodeKind.LINK, NodeKind.IMAGE):
                text = node.title or ""
            else:
                continue
            if compiled.search(text):
                _report_match(ctx, slug, self.message, self.pattern, node, text)


@dataclass(frozen=True)
class LinkFirst(Lint):
    """The first time a pattern's match appears in the body, it must be inside a link."""

    pattern: str

    def lint(self, slug: str, ctx: Context) -> None:
        compiled = _compile(self.pattern)
        linked: set[str] = set()

        for node, inside_link in _walk(ctx.body):
            if node.kind is NodeKind.TEXT:
                text = node.text()
                if inside_link:
                    found = compiled.search(text)
                    if found:
                        linked.add(found.group())
                    continue
            elif node.kind is NodeKind.IMAGE:
                text = node.title or ""
            else:
                continue

            for found in compiled.finditer(text):
                if found.group() in linked:
                    continue
                _report_match(
                    ctx,
                    slug,
                    "the first match of the given pattern must be a link",
                    self.pattern,
                    node,
                    text,
                )