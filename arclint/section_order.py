"""Lint that checks the body's level-two sections are known and in order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Sequence

from arclint.context import Context, Lint
from arclint.mdtree import NodeKind
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet


def _find_preceding(order: Sequence[str], present: Collection[str], needle: str) -> str | None:
    """The closest name before ``needle`` in ``order`` that is actually present."""
    try:
        needle_idx = order.index(needle)
    except ValueError:
        return None
    if needle_idx == 0:
        return None
    for name in reversed(order[:needle_idx]):
        if name != needle and name in present:
            return name
    return None


@dataclass(frozen=True)
class SectionOrder(Lint):
    """Only the listed level-two sections may appear, and in the listed order."""

    names: Sequence[str]

    def lint(self, slug: str, ctx: Context) -> None:
        order = list(self.names)

        headings = [
            (node.start_line, node.text())
            for node in ctx.body.descendants()
            if node.kind is NodeKind.HEADING and node.level == 2
        ]

        unknowns = [
            Slice(source=ctx.line(line), line_start=line, origin=ctx.origin)
            for line, text in headings
            if text not in order
        ]
        if unknowns:
            ctx.report(
                Snippet(
                    title=Annotation(AnnotationType.ERROR, "body has extra section(s)", slug),
                    slices=unknowns,
                )
            )

        lines = {text: line for line, text in headings}

        max_line = 0
        for name in order:
            line = lines.get(name)
            if line is None:
                continue
            previous, max_line = max_line, line
            if max_line >= previous:
                continue

            footer = []
            preceding = _find_preceding(order, lines, name)
            if preceding is not None:
                footer.append(
                    Annotation(
                        AnnotationType.HELP, f"`{name}` should come after `{preceding}`"
                    )
                )

            ctx.report(
                Snippet(
                    title=Annotation(
                        AnnotationType.ERROR, f"section `{name}` is out of order", slug
                    ),
                    slices=[Slice(source=ctx.line(line), line_start=line, origin=ctx.origin)],
                    footer=footer,
                )
            )