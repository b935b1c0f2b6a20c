"""Lint that checks the body has every required level-two section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from arclint.context import Context, Lint
from arclint.mdtree import NodeKind
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet


@dataclass(frozen=True)
class SectionRequired(Lint):
    """Every listed section must appear as a level-two heading of the body."""

    names: Sequence[str]

    def lint(self, slug: str, ctx: Context) -> None:
        headings = {
            node.text()
            for node in ctx.body.descendants()
            if node.kind is NodeKind.HEADING and node.level == 2
        }

        missing = [name for name in self.names if name not in headings]
        if not missing:
            return

        ctx.report(
            Snippet(
                title=Annotation(
                    AnnotationType.ERROR,
                    f"body is missing section(s): `{'`, `'.join(missing)}`",
                    slug,
                ),
                slices=[
                    Slice(
                        source=ctx.body_source,
                        line_start=ctx.body.start_line,
                        origin=ctx.origin,
                        fold=True,
                    )
                ],
            )
        )