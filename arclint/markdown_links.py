"""Lints on the links of the document body."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

from arclint.context import Context, FetchContext, Lint
from arclint.mdtree import Node, NodeKind
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet

_ARC_LINK = re.compile(r"ARC-([0-9]+).md\Z", re.IGNORECASE)
_NON_RELATIVE = re.compile(r"(^/)|(://)")


def _find_links(body: Node) -> Iterator[tuple[int, Path]]:
    """Yield the line and proposal file name of each link to another proposal."""
    for node in body.descendants():
        if node.kind is not NodeKind.LINK:
            continue
        found = _ARC_LINK.search(node.url or "")
        if found:
            # Only the file name is kept, so links cannot escape the directory.
            yield node.start_line, Path(f"arc-{found.group(1)}.md")


def _line_slice(ctx: Context, line: int) -> Slice:
    return Slice(source=ctx.line(line), line_start=line, origin=ctx.origin)


@dataclass(frozen=True)
class LinkStatus(Lint):
    """Linked proposals must be at least as far along the status flow as this one."""

    status: str
    flow: Sequence[Sequence[str]]

    def _tiers(self) -> dict[str, int]:
        return {value: tier for tier, values in enumerate(self.flow, start=1) for value in values}

    def _tier(self, tiers: dict[str, int], ctx: Context) -> int:
        field = ctx.preamble.by_name(self.status)
        if field is None:
            return 0
        return tiers.get(field.value.strip(), 0)

    def find_resources(self, ctx: FetchContext) -> None:
        for path in {path for _, path in _find_links(ctx.body)}:
            ctx.fetch(path)

    def lint(self, slug: str, ctx: Context) -> None:
        tiers = self._tiers()
        my_tier = self._tier(tiers, ctx)
        lowest: int | None = None

        for line, path in _find_links(ctx.body):
            try:
                other = ctx.arc(path)
            except KeyError:
                raise
            except Exception as error:
                ctx.report(
                    Snippet(
                        title=Annotation(
                            AnnotationType.ERROR, f"unable to read file `{path}`: {error}", slug
                        ),
                        slices=[_line_slice(ctx, line)],
                    )
                )
                continue

            their_tier = self._tier(tiers, other)
            if lowest is None or their_tier < lowest:
                lowest = their_tier
            if their_tier >= my_tier:
                continue

            status_field = ctx.preamble.by_name(self.status)
            status_value = (status_field.value if status_field is not None else "<missing>").strip()
            label = (
                f"proposal `{path}` is not stable enough for a "
                f"`{self.status}` of `{status_value}`"
            )

            choices = "`, `".join(sorted(v for v, t in tiers.items() if t <= lowest))
            footer = []
            if choices:
                footer.append(
                    Annotation(
                        AnnotationType.HELP,
                        f"because of this link, this proposal's `{self.status}` "
                        f"must be one of: `{choices}`",
                    )
                )

            ctx.report(
                Snippet(
                    title=Annotation(AnnotationType.ERROR, label, slug),
                    slices=[_line_slice(ctx, line)],
                    footer=footer,
                )
            )


@dataclass(frozen=True)
class RelativeLinks(Lint):
    """Links and images must use relative URLs."""

    def lint(self, slug: str, ctx: Context) -> None:
        for node in ctx.body.descendants():
            if node.kind not in (NodeKind.LINK, NodeKind.IMAGE):
                continue
            if not _NON_RELATIVE.search(node.url or ""):
                continue
            ctx.report(
                Snippet(
                    title=Annotation(AnnotationType.ERROR, "non-relative link or image", slug),
                    slices=[_line_slice(ctx, node.start_line)],
                )
            )