"""Preamble parsing and the contexts that lints run against."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, Mapping, Union

from arclint.mdtree import Node
from arclint.snippet import Annotation, AnnotationType, Reporter, Slice, Snippet, SourceAnnotation


class LintError(Exception):
    """Raised when a lint cannot complete its check."""


class SplitError(ValueError):
    """Raised when a document cannot be split into preamble and body."""

    MISSING_START = "missing_start"
    LEADING_GARBAGE = "leading_garbage"
    MISSING_END = "missing_end"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ParseError(ValueError):
    """Raised when preamble lines are malformed; carries one snippet per problem."""

    def __init__(self, snippets: list[Snippet]) -> None:
        super().__init__(f"preamble has {len(snippets)} malformed line(s)")
        self.snippets = list(snippets)


@dataclass(frozen=True)
class Field:
    """One ``name: value`` line of a preamble.

    ``value`` is everything after the colon, leading space included.
    """

    name: str
    value: str
    source: str
    line_start: int


class Preamble:
    """The ordered header fields of a document."""

    def __init__(self, fields: tuple[Field, ...] | list[Field] = ()) -> None:
        self._fields = tuple(fields)

    def fields(self) -> Iterator[Field]:
        return iter(self._fields)

    def by_name(self, name: str) -> Field | None:
        """Return the first field with this name, if any."""
        return next((f for f in self._fields if f.name == name), None)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Preamble) and self._fields == other._fields

    def __repr__(self) -> str:
        return f"Preamble({list(self._fields)!r})"


def split_preamble(source: str) -> tuple[str, str]:
    """Split a document into its preamble text and its body.

    The first line must be ``---`` exactly, and the preamble ends at the next
    line that is ``---`` exactly. The returned preamble has no trailing newline.
    """
    lines = source.split("\n")
    if lines[0] != "---":
        if "---" in lines[1:]:
            raise SplitError(SplitError.LEADING_GARBAGE, "text found before the preamble")
        raise SplitError(SplitError.MISSING_START, "document does not start with `---`")
    try:
        end = lines.index("---", 1)
    except ValueError:
        raise SplitError(SplitError.MISSING_END, "preamble is not closed by `---`") from None
    return "\n".join(lines[1:end]), "\n".join(lines[end + 1 :])


def parse_preamble(origin: str | None, source: str) -> Preamble:
    """Parse preamble text into fields; raise ParseError on malformed lines."""
    fields = []
    errors = []
    for index, line in enumerate(source.split("\n") if source else []):
        line_start = index + 2
        name, colon, value = line.partition(":")
        if not colon:
            label = "missing delimiter `:` in preamble field"
        elif not name.strip():
            label = "preamble field names cannot be empty"
        else:
            fields.append(Field(name, value, line, line_start))
            continue
        errors.append(
            Snippet(
                title=Annotation(AnnotationType.ERROR, label),
                slices=[
                    Slice(
                        source=line,
                        line_start=line_start,
                        origin=origin,
                        annotations=[
                            SourceAnnotation(AnnotationType.ERROR, "incorrect field", (0, len(line)))
                        ],
                    )
                ],
            )
        )
    if errors:
        raise ParseError(errors)
    return Preamble(fields)


@dataclass
class Context:
    """Everything a lint may inspect about one document."""

    preamble: Preamble
    source: str
    body_source: str
    body: Node
    reporter: Reporter
    origin: str | None = None
    arcs: Mapping[Path, Union["Context", BaseException]] = field(default_factory=dict)

    def line(self, line: int) -> str:
        """Return a line of the whole document; lines count from one."""
        if line == 0:
            raise ValueError("lines are numbered from one")
        return self.source.split("\n")[line - 1]

    def source_for_text(self, line: int, text: str) -> str:
        """Return as many document lines from ``line`` on as ``text`` spans."""
        if line == 0:
            raise ValueError("lines are numbered from one")
        count = max(1, text.count("\n"))
        return "\n".join(self.source.split("\n")[line - 1 : line - 1 + count])

    def report(self, snippet: Snippet) -> None:
        self.reporter.report(snippet)

    def arc(self, path: Path | str) -> Context:
        """Return the context of another proposal, resolved next to this one.

        Raises the error recorded when that proposal could not be read.
        """
        if self.origin is None:
            raise ValueError(
                "lint attempted to access an external resource without having an origin"
            )
        key = Path(self.origin).parent / path
        try:
            found = self.arcs[key]
        except KeyError:
            raise KeyError(f"no arc found for key `{key}`") from None
        if isinstance(found, BaseException):
            raise found
        return replace(found, reporter=self.reporter, arcs=self.arcs)


@dataclass
class FetchContext:
    """What a lint sees while collecting the other proposals it needs."""

    preamble: Preamble
    body: Node
    arcs: set[Path] = field(default_factory=set)

    def fetch(self, path: Path | str) -> None:
        """Ask for a proposal to be loaded before linting."""
        self.arcs.add(Path(path))


class Lint(ABC):
    """A single check run against each document."""

    def find_resources(self, ctx: FetchContext) -> None:
        """Request other documents this lint needs; none by default."""

    @abstractmethod
    def lint(self, slug: str, ctx: Context) -> None:
        """Check the document and report problems through the context."""