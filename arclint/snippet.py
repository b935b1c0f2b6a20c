"""Diagnostic snippets, their plain-text rendering and the reporters that collect them."""

from __future__ import annotations

import bisect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AnnotationType(Enum):
    """Severity of an annotation."""

    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"
    NOTE = "Note"
    HELP = "Help"

    @property
    def display(self) -> str:
        return self.value.lower()

    @property
    def mark(self) -> str:
        return "^" if self is AnnotationType.ERROR else "-"


@dataclass
class Annotation:
    """A title or footer line of a snippet."""

    annotation_type: AnnotationType
    label: str | None = None
    id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "annotation_type": self.annotation_type.value,
            "id": self.id,
            "label": self.label,
        }


@dataclass
class SourceAnnotation:
    """A label attached to a character range of a slice's source."""

    annotation_type: AnnotationType
    label: str
    range: tuple[int, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "annotation_type": self.annotation_type.value,
            "label": self.label,
            "range": list(self.range),
        }


@dataclass
class Slice:
    """A piece of source text shown in a snippet, starting at ``line_start``."""

    source: str
    line_start: int
    origin: str | None = None
    annotations: list[SourceAnnotation] = field(default_factory=list)
    fold: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "annotations": [a.to_dict() for a in self.annotations],
            "fold": self.fold,
            "line_start": self.line_start,
            "origin": self.origin,
            "source": self.source,
        }

    @property
    def lines(self) -> list[str]:
        return self.source.split("\n")

    def _line_offsets(self) -> list[int]:
        offsets = []
        position = 0
        for text in self.lines:
            offsets.append(position)
            position += len(text) + 1
        return offsets

    def _locate(self, offset: int) -> tuple[int, int]:
        """Return the zero-based line index and column of a character offset."""
        offsets = self._line_offsets()
        index = max(0, min(bisect.bisect_right(offsets, offset) - 1, len(offsets) - 1))
        return index, offset - offsets[index]


@dataclass
class Snippet:
    """A single diagnostic: a title, slices of source and footer notes."""

    title: Annotation | None = None
    slices: list[Slice] = field(default_factory=list)
    footer: list[Annotation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the snippet as plain JSON-compatible data."""
        return {
            "title": self.title.to_dict() if self.title is not None else None,
            "footer": [a.to_dict() for a in self.footer],
            "slices": [s.to_dict() for s in self.slices],
            "opt": {"anonymized_line_numbers": False, "color": False},
        }


def _format_title(title: Annotation) -> str:
    head = title.annotation_type.display
    if title.id is not None:
        head += f"[{title.id}]"
    if title.label:
        head += f": {title.label}"
    return head


def _visible(slice_: Slice, marked: set[int]) -> list[int]:
    count = len(slice_.lines)
    if not slice_.fold:
        return list(range(count))
    keep = {near for index in marked for near in (index - 1, index, index + 1)}
    if not keep:
        keep = {0}
    return sorted(index for index in keep if 0 <= index < count)


def _format_slice(slice_: Slice, width: int, first: bool) -> list[str]:
    pad = " " * width
    out = []
    if slice_.origin is not None:
        location = slice_.origin
        if slice_.annotations:
            index, column = slice_._locate(slice_.annotations[0].range[0])
            location += f":{slice_.line_start + index}:{column + 1}"
        out.append(f"{pad}{'-->' if first else ':::'} {location}")
    out.append(f"{pad} |")

    lines = slice_.lines
    by_line: dict[int, list[tuple[int, int, SourceAnnotation]]] = {}
    for annotation in slice_.annotations:
        start, end = annotation.range
        index, column = slice_._locate(start)
        end_column = min(end - (start - column), len(lines[index]))
        length = max(1, end_column - column)
        by_line.setdefault(index, []).append((column, length, annotation))

    previous = None
    for index in _visible(slice_, set(by_line)):
        if previous is not None and index > previous + 1:
            out.append("...")
        previous = index
        number = str(slice_.line_start + index).rjust(width)
        text = lines[index]
        out.append(f"{number} |" + (f" {text}" if text else ""))
        for column, length, annotation in by_line.get(index, []):
            marks = annotation.annotation_type.mark * length
            label = f" {annotation.label}" if annotation.label else ""
            out.append(f"{pad} | {' ' * column}{marks}{label}")
    return out


def format_snippet(snippet: Snippet) -> str:
    """Render a snippet as human-readable plain text."""
    lines = []
    if snippet.title is not None:
        lines.append(_format_title(snippet.title))

    width = max(
        (len(str(s.line_start + len(s.lines) - 1)) for s in snippet.slices),
        default=0,
    )
    pad = " " * width

    for position, slice_ in enumerate(snippet.slices):
        lines.extend(_format_slice(slice_, width, position == 0))

    footers = [f for f in snippet.footer if f.label is not None]
    if footers and snippet.slices:
        lines.append(f"{pad} |")
    for footer in footers:
        lines.append(f"{pad} = {footer.annotation_type.display}: {footer.label}")

    return "\n".join(lines)


class Reporter(ABC):
    """Receives the snippets that lints produce."""

    @abstractmethod
    def report(self, snippet: Snippet) -> None:
        """Accept one diagnostic."""


class NullReporter(Reporter):
    """A reporter that discards everything."""

    def report(self, snippet: Snippet) -> None:
        return None


class JsonReporter(Reporter):
    """Collects snippets as JSON-compatible dictionaries with a rendered form."""

    def __init__(self) -> None:
        self._reports: list[dict[str, Any]] = []

    def report(self, snippet: Snippet) -> None:
        entry = {"formatted": format_snippet(snippet)}
        entry.update(snippet.to_dict())
        self._reports.append(entry)

    def into_reports(self) -> list[dict[str, Any]]:
        """Return the collected reports in the order they were made."""
        return list(self._reports)