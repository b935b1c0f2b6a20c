"""Lints that check the shape of individual preamble header values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from arclint.context import Context, Field, Lint
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet, SourceAnnotation

_AUTHOR_USERNAME = re.compile(r"^[^()<>,@]+ \(@[a-zA-Z\d-]+\)\Z")
_AUTHOR_EMAIL = re.compile(r"^[^()<>,@]+ <[^@][^>]*@[^>]+\.[^>]+>\Z")
_AUTHOR_NAME = re.compile(r"^[^()<>,@]+\Z")

_AUTHOR_FOOTER = (
    "Try `Random J. User (@username)` for an author with a GitHub username.",
    "Try `Random J. User <test@example.com>` for an author with an email.",
    "Try `Random J. User` for an author without contact information.",
)


def _value_range(field: Field) -> tuple[int, int]:
    """The range covering a field's whole value, just after the colon."""
    return len(field.name) + 1, len(field.value) + len(field.name) + 1


def _field_slice(ctx: Context, field: Field, annotations: list[SourceAnnotation]) -> Slice:
    return Slice(
        source=field.source,
        line_start=field.line_start,
        origin=ctx.origin,
        annotations=annotations,
    )


def _error_title(slug: str, label: str) -> Annotation:
    return Annotation(AnnotationType.ERROR, label, slug)


@dataclass(frozen=True)
class Author(Lint):
    """Each author must be a name, optionally with a GitHub handle or an e-mail address."""

    name: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        has_username = False
        offset = 0
        for item in field.value.split(","):
            current = offset
            offset += len(item) + 1
            trimmed = item.strip()

            if _AUTHOR_USERNAME.match(trimmed):
                has_username = True
                continue
            if _AUTHOR_EMAIL.match(trimmed) or _AUTHOR_NAME.match(trimmed):
                continue

            start = len(field.name) + current + 1
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, "authors in the preamble must match the expected format"
                    ),
                    slices=[
                        _field_slice(
                            ctx,
                            field,
                            [
                                SourceAnnotation(
                                    AnnotationType.ERROR,
                                    "unrecognized author",
                                    (start, start + len(item)),
                                )
                            ],
                        )
                    ],
                    footer=[Annotation(AnnotationType.HELP, text) for text in _AUTHOR_FOOTER],
                )
            )

        if not has_username:
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug,
                        f"preamble header `{self.name}` must contain at least one GitHub username",
                    ),
                    slices=[_field_slice(ctx, field, [])],
                )
            )


_OUT_OF_RANGE = "input is out of range"
_INVALID = "input contains invalid characters"
_TOO_SHORT = "premature end of input"
_TOO_LONG = "trailing input"

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class _DateParseError(ValueError):
    pass


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _scan_number(text: str, pos: int, max_width: int | None) -> tuple[int, int]:
    pos = _skip_space(text, pos)
    end = pos
    while (
        end < len(text)
        and (max_width is None or end - pos < max_width)
        and text[end] in "0123456789"
    ):
        end += 1
    if end == pos:
        raise _DateParseError(_TOO_SHORT if pos >= len(text) else _INVALID)
    return int(text[pos:end]), end


def _scan_dash(text: str, pos: int) -> int:
    if pos >= len(text):
        raise _DateParseError(_TOO_SHORT)
    if text[pos] != "-":
        raise _DateParseError(_INVALID)
    return pos + 1


def _scan_year(text: str, pos: int) -> tuple[int, int]:
    pos = _skip_space(text, pos)
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        value, pos = _scan_number(text, pos + 1, None)
        return (-value if negative else value), pos
    return _scan_number(text, pos, 4)


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _date_problem(value: str) -> str | None:
    """Parse ``YYYY-MM-DD`` strictly and return a description of what is wrong, if anything."""
    try:
        year, pos = _scan_year(value, 0)
        pos = _scan_dash(value, pos)
        month, pos = _scan_number(value, pos, 2)
        if not 1 <= month <= 12:
            raise _DateParseError(_OUT_OF_RANGE)
        pos = _scan_dash(value, pos)
        day, pos = _scan_number(value, pos, 2)
        if not 1 <= day <= 31:
            raise _DateParseError(_OUT_OF_RANGE)
        if pos != len(value):
            raise _DateParseError(_TOO_LONG)
    except _DateParseError as error:
        return str(error)

    days = 29 if month == 2 and _is_leap(year) else _DAYS_IN_MONTH[month - 1]
    if abs(year) > 262_143 or day > days:
        return _OUT_OF_RANGE
    return None


@dataclass(frozen=True)
class Date(Lint):
    """The header must hold a date written as ``YYYY-MM-DD``."""

    name: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        value = field.value.strip()
        error = None
        if [len(part) for part in value.split("-")] != [4, 2, 2]:
            error = "invalid length"
        problem = _date_problem(value)
        if problem is not None:
            error = problem
        if error is None:
            return

        ctx.report(
            Snippet(
                title=_error_title(
                    slug,
                    f"preamble header `{self.name}` is not a date in the `YYYY-MM-DD` format",
                ),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [SourceAnnotation(AnnotationType.ERROR, error, _value_range(field))],
                    )
                ],
            )
        )


@dataclass(frozen=True)
class FileName(Lint):
    """The document's file name must be built from the header's value."""

    name: str
    prefix: str
    suffix: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None or ctx.origin is None:
            return

        file_name = Path(ctx.origin).name
        if not file_name:
            raise ValueError("origin did not have a file name")

        number = field.value.strip()
        if all(c.isnumeric() for c in number):
            as_int = int(number)
            if as_int < 10:
                number = "000" + number
            elif as_int < 100:
                number = "00" + number
            elif as_int < 1000:
                number = "0" + number

        expected = f"{self.prefix}{number}{self.suffix}"
        if file_name == expected:
            return

        ctx.report(
            Snippet(
                title=_error_title(
                    slug, f"file name must reflect the preamble header `{self.name}`"
                ),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [SourceAnnotation(AnnotationType.ERROR, "this value", _value_range(field))],
                    )
                ],
                footer=[
                    Annotation(
                        AnnotationType.HELP, f"this file's name should be `{expected}`"
                    )
                ],
            )
        )


@dataclass(frozen=True)
class Length(Lint):
    """The trimmed value's length in UTF-8 bytes must lie within the given bounds."""

    name: str
    min: int | None = None
    max: int | None = None

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        size = len(field.value.strip().encode("utf-8"))

        if self.max is not None and size > self.max:
            self._report(
                slug,
                ctx,
                field,
                f"preamble header `{self.name}` value is too long (max {self.max})",
                "too long",
            )

        if self.min is not None and size < self.min:
            self._report(
                slug,
                ctx,
                field,
                f"preamble header `{self.name}` value is too short (min {self.min})",
                "too short",
            )

    @staticmethod
    def _report(slug: str, ctx: Context, field: Field, label: str, note: str) -> None:
        ctx.report(
            Snippet(
                title=_error_title(slug, label),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [SourceAnnotation(AnnotationType.ERROR, note, _value_range(field))],
                    )
                ],
            )
        )


@dataclass(frozen=True)
class List(Lint):
    """Comma-separated values must be non-empty and separated by exactly one space."""

    name: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        name_len = len(field.name)
        missing_space: list[SourceAnnotation] = []
        extra_space: list[SourceAnnotation] = []

        offset = 0
        for item in field.value.strip().split(","):
            current = offset
            offset += len(item) + 1

            if not item.strip():
                ctx.report(
                    Snippet(
                        title=_error_title(
                            slug, f"preamble header `{self.name}` cannot have empty items"
                        ),
                        slices=[
                            _field_slice(
                                ctx,
                                field,
                                [
                                    SourceAnnotation(
                                        AnnotationType.ERROR,
                                        "this item is empty",
                                        (name_len + current + 1, name_len + current + 2),
                                    )
                                ],
                            )
                        ],
                    )
                )
                continue

            if item.startswith(" "):
                rest = item[1:]
            elif current == 0:
                rest = item
            else:
                missing_space.append(
                    SourceAnnotation(
                        AnnotationType.ERROR,
                        "missing space",
                        (name_len + current + 1, name_len + current + 2),
                    )
                )
                continue

            if rest.strip() == rest:
                continue

            extra_space.append(
                SourceAnnotation(
                    AnnotationType.ERROR,
                    "extra space",
                    (name_len + current + 2, name_len + current + 2 + len(item)),
                )
            )

        if missing_space:
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, "preamble header list items must begin with a space"
                    ),
                    slices=[_field_slice(ctx, field, missing_space)],
                )
            )

        if extra_space:
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, "preamble header list items have extra whitespace"
                    ),
                    slices=[_field_slice(ctx, field, extra_space)],
                )
            )


@dataclass(frozen=True)
class NoDuplicates(Lint):
    """No header may be defined more than once."""

    def lint(self, slug: str, ctx: Context) -> None:
        defined: dict[str, Field] = {}
        for field in ctx.preamble.fields():
            original = defined.setdefault(field.name, field)
            if original is field:
                continue
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, f"preamble header `{original.name}` defined multiple times"
                    ),
                    slices=[
                        _field_slice(
                            ctx,
                            original,
                            [
                                SourceAnnotation(
                                    AnnotationType.INFO,
                                    "first defined here",
                                    (0, len(original.source)),
                                )
                            ],
                        ),
                        _field_slice(
                            ctx,
                            field,
                            [
                                SourceAnnotation(
                                    AnnotationType.ERROR,
                                    "redefined here",
                                    (0, len(field.source)),
                                )
                            ],
                        ),
                    ],
                )
            )