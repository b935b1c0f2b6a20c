"""Lints that check which preamble headers appear, in what order, and with which values."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from arclint.context import Context, Field, Lint, LintError
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet, SourceAnnotation


def _value_range(field: Field) -> tuple[int, int]:
    """The range covering a field's whole value, just after the colon."""
    return len(field.name) + 1, len(field.value) + len(field.name) + 1


def _whole_range(field: Field) -> tuple[int, int]:
    return 0, len(field.source)


def _field_slice(ctx: Context, field: Field, annotations: list[SourceAnnotation]) -> Slice:
    return Slice(
        source=field.source,
        line_start=field.line_start,
        origin=ctx.origin,
        annotations=annotations,
    )


def _error_title(slug: str, label: str) -> Annotation:
    return Annotation(AnnotationType.ERROR, label, slug)


def _parse_uint(text: str) -> int | None:
    """Parse an unsigned 64-bit integer: an optional ``+`` then ASCII digits."""
    digits = text[1:] if text.startswith("+") else text
    if not digits or not all(c in "0123456789" for c in digits):
        return None
    value = int(digits)
    return value if value < 2**64 else None


def _find_preceding(order: Sequence[str], present: Sequence[str], needle: str) -> str | None:
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
class OneOf(Lint):
    """The header's trimmed value must be one of a fixed set."""

    name: str
    values: Sequence[str]

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None or field.value.strip() in self.values:
            return

        choices = "`, `".join(self.values)
        ctx.report(
            Snippet(
                title=_error_title(
                    slug, f"preamble header `{self.name}` has an unrecognized value"
                ),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [
                            SourceAnnotation(
                                AnnotationType.ERROR,
                                f"must be one of: `{choices}`",
                                _value_range(field),
                            )
                        ],
                    )
                ],
            )
        )


@dataclass(frozen=True)
class Order(Lint):
    """Only known headers may appear, and in the listed order."""

    names: Sequence[str]

    def lint(self, slug: str, ctx: Context) -> None:
        order = list(self.names)

        unknowns = [
            _field_slice(
                ctx,
                f,
                [SourceAnnotation(AnnotationType.ERROR, "unrecognized header", (0, len(f.name)))],
            )
            for f in ctx.preamble.fields()
            if f.name not in order
        ]
        if unknowns:
            ctx.report(
                Snippet(
                    title=_error_title(slug, "preamble has extra header(s)"),
                    slices=unknowns,
                )
            )

        present = [f.name for f in ctx.preamble.fields()]

        max_line = 0
        for name in order:
            field = ctx.preamble.by_name(name)
            if field is None:
                continue
            previous, max_line = max_line, field.line_start
            if max_line >= previous:
                continue

            footer = []
            preceding = _find_preceding(order, present, field.name)
            if preceding is not None:
                footer.append(
                    Annotation(
                        AnnotationType.HELP,
                        f"`{field.name}` should come after `{preceding}`",
                    )
                )

            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, f"preamble header `{field.name}` is out of order"
                    ),
                    slices=[_field_slice(ctx, field, [])],
                    footer=footer,
                )
            )


class Mode(Enum):
    """Whether a pattern must or must not match a header's value."""

    INCLUDES = "includes"
    EXCLUDES = "excludes"


@dataclass(frozen=True)
class Regex(Lint):
    """The header's trimmed value must (or must not) match a pattern."""

    name: str
    mode: Mode
    pattern: str
    message: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        try:
            compiled = re.compile(self.pattern)
        except re.error as error:
            raise LintError(f"invalid pattern `{self.pattern}`: {error}") from error

        matches = compiled.search(field.value.strip()) is not None

        if self.mode is Mode.INCLUDES:
            if matches:
                return
            note = "required pattern was not matched"
        else:
            if not matches:
                return
            note = "prohibited pattern was matched"

        ctx.report(
            Snippet(
                title=_error_title(slug, self.message),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [SourceAnnotation(AnnotationType.ERROR, note, _value_range(field))],
                    )
                ],
                footer=[
                    Annotation(
                        AnnotationType.INFO, f"the pattern in question: `{self.pattern}`"
                    )
                ],
            )
        )


_MENTION = re.compile(r"ARC-([0-9]+)", re.IGNORECASE)


@dataclass(frozen=True)
class RequireReferenced(Lint):
    """Every ``ARC-N`` mentioned in a header must be listed in the requires header."""

    name: str
    requires: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        requires_field = ctx.preamble.by_name(self.requires)
        requires_txt = requires_field.value if requires_field is not None else ""
        required = {
            number
            for number in (_parse_uint(item.strip()) for item in requires_txt.split(","))
            if number is not None
        }

        missing = [m for m in _MENTION.finditer(field.value) if int(m.group(1)) not in required]
        if not missing:
            return

        shift = len(field.name) + 1
        annotations = [
            SourceAnnotation(
                AnnotationType.ERROR,
                "mentioned here",
                (m.start() + shift, m.end() + shift),
            )
            for m in missing
        ]

        ctx.report(
            Snippet(
                title=_error_title(
                    slug,
                    f"proposals mentioned in preamble header `{self.name}` "
                    f"must appear in `{self.requires}`",
                ),
                slices=[_field_slice(ctx, field, annotations)],
            )
        )


@dataclass(frozen=True)
class Required(Lint):
    """All the listed headers must be present."""

    names: Sequence[str]

    def lint(self, slug: str, ctx: Context) -> None:
        missing = [name for name in self.names if ctx.preamble.by_name(name) is None]
        if not missing:
            return

        ctx.report(
            Snippet(
                title=_error_title(
                    slug, f"preamble is missing header(s): `{'`, `'.join(missing)}`"
                ),
                slices=[
                    Slice(
                        source=ctx.line(1),
                        line_start=1,
                        origin=ctx.origin,
                        fold=True,
                    )
                ],
            )
        )


@dataclass(frozen=True)
class RequiredIfEq(Lint):
    """Header ``then`` must be present exactly when header ``when`` equals ``equals``."""

    when: str
    equals: str
    then: str

    def lint(self, slug: str, ctx: Context) -> None:
        then_field = ctx.preamble.by_name(self.then)
        when_field = ctx.preamble.by_name(self.when)

        if when_field is None and then_field is None:
            return

        if when_field is not None:
            is_equal = when_field.value.strip() == self.equals
            if is_equal == (then_field is not None):
                return

        only_allowed = (
            f"preamble header `{self.then}` is only allowed when "
            f"`{self.when}` is `{self.equals}`"
        )

        if when_field is not None and then_field is None:
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug,
                        f"preamble header `{self.then}` is required when "
                        f"`{self.when}` is `{self.equals}`",
                    ),
                    slices=[
                        _field_slice(
                            ctx,
                            when_field,
                            [
                                SourceAnnotation(
                                    AnnotationType.INFO, "defined here", _whole_range(when_field)
                                )
                            ],
                        )
                    ],
                )
            )
        elif when_field is not None and then_field is not None:
            slices = [
                _field_slice(
                    ctx,
                    when_field,
                    [
                        SourceAnnotation(
                            AnnotationType.INFO,
                            f"unless equal to `{self.equals}`",
                            _whole_range(when_field),
                        )
                    ],
                ),
                _field_slice(
                    ctx,
                    then_field,
                    [
                        SourceAnnotation(
                            AnnotationType.ERROR, "remove this", _whole_range(then_field)
                        )
                    ],
                ),
            ]
            slices.sort(key=lambda s: s.line_start)
            ctx.report(Snippet(title=_error_title(slug, only_allowed), slices=slices))
        elif then_field is not None:
            ctx.report(
                Snippet(
                    title=_error_title(slug, only_allowed),
                    slices=[
                        _field_slice(
                            ctx,
                            then_field,
                            [
                                SourceAnnotation(
                                    AnnotationType.ERROR, "defined here", _whole_range(then_field)
                                )
                            ],
                        )
                    ],
                )
            )


_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp", "file"}
_FORBIDDEN_HOST = set(" #/:<>?@[\\]^|")


def _url_problem(value: str) -> str | None:
    """Return why ``value`` is not an absolute URL, or None when it is one."""
    scheme_match = _SCHEME.match(value)
    if scheme_match is None:
        return "relative URL without a base"

    scheme = scheme_match.group()[:-1].lower()
    if scheme not in _SPECIAL_SCHEMES or scheme == "file":
        return None

    rest = value[scheme_match.end():].lstrip("/\\")
    authority = re.split(r"[/\\?#]", rest, maxsplit=1)[0]
    if "@" in authority:
        authority = authority.rsplit("@", 1)[1]

    if authority.startswith("["):
        close = authority.find("]")
        if close < 0:
            return "invalid IPv6 address"
        try:
            ipaddress.IPv6Address(authority[1:close])
        except ValueError:
            return "invalid IPv6 address"
        remainder = authority[close + 1 :]
        if remainder and not remainder.startswith(":"):
            return "invalid IPv6 address"
        port = remainder[1:]
    else:
        host, _, port = authority.partition(":")
        if not host:
            return "empty host"
        if any(c in _FORBIDDEN_HOST or ord(c) < 0x20 or ord(c) == 0x7F for c in host):
            return "invalid domain character"

    if port and (not all(c in "0123456789" for c in port) or int(port) > 65535):
        return "invalid port number"
    return None


@dataclass(frozen=True)
class Url(Lint):
    """The header's trimmed value must be an absolute URL."""

    name: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        problem = _url_problem(field.value.strip())
        if problem is None:
            return

        ctx.report(
            Snippet(
                title=_error_title(slug, f"preamble header `{self.name}` is not a valid URL"),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [SourceAnnotation(AnnotationType.ERROR, problem, _value_range(field))],
                    )
                ],
            )
        )