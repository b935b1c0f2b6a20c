"""Lints on preamble values: required proposals' status, whitespace and unsigned integers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from arclint.context import Context, FetchContext, Field, Lint
from arclint.snippet import Annotation, AnnotationType, Slice, Snippet, SourceAnnotation


def arc_file_name(number: int) -> Path:
    """The file name of proposal ``number``, zero-padded to four digits."""
    if number < 0:
        raise ValueError("proposal numbers are non-negative")
    return Path(f"arc-{number:04d}.md")


def _parse_uint(text: str) -> int | None:
    """Parse an unsigned 64-bit integer: an optional ``+`` then ASCII digits."""
    digits = text[1:] if text.startswith("+") else text
    if not digits or not all(c in "0123456789" for c in digits):
        return None
    value = int(digits)
    return value if value < 2**64 else None


def _value_range(field: Field) -> tuple[int, int]:
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
class RequiresStatus(Lint):
    """Required proposals must be at least as far along the status flow as this one."""

    requires: str
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
        field = ctx.preamble.by_name(self.requires)
        if field is None:
            return
        for item in field.value.split(","):
            number = _parse_uint(item.strip())
            if number is not None:
                ctx.fetch(arc_file_name(number))

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.requires)
        if field is None:
            return

        tiers = self._tiers()
        my_tier = self._tier(tiers, ctx)
        too_unstable: list[SourceAnnotation] = []
        lowest: int | None = None
        name_len = len(field.name)

        offset = 0
        for item in field.value.split(","):
            current = offset
            offset += len(item) + 1

            number = _parse_uint(item.strip())
            if number is None:
                continue
            key = arc_file_name(number)
            item_range = (name_len + current + 1, name_len + current + 1 + len(item))

            try:
                other = ctx.arc(key)
            except KeyError:
                raise
            except Exception as error:
                ctx.report(
                    Snippet(
                        title=_error_title(slug, f"unable to read file `{key}`: {error}"),
                        slices=[
                            _field_slice(
                                ctx,
                                field,
                                [
                                    SourceAnnotation(
                                        AnnotationType.ERROR, "required from here", item_range
                                    )
                                ],
                            )
                        ],
                    )
                )
                continue

            their_tier = self._tier(tiers, other)
            if lowest is None or their_tier < lowest:
                lowest = their_tier
            if their_tier >= my_tier:
                continue

            too_unstable.append(
                SourceAnnotation(AnnotationType.ERROR, "has a less advanced status", item_range)
            )

        if not too_unstable:
            return

        status_field = ctx.preamble.by_name(self.status)
        status_value = (status_field.value if status_field is not None else "<missing>").strip()
        label = (
            f"preamble header `{self.requires}` contains items not stable enough "
            f"for a `{self.status}` of `{status_value}`"
        )

        choices = "`, `".join(
            sorted(v for v, t in tiers.items() if lowest is not None and t <= lowest)
        )
        footer = []
        if choices:
            footer.append(
                Annotation(
                    AnnotationType.HELP,
                    f"valid `{self.status}` values for this proposal are: `{choices}`",
                )
            )

        ctx.report(
            Snippet(
                title=_error_title(slug, label),
                slices=[_field_slice(ctx, field, too_unstable)],
                footer=footer,
            )
        )


@dataclass(frozen=True)
class Trim(Lint):
    """Header values must start with one space and carry no other surrounding whitespace."""

    def lint(self, slug: str, ctx: Context) -> None:
        no_space: list[Field] = []

        for field in ctx.preamble.fields():
            value = field.value
            if not value:
                continue

            if value.startswith(" "):
                value = value[1:]
            else:
                no_space.append(field)

            if value.strip() == value:
                continue

            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, f"preamble header `{field.name}` has extra whitespace"
                    ),
                    slices=[
                        _field_slice(
                            ctx,
                            field,
                            [
                                SourceAnnotation(
                                    AnnotationType.ERROR,
                                    "value has extra whitespace",
                                    _value_range(field),
                                )
                            ],
                        )
                    ],
                )
            )

        if no_space:
            ctx.report(
                Snippet(
                    title=_error_title(slug, "preamble header values must begin with a space"),
                    slices=[
                        _field_slice(
                            ctx,
                            f,
                            [
                                SourceAnnotation(
                                    AnnotationType.ERROR,
                                    "space required here",
                                    (len(f.name) + 1, len(f.name) + 2),
                                )
                            ],
                        )
                        for f in no_space
                    ],
                )
            )


@dataclass(frozen=True)
class Uint(Lint):
    """The header's trimmed value must be an unsigned integer."""

    name: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None or _parse_uint(field.value.strip()) is not None:
            return

        ctx.report(
            Snippet(
                title=_error_title(
                    slug, f"preamble header `{self.name}` must be an unsigned integer"
                ),
                slices=[
                    _field_slice(
                        ctx,
                        field,
                        [
                            SourceAnnotation(
                                AnnotationType.ERROR,
                                "not a non-negative integer",
                                _value_range(field),
                            )
                        ],
                    )
                ],
            )
        )


@dataclass(frozen=True)
class UintList(Lint):
    """The header must be a comma-separated list of unsigned integers in ascending order."""

    name: str

    def lint(self, slug: str, ctx: Context) -> None:
        field = ctx.preamble.by_name(self.name)
        if field is None:
            return

        name_len = len(field.name)
        values: list[int] = []
        not_uint: list[SourceAnnotation] = []

        offset = 0
        for item in field.value.split(","):
            current = offset
            offset += len(item) + 1

            number = _parse_uint(item.strip())
            if number is None:
                not_uint.append(
                    SourceAnnotation(
                        AnnotationType.ERROR,
                        "not a non-negative integer",
                        (name_len + current + 1, name_len + current + 1 + len(item)),
                    )
                )
            else:
                values.append(number)

        if not_uint:
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug, f"preamble header `{self.name}` items must be unsigned integers"
                    ),
                    slices=[_field_slice(ctx, field, not_uint)],
                )
            )

        if sorted(values) != values:
            ctx.report(
                Snippet(
                    title=_error_title(
                        slug,
                        f"preamble header `{self.name}` items must be sorted in ascending order",
                    ),
                    slices=[_field_slice(ctx, field, [])],
                )
            )