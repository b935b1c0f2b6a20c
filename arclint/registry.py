"""The lints that are active unless a linter is told otherwise."""

from __future__ import annotations

from typing import Iterator

from arclint.context import Lint
from arclint.markdown_links import LinkStatus, RelativeLinks
from arclint.markdown_text import LinkFirst, MarkdownMode, MarkdownRegex
from arclint.preamble_fields import Author, Date, FileName, Length, List, NoDuplicates
from arclint.preamble_rules import (
    Mode,
    OneOf,
    Order,
    Regex,
    RequireReferenced,
    Required,
    RequiredIfEq,
    Url,
)
from arclint.preamble_values import RequiresStatus, Trim, Uint, UintList
from arclint.section_order import SectionOrder
from arclint.section_required import SectionRequired

_STATUS_FLOW = (
    ("Draft", "Stagnant"),
    ("Review",),
    ("Last Call",),
    ("Final", "Withdrawn", "Living", "Deprecated"),
)

_LIST_HEADERS = ("extends", "extended-by", "replaces", "superseded-by", "requires")


def _list_lints() -> Iterator[tuple[str, Lint]]:
    yield "preamble-list-author", List("author")
    for name in _LIST_HEADERS:
        yield f"preamble-list-{name}", List(name)
        yield f"preamble-uint-{name}", UintList(name)


def default_lints() -> Iterator[tuple[str, Lint]]:
    """Yield ``(slug, lint)`` pairs for every default lint."""
    yield "preamble-no-dup", NoDuplicates()
    yield "preamble-trim", Trim()
    yield "preamble-arc", Uint("arc")
    yield "preamble-author", Author("author")
    yield "preamble-re-title", Regex(
        name="title",
        mode=Mode.EXCLUDES,
        pattern=r"(?i)standar\w*\b",
        message="preamble header `title` should not contain `standard` (or similar words.)",
    )
    yield "preamble-re-title-arc", Regex(
        name="title",
        mode=Mode.EXCLUDES,
        pattern=r"(?i)ARC[\s-]*[0-9]+",
        message="preamble header `title` should not contain `ARC-`",
    )
    yield "preamble-re-title-arc-dash", Regex(
        name="title",
        mode=Mode.EXCLUDES,
        pattern=r"(?i)ARC[\s]*[0-9]+",
        message="preamble header `title` should not contain `ARC`",
    )
    yield "preamble-re-description-arc-dash", Regex(
        name="description",
        mode=Mode.EXCLUDES,
        pattern=r"(?i)ARC[\s]*[0-9]+",
        message="proposals must be referenced with the form `ARC-N` (not `ARCN` or `ARC N`)",
    )
    yield "preamble-re-description-arc", Regex(
        name="description",
        mode=Mode.EXCLUDES,
        pattern=r"(?i)ARC[\s-]*[0-9]+",
        message="proposals must be referenced with the form `ARC-N` (not `arc-N`)",
    )
    yield "preamble-re-description", Regex(
        name="description",
        mode=Mode.EXCLUDES,
        pattern=r"standar\w*\b",
        message=(
            "preamble header `description` should not contain `standard` (or similar words.)"
        ),
    )
    yield "preamble-discussions-to", Url("discussions-to")
    yield "preamble-re-discussions-to", Regex(
        name="discussions-to",
        mode=Mode.INCLUDES,
        pattern="^https://github.com/algorandfoundation/ARCs/issues/",
        message=(
            "preamble header `discussions-to` should "
            "point to a thread on algorandfoundation/ARCs/issues"
        ),
    )
    yield from _list_lints()
    yield "preamble-len-title", Length("title", min=2, max=44)
    yield "preamble-len-description", Length("description", min=2, max=140)
    yield "preamble-len-withdrawal-reason", Length("withdrawal-reason", min=2, max=140)
    yield "preamble-req", Required(
        ("arc", "title", "description", "author", "status", "type", "created")
    )
    yield "preamble-order", Order(
        (
            "arc",
            "title",
            "description",
            "author",
            "discussions-to",
            "status",
            "last-call-deadline",
            "type",
            "category",
            "sub-category",
            "created",
            "requires",
            "withdrawal-reason",
            "extended-by",
            "extends",
            "replaces",
            "superseded-by",
        )
    )
    yield "preamble-enum-sub-category", OneOf(
        "sub-category", ("General", "Asa", "Application", "Explorer", "Wallet")
    )
    yield "preamble-date-created", Date("created")
    yield "preamble-req-last-call-deadline", RequiredIfEq(
        when="status", equals="Last Call", then="last-call-deadline"
    )
    yield "preamble-date-last-call-deadline", Date("last-call-deadline")
    yield "preamble-req-category", RequiredIfEq(
        when="type", equals="Standards Track", then="category"
    )
    yield "preamble-req-withdrawal-reason", RequiredIfEq(
        when="status", equals="Withdrawn", then="withdrawal-reason"
    )
    yield "preamble-enum-status", OneOf(
        "status",
        (
            "Draft",
            "Review",
            "Last Call",
            "Final",
            "Stagnant",
            "Withdrawn",
            "Deprecated",
            "Living",
        ),
    )
    yield "preamble-enum-type", OneOf("type", ("Standards Track", "Meta", "Informational"))
    yield "preamble-enum-category", OneOf(
        "category", ("Core", "Networking", "Interface", "ARC")
    )
    yield "preamble-requires-status", RequiresStatus(
        requires="requires", status="status", flow=_STATUS_FLOW
    )
    yield "preamble-requires-ref-title", RequireReferenced(name="title", requires="requires")
    yield "preamble-requires-ref-description", RequireReferenced(
        name="description", requires="requires"
    )
    yield "preamble-file-name", FileName(name="arc", prefix="arc-", suffix=".md")

    yield "markdown-req-section", SectionRequired(
        ("Abstract", "Specification", "Rationale", "Security Considerations", "Copyright")
    )
    yield "markdown-order-section", SectionOrder(
        (
            "Abstract",
            "Motivation",
            "Specification",
            "Rationale",
            "Backwards Compatibility",
            "Test Cases",
            "Reference Implementation",
            "Security Considerations",
            "Copyright",
        )
    )
    yield "markdown-re-arc-not-arc", MarkdownRegex(
        mode=MarkdownMode.EXCLUDES,
        pattern=r"arc[\s-]*[0-9]+",
        message="proposals must be referenced with the form `ARC-N` (not `arc-N`)",
    )
    yield "markdown-re-arc-dash", MarkdownRegex(
        mode=MarkdownMode.EXCLUDES,
        pattern=r"(?i)ARC[\s]*[0-9]+",
        message="proposals must be referenced with the form `ARC-N` (not `ARCN` or `ARC N`)",
    )
    yield "markdown-link-first", LinkFirst(r"(?i)ARC-[0-9]+")
    yield "markdown-rel-links", RelativeLinks()
    yield "markdown-link-status", LinkStatus(status="status", flow=_STATUS_FLOW)