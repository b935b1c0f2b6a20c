import pytest

from arclint.context import Context, LintError, parse_preamble, split_preamble
from arclint.markdown_text import LinkFirst, MarkdownMode, MarkdownRegex
from arclint.mdtree import parse_markdown
from arclint.snippet import AnnotationType, Reporter

NOT_ARC = r"arc[\s-]*[0-9]+"
NOT_ARC_MESSAGE = "proposals must be referenced with the form `ARC-N` (not `arc-N`)"
LINK_PATTERN = r"(?i)ARC-[0-9]+"
LINK_LABEL = "the first match of the given pattern must be a link"


class _Collect(Reporter):
    def __init__(self):
        self.snippets = []

    def report(self, snippet):
        self.snippets.append(snippet)


def _context(body):
    text = f"---\narc: 1\n---\n{body}\n"
    preamble_src, body_src = split_preamble(text)
    reporter = _Collect()
    ctx = Context(
        preamble=parse_preamble("arc-0001.md", preamble_src),
        source=text,
        body_source=body_src,
        body=parse_markdown(body_src, preamble_src.count("\n") + 3),
        reporter=reporter,
        origin="arc-0001.md",
    )
    return ctx, reporter.snippets


def _regex(body):
    ctx, snippets = _context(body)
    MarkdownRegex(MarkdownMode.EXCLUDES, NOT_ARC, NOT_ARC_MESSAGE).lint("markdown-re-arc-not-arc", ctx)
    return ctx, snippets


def _link_first(body):
    ctx, snippets = _context(body)
    LinkFirst(LINK_PATTERN).lint("markdown-link-first", ctx)
    return ctx, snippets


def test_regex_reports_matching_text():
    ctx, snippets = _regex("This refers to arc-20 in lower case.")
    assert len(snippets) == 1
    snippet = snippets[0]
    assert snippet.title.label == NOT_ARC_MESSAGE
    assert snippet.title.id == "markdown-re-arc-not-arc"
    assert snippet.title.annotation_type is AnnotationType.ERROR
    assert snippet.footer[0].label == f"the pattern in question: `{NOT_ARC}`"
    (slice_,) = snippet.slices
    assert "arc-20" in slice_.source
    assert slice_.source == ctx.line(slice_.line_start)


def test_regex_ignores_clean_text():
    _, snippets = _regex("This refers to ARC-20 properly.")
    assert snippets == []


def test_regex_skips_code_spans_and_blocks():
    body = "Use `arc-20` here.\n\n```\narc-21\n```"
    _, snippets = _regex(body)
    assert snippets == []


def test_regex_invalid_pattern_raises():
    ctx, _ = _context("Some text.")
    with pytest.raises(LintError):
        MarkdownRegex(MarkdownMode.EXCLUDES, "(", "broken").lint("slug", ctx)


def test_link_first_accepts_linked_first_mention():
    _, snippets = _link_first("See [ARC-20](./arc-0020.md), and later ARC-20 again.")
    assert snippets == []


def test_link_first_reports_unlinked_first_mention():
    ctx, snippets = _link_first("ARC-20 first, then [ARC-20](./arc-0020.md).")
    assert len(snippets) == 1
    snippet = snippets[0]
    assert snippet.title.label == LINK_LABEL
    assert snippet.title.id == "markdown-link-first"
    assert snippet.footer[0].label == f"the pattern in question: `{LINK_PATTERN}`"
    assert snippet.slices[0].source == ctx.line(snippet.slices[0].line_start)


def test_link_first_reports_every_unlinked_match():
    _, snippets = _link_first("ARC-1 and ARC-1 again.")
    assert len(snippets) == 2
    assert all(s.title.label == LINK_LABEL for s in snippets)


def test_link_first_ignores_code():
    _, snippets = _link_first("Mention `ARC-5` in code only.")
    assert snippets == []