from arclint.context import Context, parse_preamble, split_preamble
from arclint.mdtree import parse_markdown
from arclint.section_order import SectionOrder
from arclint.snippet import JsonReporter

ORDER = SectionOrder(("Abstract", "Motivation", "Specification"))


def make_ctx(body, origin="arc-0001.md"):
    doc = f"---\ntitle: Test\n---\n{body}"
    pre, body_source = split_preamble(doc)
    preamble = parse_preamble(origin, pre)
    tree = parse_markdown(body_source, pre.count("\n") + 3)
    reporter = JsonReporter()
    ctx = Context(preamble, doc, body_source, tree, reporter, origin)
    return ctx, reporter


def test_in_order_is_clean():
    ctx, reporter = make_ctx("## Abstract\n\ntext\n\n## Specification\n")
    ORDER.lint("markdown-order-section", ctx)
    assert reporter.into_reports() == []


def test_out_of_order_section():
    ctx, reporter = make_ctx("## Specification\n\ntext\n\n## Abstract\n")
    ORDER.lint("markdown-order-section", ctx)
    reports = reporter.into_reports()
    assert len(reports) == 1
    report = reports[0]
    assert report["title"]["label"] == "section `Specification` is out of order"
    assert report["title"]["id"] == "markdown-order-section"
    assert report["footer"][0]["label"] == "`Specification` should come after `Abstract`"
    slice_ = report["slices"][0]
    assert slice_["source"] == "## Specification"
    assert ctx.line(slice_["line_start"]) == "## Specification"


def test_extra_section_reported():
    ctx, reporter = make_ctx("## Abstract\n\n## Bogus\n")
    ORDER.lint("slug", ctx)
    reports = reporter.into_reports()
    assert [r["title"]["label"] for r in reports] == ["body has extra section(s)"]
    assert [s["source"] for s in reports[0]["slices"]] == ["## Bogus"]
    assert reports[0]["slices"][0]["origin"] == "arc-0001.md"


def test_other_heading_levels_ignored():
    ctx, reporter = make_ctx("### Bogus\n\n# Specification\n\n## Abstract\n")
    ORDER.lint("slug", ctx)
    assert reporter.into_reports() == []


def test_no_preceding_for_first_section():
    order = SectionOrder(("Abstract", "Specification"))
    ctx, reporter = make_ctx("## Abstract\n\n## Motivation\n\n## Specification\n")
    order.lint("slug", ctx)
    reports = reporter.into_reports()
    assert [r["title"]["label"] for r in reports] == ["body has extra section(s)"]
    assert reports[0]["footer"] == []