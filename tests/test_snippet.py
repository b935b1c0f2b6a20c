import pytest

from arclint.snippet import (
    Annotation,
    AnnotationType,
    JsonReporter,
    NullReporter,
    Reporter,
    Slice,
    Snippet,
    SourceAnnotation,
    format_snippet,
)

TITLE = (
    "preamble header `requires` contains items not stable enough for a "
    "`status` of `Last Call`"
)
HELP = "valid `status` values for this proposal are: `Draft`, `Stagnant`"

EXPECTED_TEXT = """error[preamble-requires-status]: preamble header `requires` contains items not stable enough for a `status` of `Last Call`
  --> tests/arcs/arc-1000.md:12:10
   |
12 | requires: 20
   |          ^^^ has a less advanced status
   |
   = help: valid `status` values for this proposal are: `Draft`, `Stagnant`"""


def requires_snippet():
    return Snippet(
        title=Annotation(AnnotationType.ERROR, TITLE, "preamble-requires-status"),
        slices=[
            Slice(
                source="requires: 20",
                line_start=12,
                origin="tests/arcs/arc-1000.md",
                annotations=[
                    SourceAnnotation(
                        AnnotationType.ERROR, "has a less advanced status", (9, 12)
                    )
                ],
            )
        ],
        footer=[Annotation(AnnotationType.HELP, HELP)],
    )


def test_format_matches_reference_output():
    assert format_snippet(requires_snippet()) == EXPECTED_TEXT


def test_json_reporter_matches_reference_report():
    reporter = JsonReporter()
    reporter.report(requires_snippet())
    expected = {
        "formatted": EXPECTED_TEXT,
        "footer": [{"annotation_type": "Help", "id": None, "label": HELP}],
        "opt": {"anonymized_line_numbers": False, "color": False},
        "slices": [
            {
                "annotations": [
                    {
                        "annotation_type": "Error",
                        "label": "has a less advanced status",
                        "range": [9, 12],
                    }
                ],
                "fold": False,
                "line_start": 12,
                "origin": "tests/arcs/arc-1000.md",
                "source": "requires: 20",
            }
        ],
        "title": {
            "annotation_type": "Error",
            "id": "preamble-requires-status",
            "label": TITLE,
        },
    }
    assert reporter.into_reports() == [expected]


def test_to_dict_without_title():
    data = Snippet().to_dict()
    assert data["title"] is None
    assert data["slices"] == []
    assert data["footer"] == []


def test_title_without_id():
    text = format_snippet(Snippet(title=Annotation(AnnotationType.ERROR, "boom")))
    assert text == "error: boom"


def test_slice_without_origin_has_no_location():
    snippet = Snippet(
        title=Annotation(AnnotationType.ERROR, "x"),
        slices=[Slice(source="hello", line_start=3)],
    )
    text = format_snippet(snippet)
    assert "-->" not in text
    assert "3 | hello" in text.splitlines()


def test_annotation_on_later_line_sets_location():
    snippet = Snippet(
        slices=[
            Slice(
                source="first\nsecond",
                line_start=9,
                origin="doc.md",
                annotations=[SourceAnnotation(AnnotationType.ERROR, "here", (6, 12))],
            )
        ]
    )
    lines = format_snippet(snippet).splitlines()
    assert lines[0].endswith("doc.md:10:1")
    assert "10 | second" in lines


def test_second_slice_uses_continuation_marker():
    snippet = Snippet(
        slices=[
            Slice(source="a", line_start=1, origin="f.md"),
            Slice(source="b", line_start=2, origin="f.md"),
        ]
    )
    text = format_snippet(snippet)
    assert text.count("-->") == 1
    assert text.count(":::") == 1


def test_json_reporter_keeps_order():
    reporter = JsonReporter()
    for label in ("one", "two", "three"):
        reporter.report(Snippet(title=Annotation(AnnotationType.ERROR, label)))
    labels = [r["title"]["label"] for r in reporter.into_reports()]
    assert labels == ["one", "two", "three"]


def test_into_reports_returns_copy():
    reporter = JsonReporter()
    reporter.report(Snippet())
    reporter.into_reports().clear()
    assert len(reporter.into_reports()) == 1


def test_null_reporter_returns_nothing():
    assert NullReporter().report(Snippet()) is None


def test_reporter_is_abstract():
    with pytest.raises(TypeError):
        Reporter()