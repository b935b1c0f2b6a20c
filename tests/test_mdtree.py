from arclint.mdtree import Node, NodeKind, Visitor, parse_markdown


def of_kind(root, kind):
    return [n for n in root.descendants() if n.kind is kind]


def test_descendants_start_with_document():
    doc = parse_markdown("hello\n")
    nodes = list(doc.descendants())
    assert nodes[0] is doc
    assert nodes[0].kind is NodeKind.DOCUMENT


def test_heading_level_and_text():
    doc = parse_markdown("## Abstract\n\nSome text\n")
    (heading,) = of_kind(doc, NodeKind.HEADING)
    assert heading.level == 2
    assert heading.text() == "Abstract"


def test_document_starts_on_first_line():
    assert parse_markdown("x\n").start_line == 1


def test_line_offset_shifts_every_node():
    source = "# A\n\npara with *emphasis*\n"
    plain = list(parse_markdown(source).descendants())
    shifted = list(parse_markdown(source, 4).descendants())
    assert [n.kind for n in plain] == [n.kind for n in shifted]
    assert all(b.start_line == a.start_line + 4 for a, b in zip(plain, shifted))


def test_inline_nodes_take_block_line():
    doc = parse_markdown("first\n\nsecond paragraph\n")
    paragraphs = of_kind(doc, NodeKind.PARAGRAPH)
    for paragraph in paragraphs:
        for child in paragraph.children:
            assert child.start_line == paragraph.start_line
    assert paragraphs[0].start_line < paragraphs[1].start_line


def test_link_url_title_and_text():
    doc = parse_markdown('See [ARC-1](./arc-0001.md "t").\n')
    (link,) = of_kind(doc, NodeKind.LINK)
    assert link.url == "./arc-0001.md"
    assert link.title == "t"
    assert link.text() == "ARC-1"


def test_image_url_and_alt_text():
    doc = parse_markdown('![alt words](pic.png "caption")\n')
    (image,) = of_kind(doc, NodeKind.IMAGE)
    assert image.url == "pic.png"
    assert image.title == "caption"
    assert image.text() == "alt words"


def test_code_literals():
    doc = parse_markdown("```py\nx = 1\n```\n\nuse `y` here\n")
    (block,) = of_kind(doc, NodeKind.CODE_BLOCK)
    (inline,) = of_kind(doc, NodeKind.CODE)
    assert block.literal == "x = 1\n"
    assert block.info == "py"
    assert inline.literal == "y"


def test_adjacent_text_is_merged():
    doc = parse_markdown("a\\*b\n")
    assert [n.literal for n in of_kind(doc, NodeKind.TEXT)] == ["a*b"]


def test_tables_are_parsed():
    doc = parse_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert len(of_kind(doc, NodeKind.TABLE)) == 1
    assert len(of_kind(doc, NodeKind.TABLE_ROW)) == 2
    cells = of_kind(doc, NodeKind.TABLE_CELL)
    assert [c.text() for c in cells] == ["a", "b", "1", "2"]


def test_html_block_literal():
    doc = parse_markdown("<div>\nhi\n</div>\n")
    (html,) = of_kind(doc, NodeKind.HTML_BLOCK)
    assert "<div>" in html.literal


class Recorder(Visitor):
    def __init__(self):
        self.entered = []
        self.departed = []
        self.texts = []

    def enter(self, node):
        self.entered.append(node.kind)
        return super().enter(node)

    def depart(self, node):
        self.departed.append(node.kind)
        super().depart(node)

    def enter_text(self, node):
        self.texts.append(node.literal)

    def enter_link(self, node):
        return False


def test_visitor_skips_children_and_departs_everything():
    doc = parse_markdown("before [inside](x.md) after\n")
    recorder = Recorder()
    doc.visit(recorder)
    assert recorder.texts == ["before ", " after"]
    assert sorted(recorder.entered, key=lambda k: k.value) == sorted(
        recorder.departed, key=lambda k: k.value
    )
    assert recorder.departed[-1] is NodeKind.DOCUMENT


def test_visit_without_handlers_walks_all_nodes():
    doc = parse_markdown("- one\n- two\n")
    recorder = Recorder()
    doc.visit(recorder)
    assert recorder.entered == [n.kind for n in doc.descendants()]


def test_node_text_of_leaf():
    node = Node(NodeKind.TEXT, 1, literal="abc")
    assert node.text() == "abc"