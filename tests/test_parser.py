import pytest

from mdingest.adapters.dom import parse_fragment
from mdingest.core.config import MarkdownOptions
from mdingest.core.editor import Editor
from mdingest.core.exceptions import GuardPatternError
from mdingest.core.parser import ConversionRequest, MarkdownParser
from mdingest.core.schema import NodeType, Schema


def _top_level(html: str) -> list[str]:
    return [child.name for child in parse_fragment(html).children if child.name]


@pytest.fixture
def parser() -> MarkdownParser:
    return MarkdownParser(Editor())


def test_emphasis_paragraph(parser: MarkdownParser) -> None:
    html = parser.parse("*hi*")
    tree = parse_fragment(html)

    paragraphs = tree.find_all("p", recursive=False)
    assert len(paragraphs) == 1
    emphasis = paragraphs[0].find("em")
    assert emphasis is not None
    assert emphasis.get_text() == "hi"
    assert html == "<p><em>hi</em></p>"


def test_heading_is_not_wrapped(parser: MarkdownParser) -> None:
    assert parser.parse("# Title") == "<h1>Title</h1>"


def test_multiple_blocks(parser: MarkdownParser) -> None:
    html = parser.parse("# Title\n\nFirst paragraph.\n\n- one\n- two\n")
    assert html == "<h1>Title</h1><p>First paragraph.</p><ul><li>one</li><li>two</li></ul>"


def test_non_text_content_passes_through(parser: MarkdownParser) -> None:
    document = {"type": "doc", "content": []}
    assert parser.parse(document) is document
    assert parser.parse(None) is None


def test_ingesting_output_as_structured_content_is_idempotent(parser: MarkdownParser) -> None:
    first = parser.parse("**bold**")
    structured = parse_fragment(first)

    assert parser.parse(structured) is structured
    assert str(parser.parse(structured)) == first


def test_soft_break_survives(parser: MarkdownParser) -> None:
    assert parser.parse("first\nsecond") == "<p>first\nsecond</p>"


def test_hard_break_has_no_trailing_newline(parser: MarkdownParser) -> None:
    assert parser.parse("first  \nsecond") == "<p>first<br/>second</p>"


def test_image_is_hoisted_out_of_paragraph(parser: MarkdownParser) -> None:
    html = parser.parse("before ![alt](pic.png) after")
    tree = parse_fragment(html)

    assert _top_level(html) == ["p", "img", "p"]
    image = tree.find("img")
    assert image["src"] == "pic.png"
    assert image["alt"] == "alt"
    assert [p.get_text() for p in tree.find_all("p")] == ["before ", " after"]


def test_inline_html_block_is_hoisted(parser: MarkdownParser) -> None:
    html = parser.parse("before <hr> after")
    tree = parse_fragment(html)

    rule = tree.find("hr")
    assert rule is not None
    assert rule.find_parent("p") is None


def test_inline_mode_preserves_whitespace(parser: MarkdownParser) -> None:
    assert parser.parse("  hello world  ", inline=True) == "  hello world  "


def test_inline_mode_keeps_blank_line_block(parser: MarkdownParser) -> None:
    assert parser.parse("\n\nSome paragraph", inline=True) == "<p>Some paragraph</p>"


def test_inline_mode_with_several_paragraphs(parser: MarkdownParser) -> None:
    html = parser.parse("**one**\n\ntwo", inline=True)
    assert html == "<strong>one</strong><p>two</p>"


def test_inline_mode_keeps_trailing_newline(parser: MarkdownParser) -> None:
    assert parser.parse("some *text*\n", inline=True) == "some <em>text</em>\n"


def test_guarded_text_is_not_interpreted() -> None:
    parser = MarkdownParser(options=MarkdownOptions(ignore_regex=[r"\{\{.*?\}\}"]))
    html = parser.parse("Keep {{ *raw* }} and *this*")

    assert html == "<p>Keep {{ *raw* }} and <em>this</em></p>"


def test_guarded_identical_substrings_restored_in_place() -> None:
    parser = MarkdownParser(options=MarkdownOptions(ignore_regex=[r"\$[^$]+\$"]))
    html = parser.parse("$a_b_c$ then _x_ then $a_b_c$")

    assert html == "<p>$a_b_c$ then <em>x</em> then $a_b_c$</p>"


def test_zero_width_guard_rejected_at_construction() -> None:
    with pytest.raises(GuardPatternError):
        MarkdownParser(options=MarkdownOptions(ignore_regex=["a*"]))


def test_schema_without_blocks_disables_hoisting() -> None:
    parser = MarkdownParser(Editor(schema=Schema([NodeType("text", block=False)])))
    html = parser.parse("before ![alt](pic.png) after")
    tree = parse_fragment(html)

    assert _top_level(html) == ["p"]
    assert tree.p.img["src"] == "pic.png"
    assert tree.p.get_text() == "before  after"


def test_run_accepts_conversion_request(parser: MarkdownParser) -> None:
    request = ConversionRequest(text="  *x*  ", mode="inline")
    assert request.inline
    assert parser.run(request) == "  <em>x</em>  "


def test_conversion_request_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError, match="Unknown ingestion mode"):
        ConversionRequest(text="x", mode="paragraph")  # type: ignore[arg-type]


def test_results_do_not_depend_on_previous_calls(parser: MarkdownParser) -> None:
    first = parser.parse("a ![x](y.png) b", inline=True)
    parser.parse("# Something else")
    assert parser.parse("a ![x](y.png) b", inline=True) == first


def test_inline_mode_with_long_inner_whitespace(parser: MarkdownParser) -> None:
    assert parser.parse("a" + " " * 50_000 + "b ", inline=True) == "a" + " " * 50_000 + "b "


def test_soft_break_after_inline_element_is_dropped(parser: MarkdownParser) -> None:
    # Every element counts for the newline cleanup, inline ones included.
    assert parser.parse("*a*\nb") == "<p><em>a</em>b</p>"
    assert parser.parse("a\nb") == "<p>a\nb</p>"
