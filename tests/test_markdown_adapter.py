import pytest

from mdingest.adapters.markdown import (
    PATCHED_RULES,
    build_markdown_engine,
    render_markdown,
    without_trailing_newline,
)
from mdingest.core.config import MarkdownOptions


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        ("\n", "\n"),
        ("<br>\n", "<br>"),
        ("</p>\n", "</p>"),
        ("<pre><code>x\n</code></pre>\n", "<pre><code>x\n</code></pre>"),
        ("text\n\n", "text\n"),
        ("<em>", "<em>"),
        ("", ""),
    ],
)
def test_without_trailing_newline(output: str, expected: str) -> None:
    wrapped = without_trailing_newline(lambda *_args: output)
    assert wrapped() == expected


def test_engine_rules_are_wrapped() -> None:
    engine = build_markdown_engine()
    for name in PATCHED_RULES:
        assert hasattr(engine.renderer.rules[name], "__wrapped__")
    assert hasattr(engine.renderer.renderToken, "__wrapped__")


def test_each_call_builds_a_new_engine() -> None:
    assert build_markdown_engine() is not build_markdown_engine()


def test_block_tokens_have_no_trailing_newline() -> None:
    engine = build_markdown_engine()
    assert render_markdown("# Title\n\nBody", engine) == "<h1>Title</h1><p>Body</p>"


def test_lists_render_without_separator_newlines() -> None:
    engine = build_markdown_engine()
    assert render_markdown("- a\n- b", engine) == "<ul><li>a</li><li>b</li></ul>"


def test_soft_break_is_kept() -> None:
    engine = build_markdown_engine()
    assert render_markdown("first\nsecond", engine) == "<p>first\nsecond</p>"


def test_soft_break_as_hard_break_loses_newline() -> None:
    engine = build_markdown_engine(MarkdownOptions(breaks=True))
    assert render_markdown("first\nsecond", engine) == "<p>first<br>second</p>"


def test_hard_break_loses_newline() -> None:
    engine = build_markdown_engine()
    assert render_markdown("first  \nsecond", engine) == "<p>first<br>second</p>"


def test_fence_keeps_code_body() -> None:
    engine = build_markdown_engine()
    html = render_markdown("```\nprint(1)\n```", engine)
    assert html == "<pre><code>print(1)\n</code></pre>"


def test_indented_code_block_loses_trailing_newline() -> None:
    engine = build_markdown_engine()
    html = render_markdown("    indented", engine)
    assert html == "<pre><code>indented\n</code></pre>"


def test_html_option_controls_raw_markup() -> None:
    allowed = render_markdown("a <b>x</b>", build_markdown_engine(MarkdownOptions(html=True)))
    escaped = render_markdown("a <b>x</b>", build_markdown_engine(MarkdownOptions(html=False)))

    assert allowed == "<p>a <b>x</b></p>"
    assert escaped == "<p>a &lt;b&gt;x&lt;/b&gt;</p>"


def test_linkify_option_detects_bare_urls() -> None:
    engine = build_markdown_engine(MarkdownOptions(linkify=True))
    html = render_markdown("see https://example.com now", engine)
    assert '<a href="https://example.com">https://example.com</a>' in html


def test_tables_are_enabled() -> None:
    engine = build_markdown_engine()
    html = render_markdown("| a |\n| - |\n| b |", engine)
    assert html.startswith("<table>")
