import re

import pytest

from mdingest.core.exceptions import GuardPatternError
from mdingest.core.placeholders import PlaceholderGuard, PlaceholderTable, validate_pattern


MUSTACHE = r"\{\{.*?\}\}"


def test_protect_replaces_every_match_in_scan_order() -> None:
    guard = PlaceholderGuard([MUSTACHE])
    text, table = guard.protect("Hello {{ name }}, meet {{ other }}.")

    assert "{{" not in text
    assert [original for _, original in table] == ["{{ name }}", "{{ other }}"]
    tokens = [token for token, _ in table]
    assert len(set(tokens)) == 2
    assert all(token in text for token in tokens)


def test_tokens_are_inert_to_markdown() -> None:
    guard = PlaceholderGuard([MUSTACHE])
    _, table = guard.protect("{{ a }} {{ b }}")

    for token, _ in table:
        assert token.isalnum()
        assert token.isascii()


def test_restore_round_trips_identical_substrings() -> None:
    source = "A {{x}} B {{x}} C"
    guard = PlaceholderGuard([MUSTACHE])
    text, table = guard.protect(source)

    assert text.count("{{x}}") == 0
    assert table.restore(text) == source


def test_restore_undoes_later_patterns_first() -> None:
    source = "Value {{x}} and N7E"
    guard = PlaceholderGuard([MUSTACHE, r"N\d+E"])
    text, table = guard.protect(source)

    # The second pattern also matched inside the first placeholder token.
    assert len(table) == 3
    assert table.restore(text) == source


def test_no_placeholder_when_pattern_never_matches() -> None:
    guard = PlaceholderGuard([MUSTACHE])
    text, table = guard.protect("plain text")

    assert text == "plain text"
    assert len(table) == 0


def test_tokens_avoid_text_that_looks_like_a_placeholder() -> None:
    source = "IGNORE0N0E {{ keep }}"
    guard = PlaceholderGuard([MUSTACHE])
    text, table = guard.protect(source)

    assert table.restore(text) == source


def test_compiled_patterns_keep_their_flags() -> None:
    guard = PlaceholderGuard([re.compile(r"<secret>.*?</secret>", re.IGNORECASE | re.DOTALL)])
    text, table = guard.protect("a <SECRET>\n*x*\n</SECRET> b")

    assert "SECRET" not in text
    assert len(table) == 1


@pytest.mark.parametrize("pattern", ["a*", "", "x?", r"(?:ab)?"])
def test_zero_width_patterns_are_rejected(pattern: str) -> None:
    with pytest.raises(GuardPatternError) as excinfo:
        PlaceholderGuard([pattern])
    assert excinfo.value.pattern == pattern


def test_empty_match_at_substitution_time_is_rejected() -> None:
    guard = PlaceholderGuard([r"(?<=a)"])
    with pytest.raises(GuardPatternError, match="empty match"):
        guard.protect("abc")


def test_validate_pattern_returns_compiled_pattern() -> None:
    compiled = validate_pattern(MUSTACHE)
    assert isinstance(compiled, re.Pattern)
    assert compiled.pattern == MUSTACHE


def test_table_restore_without_entries_is_identity() -> None:
    assert PlaceholderTable().restore("<p>x</p>") == "<p>x</p>"
