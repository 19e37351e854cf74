from __future__ import annotations

from typing import Optional

import pytest

from keyforge_vim.actions.text_objects import (
    TextObjectKind,
    get_text_object_range,
    parse_text_object,
)
from keyforge_vim.buffer import Buffer, Position


def selected(
    text: str, cursor: tuple[int, int], kind: TextObjectKind, inner: bool
) -> Optional[str]:
    buffer = Buffer.from_text(text)
    rng = get_text_object_range(buffer, Position(*cursor), kind, inner)
    if rng is None:
        return None
    return buffer.get_range(rng.start, rng.end)


@pytest.mark.parametrize(
    ("key", "kind"),
    [
        ("w", TextObjectKind.WORD),
        ("W", TextObjectKind.BIG_WORD),
        ('"', TextObjectKind.DOUBLE_QUOTE),
        ("b", TextObjectKind.PAREN),
        (")", TextObjectKind.PAREN),
        ("B", TextObjectKind.BRACE),
        ("]", TextObjectKind.BRACKET),
        ("<", TextObjectKind.ANGLE),
    ],
)
def test_parse_text_object(key: str, kind: TextObjectKind) -> None:
    assert parse_text_object(key) is kind


def test_parse_text_object_unknown() -> None:
    assert parse_text_object("z") is None


def test_inner_and_around_word() -> None:
    text = "hello world foo"

    assert selected(text, (0, 7), TextObjectKind.WORD, inner=True) == "world"
    assert selected(text, (0, 7), TextObjectKind.WORD, inner=False) == "world "


def test_around_last_word_takes_leading_space() -> None:
    assert selected("hello world", (0, 8), TextObjectKind.WORD, inner=False) == " world"


def test_word_on_whitespace_and_punctuation() -> None:
    assert selected("a   b", (0, 2), TextObjectKind.WORD, inner=True) == "   "
    assert selected("x == y", (0, 2), TextObjectKind.WORD, inner=True) == "=="


def test_big_word_spans_punctuation() -> None:
    assert selected("call foo.bar(1) now", (0, 6), TextObjectKind.BIG_WORD, True) == "foo.bar(1)"


def test_word_punctuation_run_stops_at_word_chars() -> None:
    assert selected("foo->bar", (0, 4), TextObjectKind.WORD, inner=True) == "->"
    assert selected("foo->bar", (0, 4), TextObjectKind.BIG_WORD, inner=True) == "foo->bar"


def test_word_on_empty_line_is_not_found() -> None:
    assert selected("", (0, 0), TextObjectKind.WORD, inner=True) is None


def test_quote_object_inside() -> None:
    text = 'say "hello world" now'

    assert selected(text, (0, 8), TextObjectKind.DOUBLE_QUOTE, True) == "hello world"
    assert selected(text, (0, 8), TextObjectKind.DOUBLE_QUOTE, False) == '"hello world"'


def test_quote_object_cursor_on_quote() -> None:
    text = 'say "hello" and "bye"'

    assert selected(text, (0, 4), TextObjectKind.DOUBLE_QUOTE, True) == "hello"
    assert selected(text, (0, 10), TextObjectKind.DOUBLE_QUOTE, True) == "hello"


def test_quote_object_searches_forward() -> None:
    assert selected("x = 'abc'", (0, 0), TextObjectKind.SINGLE_QUOTE, True) == "abc"


def test_quote_object_unbalanced() -> None:
    assert selected('say "oops', (0, 0), TextObjectKind.DOUBLE_QUOTE, True) is None


def test_pair_object_nested() -> None:
    text = "f(a, (b, c), d)"

    assert selected(text, (0, 7), TextObjectKind.PAREN, True) == "b, c"
    assert selected(text, (0, 3), TextObjectKind.PAREN, True) == "a, (b, c), d"
    assert selected(text, (0, 7), TextObjectKind.PAREN, False) == "(b, c)"


def test_pair_object_cursor_on_delimiters() -> None:
    text = "[1, 2]"

    assert selected(text, (0, 0), TextObjectKind.BRACKET, True) == "1, 2"
    assert selected(text, (0, 5), TextObjectKind.BRACKET, True) == "1, 2"


def test_pair_object_multi_line_inner_skips_opener_line() -> None:
    text = "fn {\n  body\n}"

    assert selected(text, (1, 2), TextObjectKind.BRACE, True) == "  body\n"
    assert selected(text, (1, 2), TextObjectKind.BRACE, False) == "{\n  body\n}"


def test_pair_object_not_found() -> None:
    assert selected("no parens here", (0, 3), TextObjectKind.PAREN, True) is None
    assert selected("(unclosed", (0, 3), TextObjectKind.PAREN, True) is None
