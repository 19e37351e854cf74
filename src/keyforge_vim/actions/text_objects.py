"""Text objects: semantic spans around the cursor (``iw``, ``a"``, ``i(``...).

Every resolver returns ``None`` when no object surrounds the cursor so the
caller can abandon the pending operator without touching the buffer.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from keyforge_vim.buffer import Buffer, Position, Range

from .motions import is_punct, is_word_char


class TextObjectKind(str, Enum):
    WORD = "word"
    BIG_WORD = "big_word"
    DOUBLE_QUOTE = "double_quote"
    SINGLE_QUOTE = "single_quote"
    BACKTICK = "backtick"
    PAREN = "paren"
    BRACKET = "bracket"
    BRACE = "brace"
    ANGLE = "angle"


TEXT_OBJECT_KEYS: dict[str, TextObjectKind] = {
    "w": TextObjectKind.WORD,
    "W": TextObjectKind.BIG_WORD,
    '"': TextObjectKind.DOUBLE_QUOTE,
    "'": TextObjectKind.SINGLE_QUOTE,
    "`": TextObjectKind.BACKTICK,
    "(": TextObjectKind.PAREN,
    ")": TextObjectKind.PAREN,
    "b": TextObjectKind.PAREN,
    "[": TextObjectKind.BRACKET,
    "]": TextObjectKind.BRACKET,
    "{": TextObjectKind.BRACE,
    "}": TextObjectKind.BRACE,
    "B": TextObjectKind.BRACE,
    "<": TextObjectKind.ANGLE,
    ">": TextObjectKind.ANGLE,
}

_QUOTES = {
    TextObjectKind.DOUBLE_QUOTE: '"',
    TextObjectKind.SINGLE_QUOTE: "'",
    TextObjectKind.BACKTICK: "`",
}

_PAIRS = {
    TextObjectKind.PAREN: ("(", ")"),
    TextObjectKind.BRACKET: ("[", "]"),
    TextObjectKind.BRACE: ("{", "}"),
    TextObjectKind.ANGLE: ("<", ">"),
}


def parse_text_object(key: str) -> Optional[TextObjectKind]:
    return TEXT_OBJECT_KEYS.get(key)


def get_text_object_range(
    buffer: Buffer, cursor: Position, kind: TextObjectKind, inner: bool
) -> Optional[Range]:
    if kind is TextObjectKind.WORD:
        return word_object(buffer, cursor, inner, big=False)
    if kind is TextObjectKind.BIG_WORD:
        return word_object(buffer, cursor, inner, big=True)
    if kind in _QUOTES:
        return quote_object(buffer, cursor, _QUOTES[kind], inner)
    opener, closer = _PAIRS[kind]
    return pair_object(buffer, cursor, opener, closer, inner)


def _extend(text: str, start: int, end: int, pred: Callable[[str], bool]) -> tuple[int, int]:
    while start > 0 and pred(text[start - 1]):
        start -= 1
    while end < len(text) - 1 and pred(text[end + 1]):
        end += 1
    return start, end


def _is_non_blank(char: str) -> bool:
    return not char.isspace()


def word_object(
    buffer: Buffer, cursor: Position, inner: bool, *, big: bool
) -> Optional[Range]:
    text = buffer.get_line(cursor.line)
    if not text:
        return None
    col = min(cursor.col, len(text) - 1)
    char = text[col]

    in_word = _is_non_blank if big else is_word_char

    pred: Callable[[str], bool]
    if in_word(char):
        pred = in_word
    elif not char.isspace():
        # only reachable for small words: punctuation is its own class
        pred = is_punct
    else:
        pred = str.isspace
    start, end = _extend(text, col, col, pred)

    if not inner:
        trailing = end
        while trailing < len(text) - 1 and text[trailing + 1].isspace():
            trailing += 1
        if trailing > end:
            end = trailing
        else:
            while start > 0 and text[start - 1].isspace():
                start -= 1

    return Range(Position(cursor.line, start), Position(cursor.line, end + 1))


def quote_object(
    buffer: Buffer, cursor: Position, quote: str, inner: bool
) -> Optional[Range]:
    """Quoted string on the cursor's line (quotes never span lines)."""

    text = buffer.get_line(cursor.line)
    if not text:
        return None
    col = cursor.col
    start = end = -1

    if col < len(text) and text[col] == quote:
        before = text.rfind(quote, 0, col)
        if before >= 0:
            start, end = before, col
        else:
            start, end = col, text.find(quote, col + 1)
    else:
        start = text.rfind(quote, 0, min(col, len(text) - 1) + 1)
        if start >= 0:
            end = text.find(quote, col + 1)
        if start < 0 or end < 0:
            start = text.find(quote, col)
            end = text.find(quote, start + 1) if start >= 0 else -1

    if start < 0 or end < 0 or start >= end:
        return None

    line = cursor.line
    if inner:
        return Range(Position(line, start + 1), Position(line, end))
    return Range(Position(line, start), Position(line, end + 1))


def pair_object(
    buffer: Buffer, cursor: Position, opener: str, closer: str, inner: bool
) -> Optional[Range]:
    """Innermost bracket pair around the cursor, possibly spanning lines."""

    depth = 0
    current = buffer.get_line(cursor.line)
    on_closer = cursor.col < len(current) and current[cursor.col] == closer
    if on_closer:
        depth = 1

    open_pos: Optional[Position] = None
    for line in range(cursor.line, -1, -1):
        text = buffer.get_line(line)
        if line == cursor.line:
            start_col = cursor.col - 1 if on_closer else cursor.col
        else:
            start_col = len(text) - 1
        for col in range(min(start_col, len(text) - 1), -1, -1):
            if text[col] == closer:
                depth += 1
            elif text[col] == opener:
                if depth > 0:
                    depth -= 1
                if depth == 0:
                    open_pos = Position(line, col)
                    break
        if open_pos is not None:
            break

    if open_pos is None:
        return None

    close_pos: Optional[Position] = None
    depth = 1
    for line in range(open_pos.line, buffer.line_count):
        text = buffer.get_line(line)
        start_col = open_pos.col + 1 if line == open_pos.line else 0
        for col in range(start_col, len(text)):
            if text[col] == opener:
                depth += 1
            elif text[col] == closer:
                depth -= 1
                if depth == 0:
                    close_pos = Position(line, col)
                    break
        if close_pos is not None:
            break

    if close_pos is None:
        return None

    if not inner:
        return Range(open_pos, close_pos.with_col(close_pos.col + 1))

    inner_start = open_pos.with_col(open_pos.col + 1)
    opener_ends_line = open_pos.col == buffer.rune_count(open_pos.line) - 1
    if opener_ends_line and open_pos.line < close_pos.line:
        inner_start = Position(open_pos.line + 1, 0)
    return Range(inner_start, close_pos)


__all__ = [
    "TEXT_OBJECT_KEYS",
    "TextObjectKind",
    "get_text_object_range",
    "pair_object",
    "parse_text_object",
    "quote_object",
    "word_object",
]
