"""Pure cursor motions.

Nothing in this module mutates a buffer or an editor: every function takes
the buffer and a starting position and returns the position the motion
lands on. Counted word motions step one unit at a time so that line
boundaries are crossed exactly as a single step would cross them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from keyforge_vim.buffer import Buffer, Position


class MotionKind(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    LINE_START = "line_start"
    LINE_END = "line_end"
    FIRST_NON_BLANK = "first_non_blank"
    WORD_FORWARD = "word_forward"
    WORD_BACKWARD = "word_backward"
    WORD_END = "word_end"
    BIG_WORD_FORWARD = "big_word_forward"
    BIG_WORD_BACKWARD = "big_word_backward"
    BIG_WORD_END = "big_word_end"
    FILE_START = "file_start"
    FILE_END = "file_end"
    MATCH_BRACKET = "match_bracket"


# The raw landing spot of these motions already is the exclusive end of an
# operator range; every other motion gets ``end.col + 1``.
EXCLUSIVE_MOTIONS = frozenset(
    {
        MotionKind.WORD_FORWARD,
        MotionKind.WORD_END,
        MotionKind.BIG_WORD_FORWARD,
        MotionKind.BIG_WORD_END,
    }
)
LINEWISE_MOTIONS = frozenset({MotionKind.FILE_START, MotionKind.FILE_END})

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {close: open_ for open_, close in BRACKET_PAIRS.items()}


@dataclass(frozen=True, slots=True)
class FindState:
    """Last ``f``/``F``/``t``/``T`` request, replayed by ``;`` and ``,``."""

    char: str
    forward: bool = True
    till: bool = False

    def reversed(self) -> "FindState":
        return FindState(self.char, not self.forward, self.till)


def is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def is_punct(char: str) -> bool:
    return not is_word_char(char) and not char.isspace()


def execute_motion(
    buffer: Buffer, cursor: Position, motion: MotionKind, count: int = 0
) -> Position:
    """Return where ``motion`` moves ``cursor``.

    ``count <= 0`` means no count was typed. It behaves as 1 for every motion
    except ``FILE_START``/``FILE_END``, where an explicit count picks the line.
    """

    explicit = count > 0
    count = count if explicit else 1
    line, col = cursor.line, cursor.col

    if motion is MotionKind.LEFT:
        return Position(line, max(col - count, 0))
    if motion is MotionKind.RIGHT:
        return Position(line, min(col + count, buffer.last_col(line)))
    if motion in (MotionKind.UP, MotionKind.DOWN):
        step = -count if motion is MotionKind.UP else count
        target = max(0, min(line + step, buffer.line_count - 1))
        return Position(target, min(col, buffer.last_col(target)))
    if motion is MotionKind.LINE_START:
        return Position(line, 0)
    if motion is MotionKind.LINE_END:
        return Position(line, buffer.last_col(line))
    if motion is MotionKind.FIRST_NON_BLANK:
        return Position(line, buffer.first_non_blank(line))
    if motion in (MotionKind.FILE_START, MotionKind.FILE_END):
        if explicit:
            target = min(count - 1, buffer.line_count - 1)
        elif motion is MotionKind.FILE_START:
            target = 0
        else:
            target = buffer.line_count - 1
        return Position(target, buffer.first_non_blank(target))
    if motion is MotionKind.MATCH_BRACKET:
        return match_bracket(buffer, cursor) or cursor

    step_fn = _WORD_STEPS[motion]
    pos = cursor
    for _ in range(count):
        pos = step_fn(buffer, pos)
    return pos


def _next_word(buffer: Buffer, pos: Position) -> Position:
    line, col = pos.line, pos.col
    text = buffer.get_line(line)

    if col >= len(text):
        if line < buffer.line_count - 1:
            line += 1
            text = buffer.get_line(line)
            col = 0
            while col < len(text) and text[col].isspace():
                col += 1
            return Position(line, col)
        return Position(line, col)

    if is_word_char(text[col]):
        while col < len(text) and is_word_char(text[col]):
            col += 1
    elif not text[col].isspace():
        while col < len(text) and is_punct(text[col]):
            col += 1

    while True:
        text = buffer.get_line(line)
        while col < len(text) and text[col].isspace():
            col += 1
        if col < len(text) or line >= buffer.line_count - 1:
            break
        line += 1
        col = 0
    return Position(line, col)


def _prev_word(buffer: Buffer, pos: Position) -> Position:
    line, col = pos.line, pos.col
    text = buffer.get_line(line)

    if col == 0:
        if line == 0:
            return pos
        line -= 1
        text = buffer.get_line(line)
        col = len(text)

    while 0 < col <= len(text) and text[col - 1].isspace():
        col -= 1

    if col == 0 and line > 0:
        line -= 1
        text = buffer.get_line(line)
        col = len(text)
        while col > 0 and text[col - 1].isspace():
            col -= 1

    if col == 0:
        return Position(line, col)

    if col <= len(text):
        if is_word_char(text[col - 1]):
            while col > 0 and is_word_char(text[col - 1]):
                col -= 1
        elif not text[col - 1].isspace():
            while col > 0 and is_punct(text[col - 1]):
                col -= 1
    return Position(line, col)


def _skip_to_next_non_blank(buffer: Buffer, pos: Position) -> Optional[Position]:
    """Advance one column, then past whitespace across lines.

    Returns ``None`` when the end of the buffer is reached first.
    """

    line, col = pos.line, pos.col + 1
    while True:
        text = buffer.get_line(line)
        while col < len(text) and text[col].isspace():
            col += 1
        if col < len(text):
            return Position(line, col)
        if line >= buffer.line_count - 1:
            return None
        line += 1
        col = 0


def _word_end(buffer: Buffer, pos: Position) -> Position:
    start = _skip_to_next_non_blank(buffer, pos)
    if start is None:
        last = buffer.line_count - 1
        return Position(last, buffer.last_col(last))

    text = buffer.get_line(start.line)
    col = start.col
    same_class = is_word_char if is_word_char(text[col]) else is_punct
    while col < len(text) - 1 and same_class(text[col + 1]):
        col += 1
    return Position(start.line, col)


def _next_big_word(buffer: Buffer, pos: Position) -> Position:
    line, col = pos.line, pos.col
    while True:
        text = buffer.get_line(line)
        while col < len(text) and not text[col].isspace():
            col += 1
        while col < len(text) and text[col].isspace():
            col += 1
        if col < len(text) or line >= buffer.line_count - 1:
            break
        line += 1
        col = 0
    return Position(line, col)


def _prev_big_word(buffer: Buffer, pos: Position) -> Position:
    line, col = pos.line, pos.col
    if col == 0:
        if line == 0:
            return pos
        line -= 1
        col = buffer.rune_count(line)

    text = buffer.get_line(line)
    col = min(col, len(text))
    while col > 0 and text[col - 1].isspace():
        col -= 1
    while col > 0 and not text[col - 1].isspace():
        col -= 1
    return Position(line, col)


def _big_word_end(buffer: Buffer, pos: Position) -> Position:
    start = _skip_to_next_non_blank(buffer, pos)
    if start is None:
        last = buffer.line_count - 1
        return Position(last, buffer.last_col(last))

    text = buffer.get_line(start.line)
    col = start.col
    while col < len(text) - 1 and not text[col + 1].isspace():
        col += 1
    return Position(start.line, col)


_WORD_STEPS: dict[MotionKind, Callable[[Buffer, Position], Position]] = {
    MotionKind.WORD_FORWARD: _next_word,
    MotionKind.WORD_BACKWARD: _prev_word,
    MotionKind.WORD_END: _word_end,
    MotionKind.BIG_WORD_FORWARD: _next_big_word,
    MotionKind.BIG_WORD_BACKWARD: _prev_big_word,
    MotionKind.BIG_WORD_END: _big_word_end,
}


def match_bracket(buffer: Buffer, pos: Position) -> Optional[Position]:
    """Position of the bracket balancing the one at (or after) ``pos``."""

    text = buffer.get_line(pos.line)
    if pos.col >= len(text):
        return None

    char = text[pos.col]
    if char in BRACKET_PAIRS:
        return _scan_forward(buffer, pos, char, BRACKET_PAIRS[char])
    if char in _CLOSERS:
        return _scan_backward(buffer, pos, char, _CLOSERS[char])

    for col in range(pos.col, len(text)):
        if text[col] in BRACKET_PAIRS:
            return match_bracket(buffer, Position(pos.line, col))
    return None


def _scan_forward(
    buffer: Buffer, pos: Position, opener: str, closer: str
) -> Optional[Position]:
    depth = 1
    for line in range(pos.line, buffer.line_count):
        text = buffer.get_line(line)
        start = pos.col + 1 if line == pos.line else 0
        for col in range(start, len(text)):
            if text[col] == opener:
                depth += 1
            elif text[col] == closer:
                depth -= 1
                if depth == 0:
                    return Position(line, col)
    return None


def _scan_backward(
    buffer: Buffer, pos: Position, closer: str, opener: str
) -> Optional[Position]:
    depth = 1
    for line in range(pos.line, -1, -1):
        text = buffer.get_line(line)
        start = pos.col - 1 if line == pos.line else len(text) - 1
        for col in range(start, -1, -1):
            if text[col] == closer:
                depth += 1
            elif text[col] == opener:
                depth -= 1
                if depth == 0:
                    return Position(line, col)
    return None


def find_char(
    buffer: Buffer, cursor: Position, find: FindState, count: int = 1
) -> Optional[Position]:
    """Find the ``count``-th ``find.char`` on the cursor's line.

    ``till`` lands one column short of the match. Returns ``None`` when there
    are fewer than ``count`` matches in that direction.
    """

    count = max(count, 1)
    text = buffer.get_line(cursor.line)
    if find.forward:
        columns = range(cursor.col + 1, len(text))
    else:
        columns = range(cursor.col - 1, -1, -1)

    found = 0
    for col in columns:
        if text[col] != find.char:
            continue
        found += 1
        if found == count:
            if find.till:
                col = col - 1 if find.forward else col + 1
            return Position(cursor.line, col)
    return None


__all__ = [
    "BRACKET_PAIRS",
    "EXCLUSIVE_MOTIONS",
    "FindState",
    "LINEWISE_MOTIONS",
    "MotionKind",
    "execute_motion",
    "find_char",
    "is_punct",
    "is_word_char",
    "match_bracket",
]
