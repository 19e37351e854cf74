from __future__ import annotations

import pytest

from keyforge_vim.actions.motions import (
    FindState,
    MotionKind,
    execute_motion,
    find_char,
    is_punct,
    match_bracket,
)
from keyforge_vim.buffer import Buffer, Position


def move(
    text: str, motion: MotionKind, start: tuple[int, int] = (0, 0), count: int = 0
) -> tuple[int, int]:
    buffer = Buffer.from_text(text)
    return execute_motion(buffer, Position(*start), motion, count).as_tuple()


def test_left_right_clamp_to_line() -> None:
    assert move("hello", MotionKind.RIGHT) == (0, 1)
    assert move("hello", MotionKind.RIGHT, (0, 4)) == (0, 4)
    assert move("hello", MotionKind.LEFT, (0, 0)) == (0, 0)
    assert move("hello", MotionKind.RIGHT, count=10) == (0, 4)


def test_up_down_clamp_column() -> None:
    text = "long line\nab\nlonger line"

    assert move(text, MotionKind.DOWN, (0, 7)) == (1, 1)
    assert move(text, MotionKind.DOWN, (0, 7), count=5) == (2, 7)
    assert move(text, MotionKind.UP, (2, 3), count=9) == (0, 3)


def test_line_positions() -> None:
    text = "   indented line"

    assert move(text, MotionKind.LINE_START, (0, 8)) == (0, 0)
    assert move(text, MotionKind.LINE_END) == (0, 15)
    assert move(text, MotionKind.FIRST_NON_BLANK, (0, 10)) == (0, 3)


def test_word_forward() -> None:
    assert move("hello world", MotionKind.WORD_FORWARD) == (0, 6)
    assert move("foo.bar baz", MotionKind.WORD_FORWARD) == (0, 3)
    assert move("foo.bar baz", MotionKind.WORD_FORWARD, (0, 3)) == (0, 4)


def test_word_forward_counted_loop() -> None:
    assert move("hello world test", MotionKind.WORD_FORWARD, count=2) == (0, 12)


def test_word_forward_crosses_lines() -> None:
    text = "end\n  next"

    assert move(text, MotionKind.WORD_FORWARD) == (1, 2)


def test_word_forward_on_last_word_stops_at_line_end() -> None:
    assert move("hello world", MotionKind.WORD_FORWARD, (0, 6)) == (0, 11)


def test_word_backward() -> None:
    assert move("hello world", MotionKind.WORD_BACKWARD, (0, 8)) == (0, 6)
    assert move("hello world", MotionKind.WORD_BACKWARD, (0, 6)) == (0, 0)
    assert move("first\nsecond", MotionKind.WORD_BACKWARD, (1, 0)) == (0, 0)


def test_word_end() -> None:
    assert move("hello world", MotionKind.WORD_END) == (0, 4)
    assert move("hello world", MotionKind.WORD_END, (0, 4)) == (0, 10)
    assert move("a+b", MotionKind.WORD_END) == (0, 1)


def test_word_end_at_buffer_end() -> None:
    assert move("one\ntwo", MotionKind.WORD_END, (1, 2)) == (1, 2)


def test_big_word_motions() -> None:
    text = "foo.bar baz-qux end"

    assert move(text, MotionKind.BIG_WORD_FORWARD) == (0, 8)
    assert move(text, MotionKind.BIG_WORD_END) == (0, 6)
    assert move(text, MotionKind.BIG_WORD_BACKWARD, (0, 16)) == (0, 8)


def test_file_start_and_end() -> None:
    text = "  one\ntwo\n   three"

    assert move(text, MotionKind.FILE_END) == (2, 3)
    assert move(text, MotionKind.FILE_START, (2, 4)) == (0, 2)
    assert move(text, MotionKind.FILE_START, (2, 4), count=2) == (1, 0)
    assert move(text, MotionKind.FILE_END, count=99) == (2, 3)


@pytest.mark.parametrize(
    ("start", "expected"),
    [((0, 3), (0, 12)), ((0, 12), (0, 3)), ((0, 4), (0, 7)), ((0, 0), (0, 12))],
)
def test_match_bracket(start: tuple[int, int], expected: tuple[int, int]) -> None:
    buffer = Buffer.from_text("if (a[1] + b)")

    target = match_bracket(buffer, Position(*start))

    assert target is not None
    assert target.as_tuple() == expected


def test_match_bracket_across_lines() -> None:
    buffer = Buffer.from_text("{\n  x\n}")

    assert match_bracket(buffer, Position(0, 0)) == Position(2, 0)
    assert match_bracket(buffer, Position(2, 0)) == Position(0, 0)


def test_match_bracket_not_found() -> None:
    assert match_bracket(Buffer.from_text("no brackets"), Position(0, 0)) is None
    assert match_bracket(Buffer.from_text("(open"), Position(0, 0)) is None


def test_find_char_variants() -> None:
    buffer = Buffer.from_text("hello world")
    origin = Position(0, 0)

    assert find_char(buffer, origin, FindState("o")) == Position(0, 4)
    assert find_char(buffer, origin, FindState("o"), count=2) == Position(0, 7)
    assert find_char(buffer, origin, FindState("o", till=True)) == Position(0, 3)
    assert find_char(buffer, Position(0, 10), FindState("o", forward=False)) == Position(0, 7)
    assert find_char(
        buffer, Position(0, 10), FindState("o", forward=False, till=True)
    ) == Position(0, 8)


def test_find_char_missing_returns_none() -> None:
    buffer = Buffer.from_text("hello world")

    assert find_char(buffer, Position(0, 0), FindState("z")) is None
    assert find_char(buffer, Position(0, 0), FindState("o"), count=3) is None


def test_find_state_reversed() -> None:
    find = FindState("x", forward=True, till=True)

    assert find.reversed() == FindState("x", forward=False, till=True)


@pytest.mark.parametrize(
    ("char", "punct"),
    [("-", True), ("(", True), ("_", False), ("a", False), ("7", False), (" ", False)],
)
def test_is_punct(char: str, punct: bool) -> None:
    assert is_punct(char) is punct
