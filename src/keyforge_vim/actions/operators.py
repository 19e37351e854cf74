"""Operators (delete/change/yank) and the commands built on top of them.

These functions are the only Normal/Visual-mode code that mutates the
buffer. Each mutation runs inside ``editor.transaction`` so the pre-change
state lands on the undo stack first.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from keyforge_vim.buffer import LINE_SEPARATOR, Position, Range

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor


class Operator(str, Enum):
    DELETE = "d"
    CHANGE = "c"
    YANK = "y"

    @property
    def label(self) -> str:
        return self.value


def execute_operator(editor: "Editor", op: Operator, rng: Range) -> None:
    rng = rng.normalized()
    if op is Operator.DELETE:
        _delete(editor, rng)
    elif op is Operator.CHANGE:
        if rng.linewise:
            _change_lines(editor, rng.start.line, rng.end.line)
            return
        _delete(editor, rng, label="change")
        editor.enter_insert(snapshotted=True)
        # Insert bounds allow the column just past a deleted line tail
        editor.set_cursor(rng.start)
    else:
        _yank(editor, rng)


def _delete(editor: "Editor", rng: Range, *, label: str = "delete") -> None:
    buffer = editor.buffer
    with editor.transaction(label):
        if rng.linewise:
            first = rng.start.line
            last = min(rng.end.line, buffer.line_count - 1)
            removed = [buffer.get_line(i) for i in range(first, last + 1)]
            buffer.replace_lines(first, last + 1, [])
            editor.write_register(LINE_SEPARATOR.join(removed), linewise=True)
            target = min(first, buffer.line_count - 1)
            editor.cursor = Position(target, buffer.first_non_blank(target))
        else:
            deleted = buffer.delete_range(rng.start, rng.end)
            editor.write_register(deleted)
            editor.set_cursor(rng.start)


def _yank(editor: "Editor", rng: Range) -> None:
    buffer = editor.buffer
    if rng.linewise:
        last = min(rng.end.line, buffer.line_count - 1)
        lines = [buffer.get_line(i) for i in range(rng.start.line, last + 1)]
        editor.write_register(LINE_SEPARATOR.join(lines), linewise=True)
    else:
        editor.write_register(buffer.get_range(rng.start, rng.end))
    editor.set_status("yanked")


def _line_span(editor: "Editor", count: int) -> Range:
    line = editor.cursor.line
    last = min(line + max(count, 1) - 1, editor.buffer.line_count - 1)
    return Range(Position(line, 0), Position(last, 0), linewise=True)


def delete_char(editor: "Editor", count: int = 1) -> None:
    """``x``: delete ``count`` characters under and after the cursor."""

    cursor = editor.cursor
    if cursor.col >= editor.buffer.rune_count(cursor.line):
        return
    with editor.transaction("delete_char"):
        deleted = editor.buffer.delete_at(cursor.line, cursor.col, max(count, 1))
        editor.write_register(deleted)
        editor.set_cursor(cursor)


def delete_char_before(editor: "Editor", count: int = 1) -> None:
    """``X``: delete up to ``count`` characters left of the cursor."""

    cursor = editor.cursor
    if cursor.col == 0:
        return
    start = max(cursor.col - max(count, 1), 0)
    with editor.transaction("delete_char_before"):
        deleted = editor.buffer.delete_at(cursor.line, start, cursor.col - start)
        editor.write_register(deleted)
        editor.set_cursor(cursor.with_col(start))


def delete_line(editor: "Editor", count: int = 1) -> None:
    """``dd``."""

    _delete(editor, _line_span(editor, count), label="delete_line")


def yank_line(editor: "Editor", count: int = 1) -> None:
    """``yy``."""

    _yank(editor, _line_span(editor, count))


def change_line(editor: "Editor", count: int = 1) -> None:
    """``cc``/``S``: empty ``count`` lines into one blank line and insert."""

    span = _line_span(editor, count)
    _change_lines(editor, span.start.line, span.end.line)


def _change_lines(editor: "Editor", first: int, last: int) -> None:
    buffer = editor.buffer
    last = min(last, buffer.line_count - 1)
    with editor.transaction("change_line"):
        removed = [buffer.get_line(i) for i in range(first, last + 1)]
        buffer.replace_lines(first, last + 1, [""])
        editor.write_register(LINE_SEPARATOR.join(removed), linewise=True)
        editor.cursor = Position(first, 0)
    editor.enter_insert(snapshotted=True)


def paste(editor: "Editor", *, before: bool, count: int = 1) -> None:
    """``p``/``P`` from the selected (or unnamed) register.

    Linewise values, and any text holding a line separator, become whole new
    lines below (``p``) or above (``P``) the cursor line.
    """

    value = editor.read_register()
    if value.is_empty:
        return
    count = max(count, 1)
    buffer = editor.buffer
    cursor = editor.cursor

    with editor.transaction("paste"):
        if value.linewise or LINE_SEPARATOR in value.text:
            lines = value.text.split(LINE_SEPARATOR) * count
            target = cursor.line if before else cursor.line + 1
            buffer.replace_lines(target, target, lines)
            editor.cursor = Position(target, buffer.first_non_blank(target))
        else:
            text = value.text * count
            if before:
                buffer.insert_at(cursor.line, cursor.col, text)
            else:
                buffer.insert_at(cursor.line, cursor.col + 1, text)
                editor.set_cursor(cursor.with_col(cursor.col + len(text)))


def join_lines(editor: "Editor", count: int = 2) -> None:
    """``J``: join ``count`` lines, trimming leading blanks of each joined line."""

    buffer = editor.buffer
    count = max(count, 2)
    line = editor.cursor.line
    if line >= buffer.line_count - 1:
        return

    with editor.transaction("join_lines"):
        join_col = editor.cursor.col
        for _ in range(count - 1):
            if line >= buffer.line_count - 1:
                break
            current = buffer.get_line(line)
            trimmed = buffer.get_line(line + 1).lstrip(" \t")
            join_col = len(current)
            if trimmed:
                buffer.set_line(line, f"{current} {trimmed}" if current else trimmed)
            buffer.delete_line(line + 1)
        editor.set_cursor(Position(line, join_col))


def replace_char(editor: "Editor", char: str, count: int = 1) -> None:
    """``r{char}``: overwrite up to ``count`` characters from the cursor."""

    cursor = editor.cursor
    text = editor.buffer.get_line(cursor.line)
    if cursor.col >= len(text):
        return
    end = min(cursor.col + max(count, 1), len(text))
    with editor.transaction("replace_char"):
        replaced = text[: cursor.col] + char * (end - cursor.col) + text[end:]
        editor.buffer.set_line(cursor.line, replaced)


def open_line(editor: "Editor", *, below: bool) -> None:
    """``o``/``O``: insert a blank line and start inserting on it."""

    line = editor.cursor.line + 1 if below else editor.cursor.line
    with editor.transaction("open_line"):
        editor.buffer.insert_line(line, "")
        editor.cursor = Position(line, 0)
    editor.enter_insert(snapshotted=True)


__all__ = [
    "Operator",
    "change_line",
    "delete_char",
    "delete_char_before",
    "delete_line",
    "execute_operator",
    "join_lines",
    "open_line",
    "paste",
    "replace_char",
    "yank_line",
]
