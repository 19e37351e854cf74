"""Insert-mode editing actions.

Every mutation goes through ``editor.insert_edit`` so a whole insert session
undoes as one step. Handlers return ``None``; the insert mode turns that into
a consumed result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from keyforge_vim.buffer import Position
from keyforge_vim.keymaps.resolver import ResolutionMatch

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor


def insert_text(editor: "Editor", text: str) -> None:
    cursor = editor.cursor
    with editor.insert_edit("insert") as buffer:
        buffer.insert_at(cursor.line, cursor.col, text)
    editor.set_cursor(cursor.with_col(cursor.col + len(text)))


def tab(editor: "Editor", match: ResolutionMatch) -> None:
    del match
    insert_text(editor, editor.config.tab_text)


def newline(editor: "Editor", match: ResolutionMatch) -> None:
    del match
    cursor = editor.cursor
    with editor.insert_edit("newline") as buffer:
        buffer.split_line(cursor.line, cursor.col)
    editor.set_cursor(Position(cursor.line + 1, 0))


def backspace(editor: "Editor", match: ResolutionMatch) -> None:
    del match
    cursor = editor.cursor
    if cursor.col > 0:
        with editor.insert_edit("backspace") as buffer:
            buffer.delete_at(cursor.line, cursor.col - 1, 1)
        editor.set_cursor(cursor.with_col(cursor.col - 1))
    elif cursor.line > 0:
        previous = cursor.line - 1
        with editor.insert_edit("backspace") as buffer:
            join_col = buffer.rune_count(previous)
            buffer.join_lines(previous)
        editor.set_cursor(Position(previous, join_col))


def delete(editor: "Editor", match: ResolutionMatch) -> None:
    del match
    cursor = editor.cursor
    buffer = editor.buffer
    if cursor.col < buffer.rune_count(cursor.line):
        with editor.insert_edit("delete"):
            buffer.delete_at(cursor.line, cursor.col, 1)
    elif cursor.line < buffer.line_count - 1:
        with editor.insert_edit("delete"):
            buffer.join_lines(cursor.line)


def move(editor: "Editor", match: ResolutionMatch) -> None:
    """Arrow keys, bounded by the Insert-mode column limit."""

    direction = match.action.metadata["direction"]
    cursor = editor.cursor
    if direction == "left":
        target = cursor.with_col(cursor.col - 1)
    elif direction == "right":
        target = cursor.with_col(cursor.col + 1)
    elif direction == "up":
        target = cursor.with_line(max(cursor.line - 1, 0))
    else:
        target = cursor.with_line(cursor.line + 1)
    editor.set_cursor(target)


def exit_insert(editor: "Editor", match: ResolutionMatch) -> None:
    """Back to Normal with the cursor one column left, then clamped."""

    del match
    cursor = editor.cursor
    editor.cursor = cursor.with_col(max(cursor.col - 1, 0))
    editor.enter_normal()


__all__ = [
    "backspace",
    "delete",
    "exit_insert",
    "insert_text",
    "move",
    "newline",
    "tab",
]
