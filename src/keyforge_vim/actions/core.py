"""Normal and Operator-pending action handlers.

Handlers are bound through the keymap registry and invoked as
``handler(editor, match)``. Parameterised actions read their argument from
the action metadata (``motion``, ``operator``, ``forward`` ...), so one
handler backs a whole family of keys. A handler that leaves a sequence
incomplete returns a pending ``ModeResult``; anything else lets the mode
reset the command state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from keyforge_vim.keymaps.resolver import ResolutionMatch
from keyforge_vim.modes.base_mode import ModeResult
from keyforge_vim.modes.state import (
    FindChar,
    OperatorPendingState,
    RegisterPrefix,
    ReplaceChar,
    TextObjectScope,
)

from . import operators
from .motions import (
    EXCLUSIVE_MOTIONS,
    LINEWISE_MOTIONS,
    MotionKind,
    execute_motion,
    find_char,
    match_bracket,
)

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor


def _meta(match: ResolutionMatch, key: str, default: Any = None) -> Any:
    return match.action.metadata.get(key, default)


def _pending(status: str) -> ModeResult:
    return ModeResult(consumed=True, pending=True, status=status)


def _done(message: Optional[str] = None) -> ModeResult:
    return ModeResult(consumed=True, message=message)


# Motions ----------------------------------------------------------------


def motion(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    kind = MotionKind(_meta(match, "motion"))
    if kind is MotionKind.MATCH_BRACKET:
        target = match_bracket(editor.buffer, editor.cursor)
    else:
        target = execute_motion(editor.buffer, editor.cursor, kind, editor.count)
    return editor.apply_motion(
        target,
        inclusive=kind not in EXCLUSIVE_MOTIONS,
        linewise=kind in LINEWISE_MOTIONS,
    )


def begin_find(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    editor.set_prefix(
        FindChar(forward=bool(_meta(match, "forward")), till=bool(_meta(match, "till")))
    )
    return _pending("find")


def repeat_find(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    last = editor.last_find
    if last is None:
        return ModeResult(consumed=True, status="not_found")
    find = last.reversed() if _meta(match, "reverse") else last
    target = find_char(editor.buffer, editor.cursor, find, max(editor.count, 1))
    return editor.apply_motion(target)


def begin_text_object(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    editor.set_prefix(TextObjectScope(inner=bool(_meta(match, "inner"))))
    return _pending("text_object")


# Operators --------------------------------------------------------------

_DOUBLED = {
    operators.Operator.DELETE: operators.delete_line,
    operators.Operator.CHANGE: operators.change_line,
    operators.Operator.YANK: operators.yank_line,
}


def operator(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    op = operators.Operator(_meta(match, "operator"))
    state = editor.state
    if isinstance(state, OperatorPendingState) and state.operator is op:
        _DOUBLED[op](editor, max(editor.count, 1))
        return _done(op.value * 2)
    editor.begin_operator(op)
    return _pending("operator")


# Prefix commands --------------------------------------------------------


def select_register(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.set_prefix(RegisterPrefix())
    return _pending("register")


def begin_replace(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.set_prefix(ReplaceChar())
    return _pending("replace")


# Single-key commands ----------------------------------------------------


def delete_char(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    operators.delete_char(editor, max(editor.count, 1))
    return _done("x")


def delete_char_before(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    operators.delete_char_before(editor, max(editor.count, 1))
    return _done("X")


def substitute(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    cursor = editor.cursor
    with editor.transaction("substitute"):
        operators.delete_char(editor, max(editor.count, 1))
    editor.enter_insert(snapshotted=True)
    editor.set_cursor(cursor)
    return _done("s")


def substitute_line(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    operators.change_line(editor, max(editor.count, 1))
    return _done("S")


def insert(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    """``i``/``I``/``a``/``A``: enter Insert at a position named by ``where``."""

    where = _meta(match, "where", "cursor")
    line = editor.cursor.line
    editor.enter_insert()
    if where == "first_non_blank":
        editor.set_cursor(editor.cursor.with_col(editor.buffer.first_non_blank(line)))
    elif where == "after":
        if editor.buffer.rune_count(line):
            editor.set_cursor(editor.cursor.with_col(editor.cursor.col + 1))
    elif where == "line_end":
        editor.set_cursor(editor.cursor.with_col(editor.buffer.rune_count(line)))
    return _done("insert")


def open_line(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    operators.open_line(editor, below=bool(_meta(match, "below")))
    return _done("open_line")


def paste(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    operators.paste(editor, before=bool(_meta(match, "before")), count=max(editor.count, 1))
    return _done("paste")


def join(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    operators.join_lines(editor, max(editor.count, 1) + 1)
    return _done("J")


def undo(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.undo(max(editor.count, 1))
    return _done("undo")


def redo(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.redo(max(editor.count, 1))
    return _done("redo")


def enter_visual(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    editor.enter_visual(linewise=bool(_meta(match, "linewise")))
    return _done("visual")


def escape(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.reset_command_state()
    return ModeResult(consumed=True, status="cancel")


__all__ = [
    "begin_find",
    "begin_replace",
    "begin_text_object",
    "delete_char",
    "delete_char_before",
    "enter_visual",
    "escape",
    "insert",
    "join",
    "motion",
    "open_line",
    "operator",
    "paste",
    "redo",
    "repeat_find",
    "select_register",
    "substitute",
    "substitute_line",
    "undo",
]
