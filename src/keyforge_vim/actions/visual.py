"""Actions dedicated to Visual mode selection management."""

from __future__ import annotations

from typing import TYPE_CHECKING

from keyforge_vim.keymaps.resolver import ResolutionMatch
from keyforge_vim.modes.base_mode import ModeResult
from keyforge_vim.modes.state import VisualState

from .operators import Operator, execute_operator

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor


def _publish(editor: "Editor") -> None:
    state = editor.state
    if isinstance(state, VisualState):
        editor.bus.emit(
            "visual.selection",
            {"anchor": state.anchor, "cursor": editor.cursor, "linewise": state.linewise},
        )


def operate(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    """Apply ``d``/``c``/``y`` to the selection and leave Visual mode."""

    op = Operator(match.action.metadata["operator"])
    rng = editor.visual_range()
    if rng is None:
        return ModeResult(consumed=False, status="miss")
    execute_operator(editor, op, rng)
    if op is not Operator.CHANGE:
        editor.enter_normal()
    return ModeResult(consumed=True, status="operator", message=op.value)


def toggle(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    """``v``/``V``: leave Visual when the kind matches, otherwise switch kind."""

    linewise = bool(match.action.metadata.get("linewise"))
    state = editor.state
    if not isinstance(state, VisualState) or state.linewise is linewise:
        editor.enter_normal()
        return ModeResult(consumed=True, status="exit_visual")
    editor.set_visual_kind(linewise=linewise)
    _publish(editor)
    return ModeResult(consumed=True, status="visual_select")


def swap_anchor(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.swap_visual_anchor()
    _publish(editor)
    return ModeResult(consumed=True, status="visual_select")


def exit_visual(editor: "Editor", match: ResolutionMatch) -> ModeResult:
    del match
    editor.enter_normal()
    return ModeResult(consumed=True, status="exit_visual")


__all__ = ["exit_visual", "operate", "swap_anchor", "toggle"]
