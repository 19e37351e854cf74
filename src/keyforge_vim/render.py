"""Read-only projection of an Editor for display.

Hosts render from a ``RenderSnapshot`` and never touch the Editor directly,
so the engine stays independent of any UI toolkit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from keyforge_vim.buffer import Position
from keyforge_vim.modes.state import EditorMode, VisualState, prefix_label

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor


@dataclass(frozen=True, slots=True)
class RenderSnapshot:
    lines: tuple[str, ...]
    cursor: Position
    mode: EditorMode
    mode_label: str
    pending_label: str = ""
    count_label: str = ""
    status: str = ""
    visual_start: Optional[Position] = None
    visual_end: Optional[Position] = None

    @property
    def visual_linewise(self) -> bool:
        return self.mode is EditorMode.VISUAL_LINE

    def is_in_visual_selection(self, line: int, col: int) -> bool:
        """True when ``(line, col)`` is highlighted by the current selection."""

        if self.visual_start is None or self.visual_end is None:
            return False
        start, end = self.visual_start, self.visual_end
        if line < start.line or line > end.line:
            return False
        if self.visual_linewise:
            return True
        if line == start.line and col < start.col:
            return False
        if line == end.line and col > end.col:
            return False
        return True


def build_snapshot(editor: "Editor") -> RenderSnapshot:
    state = editor.state
    visual_start = visual_end = None
    if isinstance(state, VisualState):
        visual_start, visual_end = sorted((state.anchor, editor.cursor))
    mode = editor.mode
    return RenderSnapshot(
        lines=tuple(editor.buffer.snapshot()),
        cursor=editor.cursor,
        mode=mode,
        mode_label=mode.label,
        pending_label=prefix_label(state),
        count_label=str(editor.count) if editor.count > 0 else "",
        status=editor.status_message,
        visual_start=visual_start,
        visual_end=visual_end,
    )


__all__ = ["RenderSnapshot", "build_snapshot"]
