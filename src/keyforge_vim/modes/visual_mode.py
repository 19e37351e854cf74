"""Visual and Visual-Line key handling."""

from __future__ import annotations

from typing import Mapping, Optional

from .normal_mode import NormalMode


class VisualMode(NormalMode):
    """Same count and prefix rules as Normal mode over the ``visual`` keymap.

    Motions extend the selection; the anchor stays fixed until ``o`` swaps it.
    """

    name = "visual"
    keymap_mode = "visual"

    def flags(self) -> Mapping[str, bool]:
        return {"operator_pending": False}

    def on_exit(self, next_mode: Optional[str]) -> None:
        self.editor.bus.emit("visual.selection", None)


__all__ = ["VisualMode"]
