"""Insert mode: bound editing keys, everything printable is inserted."""

from __future__ import annotations

from typing import Mapping

from keyforge_vim.actions.insert import insert_text

from .base_mode import Mode, ModeResult, is_printable


class InsertMode(Mode):
    name = "insert"
    keymap_mode = "insert"

    def flags(self) -> Mapping[str, bool]:
        return {}

    def handle_key(self, key: str) -> ModeResult:
        result = self.resolve((key,))
        if result.match is not None:
            return self.run_match(result.match)
        if is_printable(key):
            insert_text(self.editor, key)
            return ModeResult(consumed=True, status="insert")
        return ModeResult(consumed=False, status="miss")


__all__ = ["InsertMode"]
