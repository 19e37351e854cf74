"""Normal and Operator-pending key handling."""

from __future__ import annotations

from keyforge_vim.actions.motions import FindState
from keyforge_vim.actions.operators import replace_char
from keyforge_vim.actions.text_objects import parse_text_object

from .base_mode import ESCAPE_KEYS, Mode, ModeResult, is_count_digit
from .state import (
    FindChar,
    GPrefix,
    RegisterPrefix,
    ReplaceChar,
    TextObjectScope,
    pending_prefix,
)

_ARGUMENT_PREFIXES = (FindChar, ReplaceChar, RegisterPrefix, TextObjectScope)


class NormalMode(Mode):
    """Counts, prefixes and keymap dispatch for Normal mode.

    Operator-pending is handled here too: the keymap ``when`` flag
    ``operator_pending`` selects which bindings apply.
    """

    name = "normal"
    keymap_mode = "normal"

    def handle_key(self, key: str) -> ModeResult:
        editor = self.editor
        prefix = pending_prefix(editor.state)
        if isinstance(prefix, _ARGUMENT_PREFIXES):
            if key in ESCAPE_KEYS:
                return self.cancel()
            return self.complete_prefix(prefix, key)

        if not isinstance(prefix, GPrefix) and is_count_digit(key, editor.count):
            editor.count = editor.count * 10 + int(key)
            return ModeResult(consumed=True, pending=True, status="count")

        tokens = (*prefix.tokens, key) if isinstance(prefix, GPrefix) else (key,)
        return self.dispatch(tokens)

    def complete_prefix(self, prefix: object, key: str) -> ModeResult:
        """Consume the argument key of ``f``/``r``/``"``/``i``/``a`` sequences."""

        editor = self.editor
        if isinstance(prefix, RegisterPrefix):
            if editor.select_register(key):
                editor.set_prefix(None)
                return ModeResult(consumed=True, pending=True, status="register")
            editor.reset_command_state()
            return ModeResult(consumed=False, status="miss")

        # Named tokens such as "Enter" are never a character argument
        if len(key) != 1:
            editor.reset_command_state()
            return ModeResult(consumed=False, status="miss")

        if isinstance(prefix, FindChar):
            result = editor.run_find(
                FindState(key, forward=prefix.forward, till=prefix.till), editor.count
            )
        elif isinstance(prefix, ReplaceChar):
            replace_char(editor, key, max(editor.count, 1))
            result = ModeResult(consumed=True, status="replace")
        else:
            kind = parse_text_object(key)
            if kind is None:
                result = ModeResult(consumed=False, status="miss")
            else:
                result = editor.apply_text_object(kind, prefix.inner)
        editor.reset_command_state()
        return result


__all__ = ["NormalMode"]
