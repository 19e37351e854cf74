"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Mapping, Optional, Sequence

from keyforge_vim.keymaps.resolver import ResolutionMatch, ResolutionResult

from .state import GPrefix, OperatorPendingState

if TYPE_CHECKING:  # pragma: no cover
    from keyforge_vim.editor import Editor

ESCAPE_KEYS = frozenset({"Escape", "ctrl+c", "ctrl+["})


def is_count_digit(key: str, count: int) -> bool:
    """Digits accumulate into a count; a leading ``0`` is a motion instead."""

    if len(key) != 1 or key not in "0123456789":
        return False
    return key != "0" or count > 0


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key`` and from action handlers.

    ``pending`` is true while the key sequence is incomplete; the caller then
    keeps the pending state instead of resetting it.
    """

    consumed: bool
    pending: bool = False
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting the engine publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"
    keymap_mode: str = "normal"

    def __init__(self, editor: "Editor") -> None:
        self.editor = editor

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(self, key: str) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def flags(self) -> Mapping[str, bool]:
        return {"operator_pending": isinstance(self.editor.state, OperatorPendingState)}

    def resolve(self, tokens: Sequence[str]) -> ResolutionResult:
        return self.editor.keymap_resolver.resolve(
            self.keymap_mode, tokens, context=self.flags()
        )

    def run_match(self, match: ResolutionMatch) -> ModeResult:
        outcome = match.action(self.editor, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True, message=match.action.id)

    def dispatch(self, tokens: Sequence[str]) -> ModeResult:
        """Resolve ``tokens`` through the keymap and run the bound action.

        Any outcome that does not leave a sequence pending ends in exactly one
        ``reset_command_state`` call.
        """

        editor = self.editor
        result = self.resolve(tokens)
        if result.status == "pending":
            editor.set_prefix(GPrefix(tuple(tokens)))
            return ModeResult(consumed=True, pending=True, status="pending")
        if result.match is None:
            editor.reset_command_state()
            return ModeResult(consumed=False, status="miss")

        outcome = self.run_match(result.match)
        if not outcome.pending:
            editor.reset_command_state()
        return outcome

    def cancel(self) -> ModeResult:
        self.editor.reset_command_state()
        return ModeResult(consumed=True, status="cancel")


__all__ = [
    "ESCAPE_KEYS",
    "Mode",
    "ModeBus",
    "ModeResult",
    "is_count_digit",
    "is_printable",
]
