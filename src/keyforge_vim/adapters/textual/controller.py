"""Toolkit-free controller that plays one challenge and feeds UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from keyforge_vim.buffer import Position
from keyforge_vim.editor import Editor
from keyforge_vim.render import RenderSnapshot
from keyforge_vim.runtime.config import EngineConfig
from keyforge_vim.validation import (
    ChallengeSpec,
    ChallengeSpecError,
    ValidationResult,
    validate,
)

BUS_EVENTS = (
    "mode.switch",
    "buffer.change",
    "register.write",
    "status",
    "visual.selection",
)

# textual key names that differ from engine tokens
_NAMED_KEYS = {
    "escape": "Escape",
    "enter": "Enter",
    "return": "Enter",
    "backspace": "Backspace",
    "delete": "Delete",
    "tab": "Tab",
    "left": "Left",
    "right": "Right",
    "up": "Up",
    "down": "Down",
    "space": " ",
    "ctrl+left_square_bracket": "ctrl+[",
}


def _noop(*_args: object, **_kwargs: object) -> None:  # pragma: no cover - default hook
    return None


def translate_key(key: str, character: Optional[str] = None) -> Optional[str]:
    """Map a textual key event to an engine token, or ``None`` to ignore it."""

    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key]
    if key.startswith("ctrl+"):
        return key
    if character and len(character) == 1 and character.isprintable():
        return character
    return None


def parse_cursor(value: Any) -> Optional[Position]:
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        raise ChallengeSpecError(f"cursor must be [line, col], got {value!r}")
    try:
        line, col = (int(item) for item in value)
    except (TypeError, ValueError) as exc:
        raise ChallengeSpecError(f"cursor must be [line, col], got {value!r}") from exc
    return Position(line, col)


@dataclass(slots=True)
class ChallengeUIHooks:
    """Callbacks invoked by the controller to update host widgets."""

    update_snapshot: Callable[[RenderSnapshot], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class ChallengeController:
    """Owns an Editor for one challenge and keeps the UI in sync with it."""

    def __init__(
        self,
        spec: ChallengeSpec,
        hooks: ChallengeUIHooks,
        *,
        cursor_start: Optional[Position] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.spec = spec
        self.hooks = hooks
        self.cursor_start = cursor_start
        self.config = config
        self.last_result: Optional[ValidationResult] = None
        self.editor = self._new_editor()
        self._refresh()

    @classmethod
    def from_challenge(
        cls,
        data: Mapping[str, Any],
        hooks: ChallengeUIHooks,
        *,
        config: Optional[EngineConfig] = None,
    ) -> "ChallengeController":
        spec = ChallengeSpec.from_mapping(data)
        return cls(
            spec,
            hooks,
            cursor_start=parse_cursor(data.get("cursor_start")),
            config=config,
        )

    def _new_editor(self) -> Editor:
        editor = Editor(self.spec.initial_buffer, cursor=self.cursor_start, config=self.config)
        for event in BUS_EVENTS:
            editor.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        return editor

    def feed_key(self, key: str) -> bool:
        self._log_state("key ->", key=key)
        pending = self.editor.handle_key(key)
        self._refresh()
        self._log_state("result <-", pending=pending)
        return pending

    def feed_keys(self, keys: Iterable[str]) -> bool:
        pending = False
        for key in keys:
            pending = self.feed_key(key)
        return pending

    def validate(self) -> ValidationResult:
        result = validate(self.editor, self.spec)
        self.last_result = result
        if result.success:
            self.hooks.update_status(
                f"Solved in {self.editor.keystroke_count} keys "
                f"({result.efficiency:.0%} efficiency)"
            )
        else:
            self.hooks.update_status(result.message or "Not solved yet")
        self._log_state("validate <-", success=result.success, efficiency=result.efficiency)
        return result

    def restart(self) -> None:
        self.last_result = None
        self.editor = self._new_editor()
        self._refresh()
        self.hooks.update_status("Restarted")

    def _refresh(self) -> None:
        snapshot = self.editor.render()
        self.hooks.update_snapshot(snapshot)
        if snapshot.status:
            self.hooks.update_status(snapshot.status)

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        editor = self.editor
        return {
            "mode": editor.mode.value,
            "cursor": editor.cursor.as_tuple(),
            "count": editor.count,
            "keystrokes": editor.keystroke_count,
        }


__all__ = [
    "BUS_EVENTS",
    "ChallengeController",
    "ChallengeUIHooks",
    "parse_cursor",
    "translate_key",
]
