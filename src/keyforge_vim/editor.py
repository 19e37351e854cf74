"""The Editor aggregate: session state plus the key dispatcher.

An ``Editor`` owns its buffer, cursor, registers and undo history, and
consumes one key token at a time through ``handle_key``. Key handling is
split between the per-mode handlers in :mod:`keyforge_vim.modes` and the
key-bound actions registered in :mod:`keyforge_vim.keymaps`; this module
holds the shared state they operate on and the primitives (state switches,
cursor clamping, undo transactions, register access) they call.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional

from keyforge_vim.actions.motions import FindState, find_char
from keyforge_vim.actions.operators import Operator, execute_operator
from keyforge_vim.actions.text_objects import TextObjectKind, get_text_object_range
from keyforge_vim.buffer import (
    UNNAMED,
    Buffer,
    Position,
    Range,
    RegisterBank,
    RegisterValue,
    Snapshot,
    UndoHistory,
)
from keyforge_vim.keymaps import KeymapRegistry, KeymapResolver
from keyforge_vim.keymaps.defaults import load_default_keymaps
from keyforge_vim.modes import (
    AWAIT_MOTION,
    EditorMode,
    EditorState,
    InsertMode,
    InsertState,
    Mode,
    ModeBus,
    ModeResult,
    NormalMode,
    NormalState,
    OperatorPendingState,
    VisualMode,
    VisualState,
    WaitingFor,
    mode_of,
    pending_operator,
    waiting_for,
)
from keyforge_vim.render import RenderSnapshot, build_snapshot
from keyforge_vim.runtime import telemetry
from keyforge_vim.runtime.config import EngineConfig

OLDEST_CHANGE = "Already at oldest change"
NEWEST_CHANGE = "Already at newest change"


class Editor:
    """Modal editing session over a single buffer."""

    def __init__(
        self,
        text: str = "",
        *,
        cursor: Optional[Position] = None,
        config: Optional[EngineConfig] = None,
        registry: Optional[KeymapRegistry] = None,
        bus: Optional[ModeBus] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.config = config or EngineConfig()
        if self.config.telemetry_preset:
            telemetry.configure(preset=self.config.telemetry_preset)
        self._logger_name = logger_name

        self.buffer = Buffer.from_text(text)
        self.cursor = Position()
        self.state: EditorState = NormalState()
        self.count = 0
        self.register: Optional[str] = None
        self.last_find: Optional[FindState] = None
        self.registers = RegisterBank()
        self.history = UndoHistory(limit=self.config.undo_limit)
        self.status_message = ""
        self.keystroke_count = 0
        self.insert_recorded = False
        self.bus = bus or ModeBus()

        if registry is None:
            registry = KeymapRegistry(logger_name=logger_name)
            load_default_keymaps(registry)
        self.keymap_registry = registry
        self.keymap_resolver = KeymapResolver(registry, logger_name=logger_name)

        self._handlers: dict[str, Mode] = {
            "normal": NormalMode(self),
            "insert": InsertMode(self),
            "visual": VisualMode(self),
        }
        self._transaction_depth = 0

        if cursor is not None:
            self.cursor = self.clamp(cursor)

    # ------------------------------------------------------------------
    # Derived, read-only views of the command state

    @property
    def mode(self) -> EditorMode:
        return mode_of(self.state)

    @property
    def waiting_for(self) -> WaitingFor:
        return waiting_for(self.state)

    @property
    def pending_op(self) -> Optional[Operator]:
        return pending_operator(self.state)

    @property
    def visual_start(self) -> Optional[Position]:
        if isinstance(self.state, VisualState):
            return self.state.anchor
        return None

    @property
    def undo_stack(self) -> List[Snapshot]:
        return self.history.undo_stack

    @property
    def redo_stack(self) -> List[Snapshot]:
        return self.history.redo_stack

    @property
    def unnamed(self) -> str:
        return self.registers.unnamed

    @property
    def text(self) -> str:
        return self.buffer.text

    # ------------------------------------------------------------------
    # Key input

    def handle_key(self, key: str) -> bool:
        """Process one key token; return ``True`` while more input is needed."""

        self.keystroke_count += 1
        self.status_message = ""
        handler = self._active_handler()
        with telemetry.span(
            f"mode::{handler.name}",
            logger_name=self._logger_name,
            component=True,
            metadata={"key": key},
        ) as handle:
            result = handler.handle_key(key)
            handle.add_metadata("status", result.status)
        return result.pending

    def handle_keys(self, keys: Iterable[str]) -> bool:
        pending = False
        for key in keys:
            pending = self.handle_key(key)
        return pending

    def _active_handler(self) -> Mode:
        if isinstance(self.state, InsertState):
            return self._handlers["insert"]
        if isinstance(self.state, VisualState):
            return self._handlers["visual"]
        return self._handlers["normal"]

    # ------------------------------------------------------------------
    # State transitions

    def _set_state(self, state: EditorState) -> None:
        previous_mode = mode_of(self.state)
        previous_handler = self._active_handler()
        self.state = state
        current_mode = mode_of(state)
        if current_mode is previous_mode:
            return
        current_handler = self._active_handler()
        if current_handler is not previous_handler:
            previous_handler.on_exit(current_handler.name)
            current_handler.on_enter(previous_handler.name)
        self.bus.emit("mode.switch", current_mode.value)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous_mode.value, "to": current_mode.value},
            logger_name=self._logger_name,
        )

    def reset_command_state(self) -> None:
        """Clear count, register selection and any pending prefix or operator."""

        self.count = 0
        self.register = None
        state = self.state
        if isinstance(state, (OperatorPendingState, NormalState)):
            if state != NormalState():
                self._set_state(NormalState())
        elif isinstance(state, VisualState) and state.prefix is not None:
            self._set_state(replace(state, prefix=None))

    def set_prefix(self, prefix: object | None) -> None:
        """Record a pending key prefix on the current state."""

        state = self.state
        if isinstance(state, OperatorPendingState):
            self._set_state(OperatorPendingState(state.operator, prefix or AWAIT_MOTION))
        elif isinstance(state, VisualState):
            self._set_state(replace(state, prefix=prefix))
        elif isinstance(state, NormalState):
            self._set_state(NormalState(prefix))

    def begin_operator(self, operator: Operator) -> None:
        self._set_state(OperatorPendingState(operator))

    def enter_normal(self) -> None:
        self._set_state(NormalState())
        self.cursor = self.clamp(self.cursor)

    def enter_insert(self, *, snapshotted: bool = False) -> None:
        """Switch to Insert; ``snapshotted`` marks the session as already undoable."""

        self.insert_recorded = snapshotted
        self._set_state(InsertState())

    def enter_visual(self, *, linewise: bool = False) -> None:
        self._set_state(VisualState(anchor=self.cursor, linewise=linewise))

    def set_visual_kind(self, *, linewise: bool) -> None:
        if isinstance(self.state, VisualState):
            self._set_state(replace(self.state, linewise=linewise, prefix=None))

    def swap_visual_anchor(self) -> None:
        state = self.state
        if isinstance(state, VisualState):
            anchor, self.cursor = self.cursor, state.anchor
            self._set_state(replace(state, anchor=anchor))

    # ------------------------------------------------------------------
    # Cursor

    def clamp(self, pos: Position, *, insert: Optional[bool] = None) -> Position:
        if insert is None:
            insert = isinstance(self.state, InsertState)
        line = min(max(pos.line, 0), self.buffer.line_count - 1)
        limit = self.buffer.rune_count(line) if insert else self.buffer.last_col(line)
        col = min(max(pos.col, 0), limit)
        return Position(line, col)

    def set_cursor(self, pos: Position) -> None:
        self.cursor = self.clamp(pos)

    def apply_motion(
        self, target: Optional[Position], *, inclusive: bool = True, linewise: bool = False
    ) -> ModeResult:
        """Move the cursor to ``target`` or, with an operator pending, operate on it.

        ``None`` is an unresolved motion (failed find, no matching bracket);
        it moves nothing and abandons a pending operator.
        """

        if target is None:
            return ModeResult(consumed=True, status="not_found")
        state = self.state
        if isinstance(state, OperatorPendingState):
            start, end = sorted((self.cursor, target))
            if inclusive:
                end = end.with_col(end.col + 1)
            execute_operator(self, state.operator, Range(start, end, linewise=linewise))
            return ModeResult(consumed=True, status="operator", message=state.operator.value)
        self.set_cursor(target)
        return ModeResult(consumed=True, status="motion")

    def run_find(self, find: FindState, count: int = 0) -> ModeResult:
        self.last_find = find
        target = find_char(self.buffer, self.cursor, find, max(count, 1))
        return self.apply_motion(target)

    def apply_text_object(self, kind: TextObjectKind, inner: bool) -> ModeResult:
        rng = get_text_object_range(self.buffer, self.cursor, kind, inner)
        if rng is None:
            return ModeResult(consumed=True, status="not_found")
        state = self.state
        if isinstance(state, OperatorPendingState):
            execute_operator(self, state.operator, rng)
            return ModeResult(consumed=True, status="operator", message=state.operator.value)
        if isinstance(state, VisualState):
            end = rng.end.with_col(max(rng.end.col - 1, 0))
            if rng.end.col == 0 and rng.end.line > rng.start.line:
                end = Position(rng.end.line - 1, self.buffer.last_col(rng.end.line - 1))
            self._set_state(replace(state, anchor=rng.start, prefix=None))
            self.set_cursor(end)
        return ModeResult(consumed=True, status="text_object")

    def visual_range(self) -> Optional[Range]:
        state = self.state
        if not isinstance(state, VisualState):
            return None
        start, end = sorted((state.anchor, self.cursor))
        if state.linewise:
            return Range(
                Position(start.line, 0),
                Position(end.line, self.buffer.rune_count(end.line)),
                linewise=True,
            )
        return Range(start, end.with_col(end.col + 1))

    # ------------------------------------------------------------------
    # Undo / redo

    def _snapshot(self) -> Snapshot:
        return Snapshot(buffer=self.buffer.clone(), cursor=self.cursor)

    def save_undo(self) -> None:
        self.history.record(self._snapshot())

    @contextmanager
    def transaction(self, label: str, *, record: bool = True) -> Iterator[Buffer]:
        """Group buffer mutations into one undo step.

        Nested transactions share the outermost snapshot.
        """

        if record and self._transaction_depth == 0:
            self.save_undo()
        self._transaction_depth += 1
        try:
            with telemetry.span(
                f"buffer::{label}",
                logger_name=self._logger_name,
                metadata={"line": self.cursor.line, "col": self.cursor.col},
            ):
                yield self.buffer
        finally:
            self._transaction_depth -= 1
        self.bus.emit("buffer.change", label)

    @contextmanager
    def insert_edit(self, label: str) -> Iterator[Buffer]:
        """Transaction for Insert-mode keys; the first one snapshots the session."""

        with self.transaction(label, record=not self.insert_recorded) as buffer:
            yield buffer
        self.insert_recorded = True

    def _restore(self, snapshot: Snapshot) -> None:
        self.buffer = snapshot.buffer.clone()
        self.cursor = self.clamp(snapshot.cursor)

    def undo(self, count: int = 1) -> bool:
        undone = 0
        for _ in range(max(count, 1)):
            snapshot = self.history.undo(self._snapshot())
            if snapshot is None:
                break
            self._restore(snapshot)
            undone += 1
        if not undone:
            self.set_status(OLDEST_CHANGE)
        telemetry.record_event(
            "undo", level="debug", data={"steps": undone}, logger_name=self._logger_name
        )
        return bool(undone)

    def redo(self, count: int = 1) -> bool:
        redone = 0
        for _ in range(max(count, 1)):
            snapshot = self.history.redo(self._snapshot())
            if snapshot is None:
                break
            self._restore(snapshot)
            redone += 1
        if not redone:
            self.set_status(NEWEST_CHANGE)
        telemetry.record_event(
            "redo", level="debug", data={"steps": redone}, logger_name=self._logger_name
        )
        return bool(redone)

    # ------------------------------------------------------------------
    # Registers and status

    def select_register(self, name: str) -> bool:
        if not RegisterBank.is_valid_name(name):
            return False
        self.register = name
        return True

    def write_register(self, text: str, *, linewise: bool = False) -> None:
        name = self.register or UNNAMED
        self.registers.yank_to(name, text, linewise=linewise)
        self.bus.emit(
            "register.write", {"register": name, "text": text, "linewise": linewise}
        )

    def read_register(self) -> RegisterValue:
        return self.registers.get(self.register or UNNAMED)

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.bus.emit("status", message)

    # ------------------------------------------------------------------
    # Output

    def render(self) -> RenderSnapshot:
        return build_snapshot(self)


__all__ = ["Editor", "NEWEST_CHANGE", "OLDEST_CHANGE"]
