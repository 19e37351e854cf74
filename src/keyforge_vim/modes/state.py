"""Command-state model for the dispatcher.

The editor is always in exactly one of four states. Each state carries only
the pending data that is meaningful for it, so combinations such as "waiting
for a find character while inserting" cannot be represented at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from keyforge_vim.actions.operators import Operator
from keyforge_vim.buffer import Position


class EditorMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"
    OPERATOR_PENDING = "operator_pending"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    EditorMode.NORMAL: "NORMAL",
    EditorMode.INSERT: "INSERT",
    EditorMode.VISUAL: "VISUAL",
    EditorMode.VISUAL_LINE: "V-LINE",
    EditorMode.OPERATOR_PENDING: "NORMAL",
}


class WaitingFor(str, Enum):
    NONE = "none"
    MOTION = "motion"
    CHAR = "char"
    REGISTER = "register"


# Pending prefixes -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AwaitMotion:
    """Operator typed; the next key names a motion or object scope."""


@dataclass(frozen=True, slots=True)
class GPrefix:
    """First key(s) of a multi-key binding such as ``gg``."""

    tokens: tuple[str, ...] = ("g",)


@dataclass(frozen=True, slots=True)
class TextObjectScope:
    """``i`` or ``a`` typed; the next key names the object kind."""

    inner: bool


@dataclass(frozen=True, slots=True)
class FindChar:
    """``f``/``F``/``t``/``T`` typed; the next key is the target character."""

    forward: bool
    till: bool


@dataclass(frozen=True, slots=True)
class ReplaceChar:
    """``r`` typed; the next key is the replacement character."""


@dataclass(frozen=True, slots=True)
class RegisterPrefix:
    """``"`` typed; the next key names a register."""


NormalPrefix = Union[GPrefix, FindChar, ReplaceChar, RegisterPrefix]
OperatorAwaiting = Union[AwaitMotion, FindChar, TextObjectScope, GPrefix]
VisualPrefix = Union[GPrefix, FindChar, TextObjectScope]

AWAIT_MOTION = AwaitMotion()


# States ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NormalState:
    prefix: Optional[NormalPrefix] = None


@dataclass(frozen=True, slots=True)
class InsertState:
    pass


@dataclass(frozen=True, slots=True)
class VisualState:
    anchor: Position
    linewise: bool = False
    prefix: Optional[VisualPrefix] = None


@dataclass(frozen=True, slots=True)
class OperatorPendingState:
    operator: Operator
    awaiting: OperatorAwaiting = AWAIT_MOTION


EditorState = Union[NormalState, InsertState, VisualState, OperatorPendingState]


def mode_of(state: EditorState) -> EditorMode:
    if isinstance(state, InsertState):
        return EditorMode.INSERT
    if isinstance(state, VisualState):
        return EditorMode.VISUAL_LINE if state.linewise else EditorMode.VISUAL
    if isinstance(state, OperatorPendingState):
        return EditorMode.OPERATOR_PENDING
    return EditorMode.NORMAL


def pending_prefix(state: EditorState) -> object | None:
    if isinstance(state, OperatorPendingState):
        return None if isinstance(state.awaiting, AwaitMotion) else state.awaiting
    if isinstance(state, (NormalState, VisualState)):
        return state.prefix
    return None


def waiting_for(state: EditorState) -> WaitingFor:
    prefix = pending_prefix(state)
    if isinstance(prefix, (FindChar, ReplaceChar)):
        return WaitingFor.CHAR
    if isinstance(prefix, TextObjectScope):
        return WaitingFor.MOTION
    if isinstance(prefix, RegisterPrefix):
        return WaitingFor.REGISTER
    return WaitingFor.NONE


def pending_operator(state: EditorState) -> Optional[Operator]:
    if isinstance(state, OperatorPendingState):
        return state.operator
    return None


def prefix_label(state: EditorState) -> str:
    """Short human-readable rendering of the pending key sequence."""

    label = ""
    if isinstance(state, OperatorPendingState):
        label = state.operator.label
    prefix = pending_prefix(state)
    if isinstance(prefix, GPrefix):
        label += "".join(prefix.tokens)
    elif isinstance(prefix, TextObjectScope):
        label += "i" if prefix.inner else "a"
    elif isinstance(prefix, FindChar):
        key = "t" if prefix.till else "f"
        label += key if prefix.forward else key.upper()
    elif isinstance(prefix, ReplaceChar):
        label += "r"
    elif isinstance(prefix, RegisterPrefix):
        label += '"'
    return label


__all__ = [
    "AWAIT_MOTION",
    "AwaitMotion",
    "EditorState",
    "FindChar",
    "GPrefix",
    "InsertState",
    "EditorMode",
    "NormalState",
    "OperatorPendingState",
    "RegisterPrefix",
    "ReplaceChar",
    "TextObjectScope",
    "VisualState",
    "WaitingFor",
    "mode_of",
    "pending_operator",
    "pending_prefix",
    "prefix_label",
    "waiting_for",
]
