"""Command state and per-mode key handlers."""

from .state import (
    AWAIT_MOTION,
    AwaitMotion,
    EditorMode,
    EditorState,
    FindChar,
    GPrefix,
    InsertState,
    NormalState,
    OperatorPendingState,
    RegisterPrefix,
    ReplaceChar,
    TextObjectScope,
    VisualState,
    WaitingFor,
    mode_of,
    pending_operator,
    pending_prefix,
    prefix_label,
    waiting_for,
)
from .base_mode import ESCAPE_KEYS, Mode, ModeBus, ModeResult
from .normal_mode import NormalMode
from .visual_mode import VisualMode
from .insert_mode import InsertMode

__all__ = [
    "AWAIT_MOTION",
    "AwaitMotion",
    "ESCAPE_KEYS",
    "EditorMode",
    "EditorState",
    "FindChar",
    "GPrefix",
    "InsertMode",
    "InsertState",
    "Mode",
    "ModeBus",
    "ModeResult",
    "NormalMode",
    "NormalState",
    "OperatorPendingState",
    "RegisterPrefix",
    "ReplaceChar",
    "TextObjectScope",
    "VisualMode",
    "VisualState",
    "WaitingFor",
    "mode_of",
    "pending_operator",
    "pending_prefix",
    "prefix_label",
    "waiting_for",
]
