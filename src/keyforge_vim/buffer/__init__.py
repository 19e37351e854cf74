"""Buffer storage, positions, registers and undo history."""

from .document import LINE_SEPARATOR, Buffer
from .position import Position, Range
from .registers import UNNAMED, RegisterBank, RegisterValue
from .undo import Snapshot, UndoHistory

__all__ = [
    "Buffer",
    "LINE_SEPARATOR",
    "Position",
    "Range",
    "RegisterBank",
    "RegisterValue",
    "UNNAMED",
    "Snapshot",
    "UndoHistory",
]
