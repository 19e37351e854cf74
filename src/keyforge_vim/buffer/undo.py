"""Snapshot-based undo/redo history.

Each entry holds a full copy of the buffer. That is O(buffer size) per
change, which is fine for challenge buffers of a few dozen lines; larger
documents would need a delta-based history instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .document import Buffer
from .position import Position


@dataclass(frozen=True, slots=True)
class Snapshot:
    buffer: Buffer
    cursor: Position


class UndoHistory:
    """Two linear stacks; any new change clears the redo stack."""

    def __init__(self, *, limit: int = 0) -> None:
        self.limit = limit
        self.undo_stack: List[Snapshot] = []
        self.redo_stack: List[Snapshot] = []

    def record(self, snapshot: Snapshot) -> None:
        self.undo_stack.append(snapshot)
        if self.limit and len(self.undo_stack) > self.limit:
            del self.undo_stack[0]
        self.redo_stack.clear()

    def undo(self, current: Snapshot) -> Optional[Snapshot]:
        if not self.undo_stack:
            return None
        self.redo_stack.append(current)
        return self.undo_stack.pop()

    def redo(self, current: Snapshot) -> Optional[Snapshot]:
        if not self.redo_stack:
            return None
        self.undo_stack.append(current)
        return self.redo_stack.pop()


__all__ = ["Snapshot", "UndoHistory"]
