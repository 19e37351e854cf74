"""Cursor positions and the spans operators act on."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A (line, column) location; ``col`` counts code points, not bytes."""

    line: int = 0
    col: int = 0

    def with_col(self, col: int) -> "Position":
        return replace(self, col=col)

    def with_line(self, line: int) -> "Position":
        return replace(self, line=line)

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.col)


@dataclass(frozen=True, slots=True)
class Range:
    """Span between two positions.

    Characterwise ranges treat ``end`` as exclusive. Linewise ranges ignore
    the columns and cover ``start.line..end.line`` inclusive.
    """

    start: Position
    end: Position
    linewise: bool = False

    def normalized(self) -> "Range":
        if self.end < self.start:
            return Range(self.end, self.start, self.linewise)
        return self


__all__ = ["Position", "Range"]
