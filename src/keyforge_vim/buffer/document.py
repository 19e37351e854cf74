"""Line-oriented text storage for the editing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .position import Position

LINE_SEPARATOR = "\n"

@dataclass(slots=True)
class Buffer:
    """Mutable list-of-lines text store.

    Every accessor clamps or ignores out-of-range addressing instead of
    raising, and the buffer always holds at least one (possibly empty) line.
    Columns are code-point indices into the line string.
    """

    _lines: List[str] = field(default_factory=lambda: [""])

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        # split, not splitlines: a trailing separator yields a trailing empty line
        return cls(_lines=text.split(LINE_SEPARATOR))

    def __str__(self) -> str:
        return LINE_SEPARATOR.join(self._lines)

    @property
    def text(self) -> str:
        return str(self)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def clone(self) -> "Buffer":
        return Buffer(_lines=list(self._lines))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def _valid(self, n: int) -> bool:
        return 0 <= n < len(self._lines)

    def get_line(self, n: int) -> str:
        if not self._valid(n):
            return ""
        return self._lines[n]

    def set_line(self, n: int, content: str) -> None:
        if self._valid(n):
            self._lines[n] = content

    def insert_line(self, n: int, content: str) -> None:
        n = max(0, min(n, len(self._lines)))
        self._lines.insert(n, content)

    def delete_line(self, n: int) -> str:
        if not self._valid(n):
            return ""
        deleted = self._lines.pop(n)
        if not self._lines:
            self._lines.append("")
        return deleted

    def split_line(self, line: int, col: int) -> None:
        if not self._valid(line):
            return
        content = self._lines[line]
        col = max(0, min(col, len(content)))
        self._lines[line] = content[:col]
        self._lines.insert(line + 1, content[col:])

    def join_lines(self, n: int) -> None:
        """Append line ``n + 1`` to line ``n`` with no separator."""

        if n < 0 or n >= len(self._lines) - 1:
            return
        self._lines[n] += self._lines.pop(n + 1)

    def insert_at(self, line: int, col: int, text: str) -> None:
        if not self._valid(line):
            return
        content = self._lines[line]
        col = max(0, min(col, len(content)))
        self._lines[line] = content[:col] + text + content[col:]

    def delete_at(self, line: int, col: int, count: int) -> str:
        if not self._valid(line) or count <= 0:
            return ""
        content = self._lines[line]
        if col < 0 or col >= len(content):
            return ""
        end = min(col + count, len(content))
        self._lines[line] = content[:col] + content[end:]
        return content[col:end]

    def get_range(self, start: Position, end: Position) -> str:
        """Text in ``[start, end)``; lines are joined with ``\\n``."""

        if start.line == end.line:
            content = self.get_line(start.line)
            if start.col >= len(content):
                return ""
            return content[max(start.col, 0) : max(end.col, 0)]

        parts = [self.get_line(start.line)[max(start.col, 0) :]]
        parts.extend(self.get_line(i) for i in range(start.line + 1, end.line))
        parts.append(self.get_line(end.line)[: max(end.col, 0)])
        return LINE_SEPARATOR.join(parts)

    def delete_range(self, start: Position, end: Position) -> str:
        """Remove ``[start, end)`` and return the removed text."""

        if start.line == end.line:
            return self.delete_at(start.line, start.col, end.col - start.col)
        if not self._valid(start.line):
            return ""

        end_line = min(end.line, len(self._lines) - 1)
        deleted = self.get_range(start, Position(end_line, end.col))
        head = self._lines[start.line][: max(start.col, 0)]
        tail = self._lines[end_line][max(end.col, 0) :]
        self._lines[start.line : end_line + 1] = [head + tail]
        return deleted

    def rune_count(self, line: int) -> int:
        return len(self.get_line(line))

    def last_col(self, line: int) -> int:
        """Last addressable Normal-mode column (0 on an empty line)."""

        return max(self.rune_count(line) - 1, 0)

    def first_non_blank(self, line: int) -> int:
        content = self.get_line(line)
        for col, char in enumerate(content):
            if not char.isspace():
                return col
        return 0

    def replace_lines(self, start: int, end: int, lines: Iterable[str]) -> None:
        """Replace ``[start:end]`` with ``lines`` keeping at least one line."""

        self._lines[start:end] = list(lines)
        if not self._lines:
            self._lines.append("")


__all__ = ["Buffer", "LINE_SEPARATOR"]
