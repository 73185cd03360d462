"""Cursor state tied to a Document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .motions import line_and_column

Location = Tuple[int, int]  # (line, column)


@dataclass(slots=True)
class CursorState:
    """Codepoint offset plus the line/column derived from it.

    ``line`` and ``column`` are only ever written by ``place``. The
    ``desired_column`` survives vertical motion so the cursor can return to
    its original horizontal position after crossing short lines.
    """

    position: int = 0
    line: int = 0
    column: int = 0
    desired_column: int = 0

    @property
    def location(self) -> Location:
        return (self.line, self.column)

    def place(self, text: str, position: int, *, sticky: bool = False) -> None:
        self.position = max(0, min(position, len(text)))
        self.line, self.column = line_and_column(text, self.position)
        if not sticky:
            self.desired_column = self.column

    def reset(self) -> None:
        self.position = self.line = self.column = self.desired_column = 0
