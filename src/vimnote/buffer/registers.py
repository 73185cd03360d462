"""The single yank/delete register."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Register:
    """Holds the text of the most recent yank, delete, or change.

    Every store overwrites the slot. Content containing a line terminator is
    pasted line-wise, anything else character-wise.
    """

    text: str = ""

    def store(self, text: str) -> None:
        self.text = text

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def linewise(self) -> bool:
        return "\n" in self.text
