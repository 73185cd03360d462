"""Insert mode: text events land in the buffer, control keys go through keymaps."""

from __future__ import annotations

from .base_mode import ModeResult
from .keymap_helpers import KeymapMode

INSERTABLE_CONTROLS = frozenset({"\n", "\t"})


def insertable(text: str) -> str:
    """Drop control characters other than newline and tab."""

    return "".join(ch for ch in text if ch >= " " or ch in INSERTABLE_CONTROLS)


class InsertMode(KeymapMode):
    name = "insert"

    def handle_text(self, text: str) -> ModeResult:
        payload = insertable(text)
        if not payload:
            return ModeResult(consumed=False, status="ignored")
        self.context.buffer.insert_text(payload, label="insert_text")
        return ModeResult(consumed=True, status="inserted")


__all__ = ["InsertMode", "insertable"]
