"""Edits that do not go through the operator grammar: ``x``, paste, insert keys."""

from __future__ import annotations

from vimnote.buffer import Buffer, motions
from vimnote.keymaps import ResolutionMatch
from vimnote.modes.base_mode import ModeContext, ModeResult


def delete_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``x``: drop the codepoint under the cursor without touching the register."""

    del match
    buffer = context.buffer
    position = buffer.position
    if position < len(buffer.text):
        buffer.delete_range(position, position + 1, label="delete_char", cursor=position)
    return ModeResult(consumed=True, status="edit", message="delete_char")


def paste(buffer: Buffer, *, after: bool) -> bool:
    """Insert the register next to the cursor; ``False`` when it is empty.

    Register text containing a newline is pasted line-wise (below or above the
    current line), anything else character-wise (after or at the cursor).
    """

    register = buffer.register
    if register.is_empty:
        return False

    text = buffer.text
    position = buffer.position
    if register.linewise:
        payload = register.text
        if not after:
            at = motions.line_start(text, position)
        else:
            at = motions.line_end_inclusive(text, position)
            if motions.line_end(text, position) == len(text) and payload.endswith("\n"):
                # last line has no terminator to paste after
                payload = "\n" + payload[:-1]
        buffer.insert_text(payload, at=at, label="paste_linewise")
    else:
        at = min(position + 1, len(text)) if after else position
        buffer.insert_text(register.text, at=at, label="paste_charwise")
    return True


def paste_after(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    pasted = paste(context.buffer, after=True)
    return ModeResult(consumed=True, status="edit" if pasted else "noop", message="paste_after")


def paste_before(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    pasted = paste(context.buffer, after=False)
    return ModeResult(consumed=True, status="edit" if pasted else "noop", message="paste_before")


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.insert_text("\n", label="insert_newline")
    return ModeResult(consumed=True, status="edit", message="newline")


def backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    position = buffer.position
    if position > 0:
        buffer.delete_range(position - 1, position, label="backspace")
    return ModeResult(consumed=True, status="edit", message="backspace")


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    position = buffer.position
    if position < len(buffer.text):
        buffer.delete_range(position, position + 1, label="delete_forward", cursor=position)
    return ModeResult(consumed=True, status="edit", message="delete_forward")


__all__ = [
    "delete_char",
    "paste",
    "paste_after",
    "paste_before",
    "insert_newline",
    "backspace",
    "delete_forward",
]
