"""Cursor motions shared by Normal and Insert mode bindings.

Every motion is total: at a document or line boundary it leaves the cursor
where it is and still reports the key as consumed.
"""

from __future__ import annotations

from typing import Callable, Optional

from vimnote.buffer import motions
from vimnote.keymaps import ResolutionMatch
from vimnote.modes.base_mode import ModeContext, ModeResult

LineLocator = Callable[[str, int, int], Optional[int]]


def _horizontal(
    context: ModeContext, target: Callable[[str, int], int], message: str
) -> ModeResult:
    buffer = context.buffer
    buffer.move_to(target(buffer.text, buffer.position))
    return ModeResult(consumed=True, status="motion", message=message)


def _vertical(context: ModeContext, locate: LineLocator, message: str) -> ModeResult:
    buffer = context.buffer
    cursor = buffer.cursor
    column = max(cursor.desired_column, cursor.column)
    position = locate(buffer.text, buffer.position, column)
    if position is None:
        return ModeResult(consumed=True, status="motion", message=f"{message}_edge")
    buffer.move_vertically(position)
    return ModeResult(consumed=True, status="motion", message=message)


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _horizontal(context, motions.step_left, "left")


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _horizontal(context, motions.step_right, "right")


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _vertical(context, motions.previous_line_position, "up")


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _vertical(context, motions.next_line_position, "down")


def word_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _horizontal(context, motions.word_forward_end, "word_forward")


def word_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _horizontal(context, motions.word_backward_start, "word_backward")


def line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _horizontal(context, motions.line_start, "line_start")


def line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _horizontal(context, motions.line_end, "line_end")


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "word_forward",
    "word_backward",
    "line_start",
    "line_end",
]
