"""Core action implementations: mode entry and exit."""

from __future__ import annotations

from vimnote.buffer import motions
from vimnote.keymaps import ResolutionMatch
from vimnote.modes.base_mode import ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def append_after_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.move_to(motions.step_right(buffer.text, buffer.position))
    return ModeResult(consumed=True, switch_to="insert", message="append")


def insert_at_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.move_to(motions.line_start(buffer.text, buffer.position))
    return ModeResult(consumed=True, switch_to="insert", message="insert_line_start")


def append_at_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.move_to(motions.line_end(buffer.text, buffer.position))
    return ModeResult(consumed=True, switch_to="insert", message="append_line_end")


def open_line_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    end = motions.line_end(buffer.text, buffer.position)
    buffer.insert_text("\n", at=end, label="open_below")
    return ModeResult(consumed=True, switch_to="insert", message="open_below")


def open_line_above(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    start = motions.line_start(buffer.text, buffer.position)
    buffer.replace_range(start, start, "\n", label="open_above", cursor=start)
    return ModeResult(consumed=True, switch_to="insert", message="open_above")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Leave insert mode, stepping back onto the last typed codepoint."""

    del match
    buffer = context.buffer
    if buffer.position > 0:
        buffer.move_to(motions.step_left(buffer.text, buffer.position))
    return ModeResult(consumed=True, switch_to="normal", message="exit_insert")


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="command", message="enter_command")


__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "insert_at_line_start",
    "append_at_line_end",
    "open_line_below",
    "open_line_above",
    "exit_to_normal_mode",
    "enter_command_mode",
]
