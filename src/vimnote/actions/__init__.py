"""High-level editing verbs reused across modes."""

from .command import (
    cancel_command_line,
    command_backspace,
    parse_command_line,
    submit_command_line,
)
from .core import (
    append_after_cursor,
    append_at_line_end,
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
    insert_at_line_start,
    open_line_above,
    open_line_below,
)
from .editing import (
    backspace,
    delete_char,
    delete_forward,
    insert_newline,
    paste_after,
    paste_before,
)
from .navigation import (
    line_end,
    line_start,
    move_down,
    move_left,
    move_right,
    move_up,
    word_backward,
    word_forward,
)
from .operators import begin_change, begin_delete, begin_yank

__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "insert_at_line_start",
    "append_at_line_end",
    "open_line_below",
    "open_line_above",
    "exit_to_normal_mode",
    "enter_command_mode",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "word_forward",
    "word_backward",
    "line_start",
    "line_end",
    "delete_char",
    "paste_after",
    "paste_before",
    "insert_newline",
    "backspace",
    "delete_forward",
    "begin_delete",
    "begin_yank",
    "begin_change",
    "parse_command_line",
    "submit_command_line",
    "cancel_command_line",
    "command_backspace",
]
