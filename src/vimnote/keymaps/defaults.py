"""Built-in keymaps that seed each mode with the editor's key vocabulary."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from vimnote.actions import command as command_actions
from vimnote.actions import core as core_actions
from vimnote.actions import editing as editing_actions
from vimnote.actions import navigation as navigation_actions
from vimnote.actions import operators as operator_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode at the cursor",
    ),
    ActionRef(
        id="core.append",
        handler=core_actions.append_after_cursor,
        description="Enter insert mode after the cursor",
    ),
    ActionRef(
        id="core.insert_line_start",
        handler=core_actions.insert_at_line_start,
        description="Enter insert mode at the start of the line",
    ),
    ActionRef(
        id="core.append_line_end",
        handler=core_actions.append_at_line_end,
        description="Enter insert mode at the end of the line",
    ),
    ActionRef(
        id="core.open_below",
        handler=core_actions.open_line_below,
        description="Open a line below and enter insert mode",
    ),
    ActionRef(
        id="core.open_above",
        handler=core_actions.open_line_above,
        description="Open a line above and enter insert mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="motion.left",
        handler=navigation_actions.move_left,
        description="Move one character left",
    ),
    ActionRef(
        id="motion.right",
        handler=navigation_actions.move_right,
        description="Move one character right",
    ),
    ActionRef(
        id="motion.up",
        handler=navigation_actions.move_up,
        description="Move to the previous line",
    ),
    ActionRef(
        id="motion.down",
        handler=navigation_actions.move_down,
        description="Move to the next line",
    ),
    ActionRef(
        id="motion.word_forward",
        handler=navigation_actions.word_forward,
        description="Move to the start of the next word",
    ),
    ActionRef(
        id="motion.word_backward",
        handler=navigation_actions.word_backward,
        description="Move to the start of the previous word",
    ),
    ActionRef(
        id="motion.line_start",
        handler=navigation_actions.line_start,
        description="Move to the start of the line",
    ),
    ActionRef(
        id="motion.line_end",
        handler=navigation_actions.line_end,
        description="Move to the end of the line",
    ),
    ActionRef(
        id="edit.delete_char",
        handler=editing_actions.delete_char,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.paste_after",
        handler=editing_actions.paste_after,
        description="Paste the register after the cursor or line",
    ),
    ActionRef(
        id="edit.paste_before",
        handler=editing_actions.paste_before,
        description="Paste the register before the cursor or line",
    ),
    ActionRef(
        id="edit.newline",
        handler=editing_actions.insert_newline,
        description="Insert a line break",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.backspace,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=editing_actions.delete_forward,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="operator.delete",
        handler=operator_actions.begin_delete,
        description="Start a delete operator",
    ),
    ActionRef(
        id="operator.yank",
        handler=operator_actions.begin_yank,
        description="Start a yank operator",
    ),
    ActionRef(
        id="operator.change",
        handler=operator_actions.begin_change,
        description="Start a change operator",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(
        id="command.cancel_line",
        handler=command_actions.cancel_command_line,
        description="Discard the command line",
    ),
    ActionRef(
        id="command.backspace",
        handler=command_actions.command_backspace,
        description="Delete the last command-line character",
    ),
)


def _bind(mode: str, name: str, key: str, action_id: str, description: str) -> Binding:
    return Binding(
        id=f"{mode}.{name}",
        mode=mode,
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "left", "h", "motion.left", "Move left"),
    _bind("normal", "left_arrow", "LEFT", "motion.left", "Move left"),
    _bind("normal", "right", "l", "motion.right", "Move right"),
    _bind("normal", "right_arrow", "RIGHT", "motion.right", "Move right"),
    _bind("normal", "up", "k", "motion.up", "Move up"),
    _bind("normal", "up_arrow", "UP", "motion.up", "Move up"),
    _bind("normal", "down", "j", "motion.down", "Move down"),
    _bind("normal", "down_arrow", "DOWN", "motion.down", "Move down"),
    _bind("normal", "word_forward", "w", "motion.word_forward", "Next word"),
    _bind("normal", "word_backward", "b", "motion.word_backward", "Previous word"),
    _bind("normal", "line_start", "0", "motion.line_start", "Line start"),
    _bind("normal", "line_end", "$", "motion.line_end", "Line end"),
    _bind("normal", "line_end_shifted", "shift+4", "motion.line_end", "Line end"),
    _bind("normal", "delete_char", "x", "edit.delete_char", "Delete character"),
    _bind("normal", "paste_after", "p", "edit.paste_after", "Paste after"),
    _bind("normal", "paste_before", "shift+p", "edit.paste_before", "Paste before"),
    _bind("normal", "enter_insert", "i", "core.enter_insert", "Insert"),
    _bind("normal", "append", "a", "core.append", "Append"),
    _bind("normal", "insert_line_start", "shift+i", "core.insert_line_start", "Insert at line start"),
    _bind("normal", "append_line_end", "shift+a", "core.append_line_end", "Append at line end"),
    _bind("normal", "open_below", "o", "core.open_below", "Open line below"),
    _bind("normal", "open_above", "shift+o", "core.open_above", "Open line above"),
    _bind("normal", "enter_command", ":", "core.enter_command", "Command line"),
    _bind("normal", "delete", "d", "operator.delete", "Delete operator"),
    _bind("normal", "yank", "y", "operator.yank", "Yank operator"),
    _bind("normal", "change", "c", "operator.change", "Change operator"),
    _bind("insert", "exit_escape", "ESC", "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", "newline_enter", "ENTER", "edit.newline", "Line break"),
    _bind("insert", "newline_return", "RETURN", "edit.newline", "Line break"),
    _bind("insert", "backspace", "BACKSPACE", "edit.backspace", "Delete backward"),
    _bind("insert", "delete", "DELETE", "edit.delete_forward", "Delete forward"),
    _bind("insert", "left", "LEFT", "motion.left", "Move left"),
    _bind("insert", "right", "RIGHT", "motion.right", "Move right"),
    _bind("insert", "up", "UP", "motion.up", "Move up"),
    _bind("insert", "down", "DOWN", "motion.down", "Move down"),
    _bind("insert", "home", "HOME", "motion.line_start", "Line start"),
    _bind("insert", "end", "END", "motion.line_end", "Line end"),
    _bind("command", "exit_escape", "ESC", "command.cancel_line", "Cancel command line"),
    _bind("command", "submit_enter", "ENTER", "command.submit_line", "Submit the command line"),
    _bind("command", "submit_return", "RETURN", "command.submit_line", "Submit the command line"),
    _bind("command", "backspace", "BACKSPACE", "command.backspace", "Delete last character"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode.

    Bindings whose action was filtered out are skipped rather than failing.
    ``per_mode_overrides`` always replace whatever they collide with.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    registered: set[str] = set()
    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)
        registered.add(action.id)

    for binding in DEFAULT_BINDINGS:
        if binding.action_id not in registered:
            continue
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
