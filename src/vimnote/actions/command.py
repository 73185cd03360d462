"""Actions that edit and evaluate the ``:`` command line."""

from __future__ import annotations

from typing import Dict, Optional

from vimnote.modes.base_mode import HostAction, ModeContext, ModeResult
from vimnote.modes.command_mode import PROMPT, command_state
from vimnote.runtime import telemetry

_COMMANDS: Dict[str, HostAction] = {
    ":w": HostAction.SAVE,
    ":q": HostAction.QUIT,
    ":wq": HostAction.SAVE_QUIT,
}


def parse_command_line(text: str) -> Optional[HostAction]:
    """Map a complete command buffer onto a host action.

    The vocabulary is fixed and matched exactly; anything else, including
    surrounding whitespace or arguments, yields ``None``.
    """

    return _COMMANDS.get(text)


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = command_state(context)
    text = str(state.get("text", ""))
    context.bus.emit("command.submit", text)
    action = parse_command_line(text)
    telemetry.record_event(
        "command.parsed",
        level="debug",
        data={"command": text, "action": action.value if action else "none"},
    )
    if action is None:
        return ModeResult(
            consumed=True, switch_to="normal", status="command_unknown", message=text
        )
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status=f"command_{action.value}",
        message=text,
        action=action,
    )


def cancel_command_line(context: ModeContext, match) -> ModeResult:
    """Leave without a host action; ``CommandMode.on_exit`` discards the line."""

    del context, match
    return ModeResult(consumed=True, switch_to="normal", status="command_cancel")


def command_backspace(context: ModeContext, match) -> ModeResult:
    """Remove the last typed character; the leading ``:`` always stays."""

    del match
    state = command_state(context)
    text = str(state.get("text", ""))
    if len(text) > len(PROMPT):
        state["text"] = text[:-1]
    return ModeResult(consumed=True, status="editing")


__all__ = [
    "parse_command_line",
    "submit_command_line",
    "cancel_command_line",
    "command_backspace",
]
