"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from typing import MutableMapping, cast

from .base_mode import ModeContext, ModeResult
from .keymap_helpers import KeymapMode, update_flag

PROMPT = ":"


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    return state


class CommandMode(KeymapMode):
    """Collects a ``:``-prefixed line; Enter/Escape/Backspace come from keymaps."""

    name = "command"

    def on_enter(self, previous: str | None) -> None:
        del previous
        command_state(self.context)["text"] = PROMPT
        update_flag(self.context, "command_active", True)
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        state = command_state(self.context)
        last = str(state.get("text", ""))
        state["text"] = ""
        update_flag(self.context, "command_active", False)
        self.context.bus.emit("command.end", last)

    @property
    def current_command(self) -> str:
        return str(command_state(self.context).get("text", ""))

    @property
    def label(self) -> str:
        return self.current_command

    def handle_text(self, text: str) -> ModeResult:
        typed = "".join(ch for ch in text if ch >= " ")
        if not typed:
            return ModeResult(consumed=False, status="ignored")
        command_state(self.context)["text"] = self.current_command + typed
        return ModeResult(consumed=True, status="editing")


__all__ = ["CommandMode", "command_state", "PROMPT"]
