"""Minimal Textual adapter that wires EditorEngine events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from vimnote.buffer import BufferView
from vimnote.host import Dispatch, EditorEngine
from vimnote.modes import HostAction
from vimnote.runtime import telemetry

TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "tab": "TAB",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    on_action: Callable[[HostAction], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def translate_key(
    key: str, character: Optional[str] = None
) -> Tuple[str, Tuple[str, ...], Optional[str]]:
    """Map a Textual key event onto ``(key, modifiers, text)`` for the engine.

    Textual spells keys as ``"ctrl+w"``, ``"escape"``, ``"colon"``; the engine
    wants single characters for printable keys and upper-case names otherwise.
    ``text`` is what the key types, if anything.
    """

    parts = key.split("+") if key != "+" else ["+"]
    name, modifiers = parts[-1], tuple(parts[:-1])
    typed: Optional[str] = None
    if character and (character >= " " or character == "\t"):
        if not {"ctrl", "alt", "meta"} & set(modifiers):
            typed = character

    if name in TEXTUAL_KEY_NAMES:
        return TEXTUAL_KEY_NAMES[name], modifiers, typed
    if typed is not None and len(typed) == 1:
        # the character already carries the shift ("A", ":", "$")
        return typed, tuple(m for m in modifiers if m != "shift"), typed
    return name, modifiers, typed


class TextualVimAdapter:
    """Bridges EditorEngine + bus events to a Textual-friendly surface.

    Each Textual key press is delivered to the engine twice, first as a key
    event and then, when it types something, as a text event. The engine's
    suppression token keeps the key that opened Insert or Command mode from
    also being typed.
    """

    def __init__(self, engine: EditorEngine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self.logger = telemetry.get_logger("vimnote.adapters.textual")
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> Dispatch:
        name, modifiers, typed = translate_key(key, character)
        self._log_state("key ->", key=name, mods=modifiers, text=typed)

        outcome = self.engine.handle_key(name, modifiers=modifiers, text=typed)
        if typed is not None:
            text_outcome = self.engine.handle_text(typed)
            outcome = Dispatch(
                consumed=outcome.consumed or text_outcome.consumed,
                action=outcome.action or text_outcome.action,
            )

        self._refresh()
        if outcome.action is not None:
            self.hooks.on_action(outcome.action)
        self._log_state("result <-", consumed=outcome.consumed, action=outcome.action)
        return outcome

    def load(self, text: str, *, at_end: bool = False, insert: bool = False) -> None:
        self.engine.load_document(text)
        if insert:
            self.engine.open_for_editing(at_end=at_end)
        self._refresh()

    def _subscribe_events(self) -> None:
        for event in (
            "mode.changed",
            "command.start",
            "command.end",
            "command.submit",
            "register.store",
        ):
            self.engine.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.engine.buffer.snapshot())
        self.hooks.update_status(self._status_line())
        command = self.engine.mode_label if self.engine.mode == "command" else ""
        self.hooks.show_command(command)

    def _status_line(self) -> str:
        line, column = self.engine.cursor_location
        return f"{self.engine.mode_label}  {line + 1}:{column + 1}"

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"mode={self.engine.mode!r}"]
        parts.extend(f"{k}={v!r}" for k, v in fields.items() if v is not None)
        self.hooks.log(" ".join(parts))
        self.logger.debug(" ".join(parts))


__all__ = ["TextualVimAdapter", "TextualUIHooks", "translate_key", "TEXTUAL_KEY_NAMES"]
