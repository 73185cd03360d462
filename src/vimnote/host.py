"""Host-facing facade: one object a UI drives with key and text events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from vimnote.buffer import Buffer, Location
from vimnote.keymaps import KeymapRegistry, KeymapResolver
from vimnote.keymaps.defaults import load_default_keymaps
from vimnote.modes import (
    CommandMode,
    HostAction,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeManager,
    ModeResult,
    NormalMode,
)
from vimnote.runtime import telemetry


@dataclass(frozen=True, slots=True)
class Dispatch:
    """Outcome of one event: whether it was used, and any request for the host."""

    consumed: bool
    action: Optional[HostAction] = None


def create_default_manager(
    buffer: Buffer,
    *,
    bus: Optional[ModeBus] = None,
    keymap_registry: Optional[KeymapRegistry] = None,
) -> ModeManager:
    """Wire a ``ModeManager`` with the three editing modes and default keymaps.

    A caller-supplied registry is used as-is; only a fresh one is seeded with
    the built-in bindings.
    """

    context = ModeContext(buffer=buffer, bus=bus or ModeBus())
    registry = keymap_registry
    if registry is None:
        registry = KeymapRegistry(logger_name="vimnote.keymaps")
        load_default_keymaps(registry)
    resolver = KeymapResolver(registry, logger_name="vimnote.keymaps")
    manager = ModeManager(context, keymap_registry=registry, keymap_resolver=resolver)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    return manager


class EditorEngine:
    """Modal editing engine owning one document, cursor and register.

    Every call is synchronous and fully applied before it returns. The engine
    performs no I/O; save and quit requests come back as ``Dispatch.action``.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        keymap_registry: Optional[KeymapRegistry] = None,
    ) -> None:
        self.buffer = Buffer.from_text(text, name=name)
        self.bus = ModeBus()
        self.manager = create_default_manager(
            self.buffer, bus=self.bus, keymap_registry=keymap_registry
        )
        self.logger = telemetry.get_logger("vimnote.host")

    # -- events ---------------------------------------------------------

    def handle_key(
        self,
        key: str,
        *,
        modifiers: Iterable[str] = (),
        text: Optional[str] = None,
    ) -> Dispatch:
        event = KeyInput(key=key, modifiers=tuple(modifiers), text=text)
        return self._dispatch(self.manager.handle_key(event))

    def handle_text(self, text: str) -> Dispatch:
        return self._dispatch(self.manager.handle_text(text))

    def _dispatch(self, result: ModeResult) -> Dispatch:
        if result.action is not None:
            telemetry.record_event(
                "host.action", data={"action": result.action.value}
            )
        return Dispatch(consumed=result.consumed, action=result.action)

    # -- queries --------------------------------------------------------

    @property
    def mode(self) -> str:
        return self.manager.active_name or "normal"

    @property
    def mode_label(self) -> str:
        mode = self.manager.active_mode
        return mode.label if mode is not None else "NORMAL"

    @property
    def cursor_location(self) -> Location:
        return self.buffer.cursor.location

    @property
    def cursor_position(self) -> int:
        return self.buffer.position

    @property
    def byte_position(self) -> int:
        return self.buffer.byte_position

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def register_text(self) -> str:
        return self.buffer.register.text

    @property
    def operator_pending(self) -> bool:
        return self.manager.context.operator.active

    # -- writes ---------------------------------------------------------

    def load_document(self, text: str) -> None:
        """Replace the document; cursor, operator and mode reset, register kept."""

        self.manager.switch_mode("normal")
        normal = self.manager.get_mode("normal")
        if isinstance(normal, NormalMode):
            normal.pipeline.abandon()
        self.manager.suppress_next_text(None)
        self.buffer.load(text)

    def set_mode(self, name: str, *, suppress_text: Optional[str] = None) -> None:
        self.manager.switch_mode(name)
        self.manager.suppress_next_text(suppress_text)

    def set_cursor(self, position: int) -> None:
        self.buffer.move_to(position)

    def open_for_editing(
        self, *, at_end: bool = False, suppress_text: Optional[str] = None
    ) -> None:
        """Position the cursor at the start or end and force Insert mode.

        ``suppress_text`` is the character of the gesture that opened the
        editor, when the host will also deliver it as a text event.
        """

        self.set_cursor(len(self.buffer.text) if at_end else 0)
        self.set_mode("insert", suppress_text=suppress_text)

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self.bus.subscribe(event, callback)


__all__ = ["Dispatch", "EditorEngine", "create_default_manager"]
