"""Mode manager coordinating the Normal/Insert/Command handlers."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vimnote.keymaps import KeymapRegistry, KeymapResolver
from vimnote.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import update_flag


class ModeManager:
    """Owns the active mode, applies transitions, and dispatches events.

    The manager also holds the one-shot suppression token. A key that moves
    the editor out of Normal mode usually reaches the host a second time as a
    text event; the token lets exactly that echo be dropped.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._suppressed: Optional[str] = None
        self.logger = telemetry.get_logger("vimnote.modes")
        if keymap_registry is None and keymap_resolver is not None:
            keymap_registry = keymap_resolver.registry
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vimnote.keymaps"
        )
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vimnote.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("keymap_flags", {})
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    @property
    def suppressed_text(self) -> Optional[str]:
        return self._suppressed

    def get_mode(self, name: str) -> Mode:
        try:
            return self._modes[name]
        except KeyError:
            raise KeyError(f"Unknown mode '{name}'") from None

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        self.context.bus.emit(
            "mode.changed",
            {"previous": previous.name if previous else None, "mode": name},
        )
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def suppress_next_text(self, text: Optional[str]) -> None:
        self._suppressed = text or None

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._require_active()
        # any event consumes the token; only a matching text event is swallowed
        self._suppressed = None
        self._refresh_flags()
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        self._after_mode_result(mode, result)
        if result.switch_to and mode.name == "normal" and self._active != "normal":
            self.suppress_next_text(key.typed)
        return result

    def handle_text(self, text: str) -> ModeResult:
        mode = self._require_active()
        token, self._suppressed = self._suppressed, None
        if token is not None and text == token:
            return ModeResult(consumed=True, status="suppressed", message=text)
        self._refresh_flags()
        with telemetry.span(
            name=f"mode_text::{mode.name}",
            component=True,
            metadata={"mode": mode.name, "length": len(text)},
        ):
            result = mode.handle_text(text)
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        if result.action is not None:
            self.context.bus.emit("host.action", result.action)
        return result

    def _refresh_flags(self) -> None:
        update_flag(self.context, "document_empty", not self.context.buffer.text)

    def _require_active(self) -> Mode:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return mode


__all__ = ["ModeManager"]
