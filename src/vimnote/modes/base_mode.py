"""Base classes and shared value types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from vimnote.buffer import Buffer
from vimnote.keymaps.models import make_token, normalize_key

from .pending import PendingOperator


class HostAction(str, Enum):
    """Requests the engine hands back to its host; the engine never acts on them."""

    SAVE = "save"
    QUIT = "quit"
    SAVE_QUIT = "save_quit"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``text`` is the character the host says the key typed, if any. It is only
    used to recognise the matching text-input event that follows a mode switch.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        self.key, self.modifiers = normalize_key(self.key, self.modifiers)

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @property
    def shift(self) -> bool:
        return "shift" in self.modifiers

    @property
    def typed(self) -> Optional[str]:
        if self.text is not None:
            return self.text
        if len(self.key) == 1 and not {"ctrl", "alt"} & set(self.modifiers):
            return self.key.upper() if self.shift else self.key
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key`` / ``Mode.handle_text``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    action: Optional[HostAction] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    bus: "ModeBus"
    operator: PendingOperator = field(default_factory=PendingOperator)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def label(self) -> str:
        return self.name.upper()

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError

    def handle_text(self, text: str) -> ModeResult:
        del text
        return ModeResult(consumed=False, status="ignored")
