"""Dataclasses describing keymap bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = (m.strip().lower() for m in modifiers)
    return tuple(sorted({m for m in values if m}))


def normalize_key(key: str, modifiers: Iterable[str] = ()) -> tuple[str, tuple[str, ...]]:
    """Canonical ``(key, modifiers)`` for a key press.

    An upper-case letter becomes the lower-case key plus ``shift``. A shifted
    punctuation character (``":"``, ``"$"``) already encodes the shift, so the
    modifier is dropped for it.
    """

    mods = normalize_modifiers(modifiers)
    if len(key) == 1 and key.isalpha() and key.isupper():
        key = key.lower()
        if "shift" not in mods:
            mods = tuple(sorted(mods + ("shift",)))
    elif len(key) == 1 and not key.isalnum() and "shift" in mods:
        mods = tuple(m for m in mods if m != "shift")
    return key, mods


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    key, mods = normalize_key(key, modifiers)
    if mods:
        return "+".join(mods + (key,))
    return key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press used by key sequences."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key, mods = normalize_key(self.key, self.modifiers)
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", mods)

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Parse ``"shift+p"`` style tokens; a lone ``"+"`` is the plus key."""

        if token == "+" or token.endswith("++"):
            head, key = token[:-2], "+"
        else:
            head, _, key = token.rpartition("+")
        modifiers = tuple(part for part in head.split("+") if part)
        return cls(key, modifiers)

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable, non-empty collection of keystrokes."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(strokes=tuple(KeyStroke.parse(key) for key in keys if key))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag condition gating a binding (``"flag"`` or ``"!flag"``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:].strip(), False)
        return cls(expr, True)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named callable invoked as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one mode with an action id."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        clauses = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", clauses)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
    "make_token",
    "normalize_key",
    "normalize_modifiers",
]
