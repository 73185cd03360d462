"""Declarative keymap models, registry, and resolver.

Default bindings live in ``vimnote.keymaps.defaults``; that module depends on
the action layer and is imported explicitly by hosts.
"""

from .models import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    WhenClause,
    make_token,
    normalize_key,
)
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "make_token",
    "normalize_key",
]
