"""UI-agnostic modal text-editing engine."""

from .host import Dispatch, EditorEngine, create_default_manager
from .modes import HostAction

__all__ = [
    "Dispatch",
    "EditorEngine",
    "HostAction",
    "create_default_manager",
    "adapters",
    "actions",
    "buffer",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
