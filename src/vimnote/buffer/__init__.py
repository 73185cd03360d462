"""Text storage, cursor state, register, and boundary motions."""

from . import motions
from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import Document
from .registers import Register
from .state import CursorState, Location

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferView",
    "CursorState",
    "Document",
    "Location",
    "Register",
    "Transaction",
    "motions",
]
