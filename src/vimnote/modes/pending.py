"""Tagged state for an operator waiting on its motion key."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Operator(str, Enum):
    DELETE = "d"
    YANK = "y"
    CHANGE = "c"

    @property
    def key(self) -> str:
        return self.value


@dataclass(slots=True)
class PendingOperator:
    """``operator`` is ``None`` whenever no operator sequence is in flight."""

    operator: Optional[Operator] = None
    expecting_inner: bool = False

    @property
    def active(self) -> bool:
        return self.operator is not None

    @property
    def label(self) -> str:
        if self.operator is None:
            return ""
        return self.operator.key + ("i" if self.expecting_inner else "")

    def begin(self, operator: Operator) -> None:
        self.operator = operator
        self.expecting_inner = False

    def clear(self) -> None:
        self.operator = None
        self.expecting_inner = False
