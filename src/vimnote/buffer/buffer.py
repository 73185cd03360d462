"""High-level buffer façade combining document, cursor, and register."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from vimnote.runtime import telemetry

from .document import Document
from .registers import Register
from .state import CursorState, Location


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    position: int
    location: Location


@dataclass(slots=True)
class BufferDelta:
    version: int
    removed: str
    inserted: str
    start: int
    cursor: int
    label: str


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        cursor: Optional[CursorState] = None,
        register: Optional[Register] = None,
    ) -> None:
        self.name = name
        self.document = document if document is not None else Document()
        self.cursor = cursor or CursorState()
        self.register = register or Register()
        self.cursor.place(self.document.text, self.cursor.position)

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=Document.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def position(self) -> int:
        return self.cursor.position

    @property
    def byte_position(self) -> int:
        return self.document.byte_offset(self.cursor.position)

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            position=self.cursor.position,
            location=self.cursor.location,
        )

    def load(self, text: str) -> None:
        """Adopt a fresh document; the register is deliberately kept."""

        with telemetry.span(
            "buffer::load",
            component=True,
            metadata={"buffer": self.name, "length": len(text)},
        ):
            self.document = Document.from_text(text)
            self.cursor.reset()

    def move_to(self, position: int) -> None:
        """Horizontal placement: the desired column follows the cursor."""

        self.cursor.place(self.document.text, position)

    def move_vertically(self, position: int) -> None:
        """Vertical placement: the desired column is left untouched."""

        self.cursor.place(self.document.text, position, sticky=True)

    def replace_range(
        self,
        start: int,
        end: int,
        text: str,
        *,
        label: str,
        cursor: Optional[int] = None,
    ) -> BufferDelta:
        start = self.document.clamp(start)
        end = self.document.clamp(end)
        if start > end:
            start, end = end, start
        with Transaction(self, label):
            removed = self.document.replace(start, end, text)
            target = start + len(text) if cursor is None else cursor
            self.move_to(target)
        return BufferDelta(
            version=self.document.version,
            removed=removed,
            inserted=text,
            start=start,
            cursor=self.cursor.position,
            label=label,
        )

    def insert_text(
        self, text: str, *, at: Optional[int] = None, label: str = "insert_text"
    ) -> BufferDelta:
        position = self.cursor.position if at is None else at
        return self.replace_range(position, position, text, label=label)

    def delete_range(
        self,
        start: int,
        end: int,
        *,
        label: str = "delete_range",
        cursor: Optional[int] = None,
    ) -> BufferDelta:
        return self.replace_range(start, end, "", label=label, cursor=cursor)

    def get_text_range(self, start: int, end: int) -> str:
        return self.document.slice(start, end)


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single edit in a telemetry span labelled after the edit."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
