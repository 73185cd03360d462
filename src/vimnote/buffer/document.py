"""Core document storage for vimnote buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Document:
    """Mutable text addressed by codepoint offsets.

    Offsets index the underlying ``str`` directly, so any offset in
    ``[0, len(document)]`` is a scalar boundary. ``byte_offset`` translates an
    offset into the UTF-8 position a byte-addressing host would use.
    """

    _text: str = ""
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "Document":
        if not isinstance(text, str):
            raise TypeError(f"Document text must be str, not {type(text).__name__}")
        return cls(_text=text)

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._text)))

    def slice(self, start: int, end: int) -> str:
        start, end = sorted((self.clamp(start), self.clamp(end)))
        return self._text[start:end]

    def replace(self, start: int, end: int, text: str) -> str:
        """Replace ``[start:end]`` with ``text`` and return what was removed."""

        start, end = sorted((self.clamp(start), self.clamp(end)))
        removed = self._text[start:end]
        self._text = self._text[:start] + text + self._text[end:]
        self.version += 1
        self.dirty = True
        return removed

    def byte_offset(self, offset: int) -> int:
        prefix = self._text[: self.clamp(offset)]
        return len(prefix.encode("utf-8", "surrogatepass"))
