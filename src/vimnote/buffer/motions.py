"""Pure boundary computations shared by cursor motions and operators.

Every function takes the document text and a codepoint offset and returns an
offset (or span) inside ``[0, len(text)]``. Nothing here mutates state.
"""

from __future__ import annotations

from typing import Optional, Tuple

Span = Tuple[int, int]


def is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def line_start(text: str, position: int) -> int:
    """Offset just after the ``\\n`` preceding ``position`` (or 0)."""

    return text.rfind("\n", 0, position) + 1


def line_end(text: str, position: int) -> int:
    """Offset of the terminator ending the current line (or ``len(text)``)."""

    index = text.find("\n", position)
    return len(text) if index == -1 else index


def line_end_inclusive(text: str, position: int) -> int:
    """Like ``line_end`` but past the terminator when there is one."""

    index = text.find("\n", position)
    return len(text) if index == -1 else index + 1


def line_and_column(text: str, position: int) -> Tuple[int, int]:
    return text.count("\n", 0, position), position - line_start(text, position)


def step_left(text: str, position: int) -> int:
    del text
    return max(0, position - 1)


def step_right(text: str, position: int) -> int:
    return min(len(text), position + 1)


def word_forward_end(text: str, position: int) -> int:
    """Skip the non-whitespace run at ``position``, then the whitespace after it."""

    size = len(text)
    index = position
    while index < size and not text[index].isspace():
        index += 1
    while index < size and text[index].isspace():
        index += 1
    return index


def word_backward_start(text: str, position: int) -> int:
    index = position
    while index > 0 and text[index - 1].isspace():
        index -= 1
    while index > 0 and not text[index - 1].isspace():
        index -= 1
    return index


def inner_word_span(text: str, position: int) -> Span:
    """Word-character run around ``position``, or the single codepoint there.

    Returns an empty span at ``position`` when it is the end of the document.
    """

    if position >= len(text):
        return (position, position)
    if not is_word_char(text[position]):
        return (position, position + 1)
    start = position
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    end = position
    while end < len(text) and is_word_char(text[end]):
        end += 1
    return (start, end)


def line_span(text: str, position: int) -> Span:
    """Content span of the current line, terminator excluded."""

    return (line_start(text, position), line_end(text, position))


def next_line_position(text: str, position: int, column: int) -> Optional[int]:
    terminator = text.find("\n", position)
    if terminator == -1:
        return None
    start = terminator + 1
    length = line_end(text, start) - start
    return start + min(column, length)


def previous_line_position(text: str, position: int, column: int) -> Optional[int]:
    current = line_start(text, position)
    if current == 0:
        return None
    start = line_start(text, current - 1)
    length = (current - 1) - start
    return start + min(column, length)


__all__ = [
    "Span",
    "is_word_char",
    "line_start",
    "line_end",
    "line_end_inclusive",
    "line_and_column",
    "line_span",
    "step_left",
    "step_right",
    "word_forward_end",
    "word_backward_start",
    "inner_word_span",
    "next_line_position",
    "previous_line_position",
]
