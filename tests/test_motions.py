from __future__ import annotations

import pytest

from vimnote.buffer import motions


@pytest.mark.parametrize(
    ("text", "position", "expected"),
    [
        ("hello world", 0, 6),
        ("hello world", 5, 6),
        ("hello   world", 2, 8),
        ("hello", 2, 5),
        ("hello", 5, 5),
        ("", 0, 0),
        ("a\n  b", 0, 4),
    ],
)
def test_word_forward_end(text: str, position: int, expected: int) -> None:
    assert motions.word_forward_end(text, position) == expected


@pytest.mark.parametrize(
    ("text", "position", "expected"),
    [
        ("hello world", 8, 6),
        ("hello world", 6, 0),
        ("hello   world", 8, 0),
        ("hello", 0, 0),
    ],
)
def test_word_backward_start(text: str, position: int, expected: int) -> None:
    assert motions.word_backward_start(text, position) == expected


def test_inner_word_span_on_word_character() -> None:
    assert motions.inner_word_span("hello world", 2) == (0, 5)
    assert motions.inner_word_span("foo_bar9 x", 4) == (0, 8)


def test_inner_word_span_on_separator_is_single_codepoint() -> None:
    assert motions.inner_word_span("hello world", 5) == (5, 6)
    assert motions.inner_word_span("a, b", 1) == (1, 2)


def test_inner_word_span_at_end_is_empty() -> None:
    assert motions.inner_word_span("abc", 3) == (3, 3)
    assert motions.inner_word_span("", 0) == (0, 0)


def test_inner_word_span_treats_unicode_letters_as_word() -> None:
    text = "naïve café"
    assert motions.inner_word_span(text, 2) == (0, 5)
    assert motions.inner_word_span(text, 8) == (6, 10)


def test_line_boundaries() -> None:
    text = "one\ntwo\nthree"

    assert motions.line_start(text, 5) == 4
    assert motions.line_end(text, 5) == 7
    assert motions.line_end_inclusive(text, 5) == 8
    assert motions.line_span(text, 10) == (8, 13)
    assert motions.line_end_inclusive(text, 10) == 13
    assert motions.line_start(text, 4) == 4
    assert motions.line_start(text, 3) == 0


def test_line_and_column() -> None:
    text = "ab\n\ncdef"

    assert motions.line_and_column(text, 0) == (0, 0)
    assert motions.line_and_column(text, 2) == (0, 2)
    assert motions.line_and_column(text, 3) == (1, 0)
    assert motions.line_and_column(text, 7) == (2, 3)


def test_step_motions_clamp() -> None:
    assert motions.step_left("abc", 0) == 0
    assert motions.step_left("abc", 2) == 1
    assert motions.step_right("abc", 3) == 3
    assert motions.step_right("abc", 1) == 2


def test_next_line_position_clamps_to_line_length() -> None:
    text = "abcdef\nab\n\nhello"

    assert motions.next_line_position(text, 4, 4) == 9
    assert motions.next_line_position(text, 9, 4) == 10
    assert motions.next_line_position(text, 10, 4) == 15
    assert motions.next_line_position(text, 12, 4) is None


def test_previous_line_position_clamps_to_line_length() -> None:
    text = "abcdef\nab\n\nhello"

    assert motions.previous_line_position(text, 15, 4) == 10
    assert motions.previous_line_position(text, 10, 4) == 9
    assert motions.previous_line_position(text, 9, 4) == 4
    assert motions.previous_line_position(text, 4, 4) is None


def test_trailing_newline_opens_an_empty_last_line() -> None:
    assert motions.next_line_position("abc\n", 1, 1) == 4
    assert motions.previous_line_position("abc\n", 4, 1) == 1
