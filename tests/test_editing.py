from __future__ import annotations

import pytest

from vimnote.host import EditorEngine


def press(engine: EditorEngine, *keys: str) -> None:
    for key in keys:
        engine.handle_key(key)


def engine_with_register(text: str, register: str, cursor: int = 0) -> EditorEngine:
    engine = EditorEngine(text)
    engine.buffer.register.store(register)
    engine.set_cursor(cursor)
    return engine


def test_charwise_paste_after_cursor() -> None:
    engine = engine_with_register("abc", "XY", cursor=1)

    press(engine, "p")

    assert engine.text == "abXYc"
    assert engine.cursor_position == 4
    assert engine.register_text == "XY"


def test_charwise_paste_before_with_shift() -> None:
    engine = engine_with_register("abc", "XY", cursor=1)

    engine.handle_key("p", modifiers=("shift",))

    assert engine.text == "aXYbc"
    assert engine.cursor_position == 3


def test_charwise_paste_at_end_of_document() -> None:
    engine = engine_with_register("abc", "XY", cursor=3)

    press(engine, "p")

    assert engine.text == "abcXY"
    assert engine.cursor_position == 5


def test_linewise_paste_above() -> None:
    engine = engine_with_register("one\ntwo", "new\n", cursor=5)

    press(engine, "P")

    assert engine.text == "one\nnew\ntwo"
    assert engine.cursor_position == 8


def test_linewise_paste_inserts_register_unchanged() -> None:
    engine = engine_with_register("one\ntwo", "a\nb", cursor=0)

    press(engine, "p")

    assert engine.text == "one\na\nbtwo"


def test_paste_of_word_deleted_across_line_break() -> None:
    engine = EditorEngine("foo\n  bar\nzz")

    press(engine, "d", "w")
    assert engine.register_text == "foo\n  "

    press(engine, "p")

    assert engine.text == "bar\nfoo\n  zz"


def test_linewise_paste_below_trailing_empty_line() -> None:
    engine = engine_with_register("one\n", "x\n", cursor=4)

    press(engine, "p")

    assert engine.text == "one\n\nx"


def test_paste_with_empty_register_is_consumed_noop() -> None:
    engine = EditorEngine("abc")

    outcome = engine.handle_key("p")

    assert outcome.consumed is True
    assert engine.text == "abc"


def test_x_deletes_without_touching_register() -> None:
    engine = engine_with_register("abc", "kept", cursor=2)

    press(engine, "x")
    assert engine.text == "ab"
    assert engine.cursor_position == 2

    press(engine, "x")
    assert engine.text == "ab"
    assert engine.register_text == "kept"


def test_horizontal_motions_clamp() -> None:
    engine = EditorEngine("ab")

    press(engine, "h")
    assert engine.cursor_position == 0

    press(engine, "l", "l", "l")
    assert engine.cursor_position == 2

    press(engine, "LEFT")
    assert engine.cursor_position == 1


def test_desired_column_survives_short_lines() -> None:
    engine = EditorEngine("abcdef\nab\n\nhello")
    engine.set_cursor(4)
    columns = []

    for key in ("j", "j", "k", "k"):
        press(engine, key)
        columns.append(engine.cursor_location)

    assert columns == [(1, 2), (2, 0), (1, 2), (0, 4)]


def test_horizontal_motion_resets_desired_column() -> None:
    engine = EditorEngine("abcdef\nab\nabcdef")
    engine.set_cursor(5)

    press(engine, "j", "h", "j")

    assert engine.cursor_location == (2, 1)


def test_vertical_motion_at_edges_is_consumed_noop() -> None:
    engine = EditorEngine("one\ntwo")

    up = engine.handle_key("k")
    assert up.consumed is True
    assert engine.cursor_position == 0

    engine.set_cursor(6)
    down = engine.handle_key("DOWN")
    assert down.consumed is True
    assert engine.cursor_position == 6


def test_word_motion_at_end_is_consumed_noop() -> None:
    engine = EditorEngine("abc")
    engine.set_cursor(3)

    outcome = engine.handle_key("w")

    assert outcome.consumed is True
    assert engine.cursor_position == 3


def test_word_motions() -> None:
    engine = EditorEngine("one two  three")

    press(engine, "w")
    assert engine.cursor_position == 4
    press(engine, "w")
    assert engine.cursor_position == 9
    press(engine, "b", "b")
    assert engine.cursor_position == 0
    outcome = engine.handle_key("b")
    assert outcome.consumed is True
    assert engine.cursor_position == 0


@pytest.mark.parametrize("key,modifiers", [("$", ()), ("$", ("shift",)), ("4", ("shift",))])
def test_line_end_keys(key: str, modifiers: tuple[str, ...]) -> None:
    engine = EditorEngine("abc\ndef")
    engine.set_cursor(1)

    engine.handle_key(key, modifiers=modifiers)

    assert engine.cursor_position == 3


def test_line_start_key() -> None:
    engine = EditorEngine("abc\ndef")
    engine.set_cursor(6)

    press(engine, "0")

    assert engine.cursor_position == 4


def test_motions_count_codepoints() -> None:
    engine = EditorEngine("é😀x")

    press(engine, "l", "l")

    assert engine.cursor_position == 2
    assert engine.cursor_location == (0, 2)
    assert engine.byte_position == 6


@pytest.mark.parametrize(
    "key,expected_cursor",
    [("i", 1), ("a", 2), ("I", 0), ("A", 3)],
)
def test_insert_entry_points(key: str, expected_cursor: int) -> None:
    engine = EditorEngine("abc")
    engine.set_cursor(1)

    engine.handle_key(key)

    assert engine.mode == "insert"
    assert engine.cursor_position == expected_cursor


def test_append_does_not_pass_end() -> None:
    engine = EditorEngine("abc")
    engine.set_cursor(3)

    press(engine, "a")

    assert engine.cursor_position == 3


def test_open_line_below_and_above() -> None:
    below = EditorEngine("one\ntwo")
    press(below, "o")
    assert below.text == "one\n\ntwo"
    assert below.cursor_location == (1, 0)
    assert below.mode == "insert"

    above = EditorEngine("one\ntwo")
    above.set_cursor(5)
    press(above, "O")
    assert above.text == "one\n\ntwo"
    assert above.cursor_location == (1, 0)
    assert above.mode == "insert"


def test_insert_mode_editing_keys() -> None:
    engine = EditorEngine("")
    press(engine, "i")

    engine.handle_text("héllo")
    engine.handle_key("ENTER")
    engine.handle_text("x")
    engine.handle_key("BACKSPACE")
    engine.handle_key("BACKSPACE")
    engine.handle_key("HOME")
    engine.handle_key("DELETE")

    assert engine.text == "éllo"
    assert engine.cursor_position == 0


def test_insert_mode_backspace_and_delete_at_edges() -> None:
    engine = EditorEngine("ab")
    engine.open_for_editing()

    engine.handle_key("BACKSPACE")
    engine.handle_key("END")
    engine.handle_key("DELETE")

    assert engine.text == "ab"
    assert engine.cursor_position == 2


def test_insert_mode_unbound_key_not_consumed() -> None:
    engine = EditorEngine("ab")
    engine.open_for_editing()

    outcome = engine.handle_key("x")

    assert outcome.consumed is False
    assert engine.text == "ab"


def test_escape_from_insert_steps_back() -> None:
    engine = EditorEngine("")
    press(engine, "i")
    engine.handle_text("abc")

    press(engine, "ESC")

    assert engine.mode == "normal"
    assert engine.cursor_position == 2


def test_escape_from_insert_at_start_stays() -> None:
    engine = EditorEngine("abc")
    press(engine, "i", "ESC")

    assert engine.cursor_position == 0
    assert engine.mode == "normal"
