from __future__ import annotations

from vimnote.host import EditorEngine


def press(engine: EditorEngine, *keys: str) -> None:
    for key in keys:
        engine.handle_key(key)


def test_dd_on_single_line_without_terminator_clears_document() -> None:
    engine = EditorEngine("hello")
    engine.set_cursor(3)

    press(engine, "d", "d")

    assert engine.text == ""
    assert engine.cursor_position == 0
    assert engine.register_text == "hello\n"


def test_dd_removes_line_and_terminator() -> None:
    engine = EditorEngine("one\ntwo\nthree")
    engine.set_cursor(5)

    press(engine, "d", "d")

    assert engine.text == "one\nthree"
    assert engine.cursor_location == (1, 0)
    assert engine.register_text == "two\n"


def test_dd_on_last_line_takes_preceding_terminator() -> None:
    engine = EditorEngine("one\ntwo")
    engine.set_cursor(5)

    press(engine, "d", "d")

    assert engine.text == "one"
    assert engine.cursor_position == 0
    assert engine.register_text == "two\n"


def test_yy_copies_line_without_mutation() -> None:
    engine = EditorEngine("one\ntwo")
    engine.set_cursor(5)

    press(engine, "y", "y")

    assert engine.text == "one\ntwo"
    assert engine.register_text == "two\n"
    assert engine.cursor_position == 5


def test_yy_then_p_duplicates_line_below() -> None:
    engine = EditorEngine("one\ntwo")
    engine.set_cursor(1)

    press(engine, "y", "y", "p")

    assert engine.text == "one\none\ntwo"
    assert engine.register_text == "one\n"
    assert engine.cursor_position == 8


def test_yy_then_p_on_last_line() -> None:
    engine = EditorEngine("one\ntwo")
    engine.set_cursor(5)

    press(engine, "y", "y", "p")

    assert engine.text == "one\ntwo\ntwo"
    assert engine.register_text == "two\n"


def test_cc_clears_line_content_and_enters_insert() -> None:
    engine = EditorEngine("one\ntwo\nthree")
    engine.set_cursor(6)

    press(engine, "c", "c")

    assert engine.text == "one\n\nthree"
    assert engine.cursor_position == 4
    assert engine.register_text == "two"
    assert engine.mode == "insert"


def test_dw_deletes_to_next_word() -> None:
    engine = EditorEngine("hello world")

    press(engine, "d", "w")

    assert engine.text == "world"
    assert engine.register_text == "hello "
    assert engine.cursor_position == 0
    assert engine.mode == "normal"


def test_yw_keeps_text() -> None:
    engine = EditorEngine("hello world")
    engine.set_cursor(6)

    press(engine, "y", "w")

    assert engine.text == "hello world"
    assert engine.register_text == "world"
    assert engine.cursor_position == 6


def test_diw_on_word_removes_word() -> None:
    engine = EditorEngine("hello world")

    press(engine, "d", "i", "w")

    assert engine.text == " world"
    assert engine.register_text == "hello"
    assert engine.cursor_position == 0


def test_diw_on_space_removes_single_space() -> None:
    engine = EditorEngine("hello world")
    engine.set_cursor(5)

    press(engine, "d", "i", "w")

    assert engine.text == "helloworld"
    assert engine.register_text == " "
    assert engine.cursor_position == 5


def test_ciw_replaces_word_in_insert_mode() -> None:
    engine = EditorEngine("say hello there")
    engine.set_cursor(6)

    press(engine, "c", "i", "w")
    engine.handle_text("w")
    engine.handle_text("bye")

    assert engine.text == "say bye there"
    assert engine.register_text == "hello"
    assert engine.mode == "insert"


def test_change_with_empty_span_still_enters_insert() -> None:
    engine = EditorEngine("abc")
    engine.buffer.register.store("kept")
    engine.set_cursor(3)

    press(engine, "c", "w")

    assert engine.text == "abc"
    assert engine.register_text == "kept"
    assert engine.mode == "insert"


def test_delete_with_empty_span_leaves_register() -> None:
    engine = EditorEngine("abc")
    engine.buffer.register.store("kept")
    engine.set_cursor(3)
    stored: list[object] = []
    engine.subscribe("register.store", stored.append)

    press(engine, "d", "i", "w")

    assert engine.text == "abc"
    assert engine.register_text == "kept"
    assert stored == []


def test_register_store_event_carries_text() -> None:
    engine = EditorEngine("alpha beta")
    stored: list[object] = []
    engine.subscribe("register.store", stored.append)

    press(engine, "y", "w")

    assert stored == [{"operator": "y", "motion": "word", "text": "alpha "}]


def test_pending_operator_label() -> None:
    engine = EditorEngine("abc")

    press(engine, "d")
    assert engine.mode_label == "NORMAL (d)"

    press(engine, "i")
    assert engine.mode_label == "NORMAL (di)"

    press(engine, "w")
    assert engine.mode_label == "NORMAL"


def test_unrelated_key_abandons_operator_and_runs_as_normal_key() -> None:
    engine = EditorEngine("abc")

    press(engine, "d", "l")

    assert engine.text == "abc"
    assert engine.cursor_position == 1
    assert engine.operator_pending is False


def test_yank_then_i_enters_insert() -> None:
    engine = EditorEngine("abc")

    press(engine, "y", "i")

    assert engine.mode == "insert"
    assert engine.register_text == ""
    assert engine.operator_pending is False


def test_inner_lookahead_abandons_on_other_key() -> None:
    engine = EditorEngine("abc def")

    press(engine, "d", "i", "x")

    assert engine.text == "bc def"
    assert engine.register_text == ""
    assert engine.operator_pending is False


def test_escape_abandons_operator_without_consuming() -> None:
    engine = EditorEngine("abc")

    press(engine, "c")
    outcome = engine.handle_key("ESC")

    assert outcome.consumed is False
    assert engine.operator_pending is False
    assert engine.mode == "normal"
    assert engine.text == "abc"


def test_operator_overwrites_register() -> None:
    engine = EditorEngine("one two")

    press(engine, "y", "w", "w", "d", "i", "w")

    assert engine.register_text == "two"
    assert engine.text == "one "


def test_cc_on_empty_line_keeps_register() -> None:
    engine = EditorEngine("abc\n\nx")
    stored: list[object] = []
    engine.subscribe("register.store", stored.append)

    press(engine, "y", "y", "j")
    stored.clear()
    press(engine, "c", "c", "ESC", "p")

    assert engine.register_text == "abc\n"
    assert stored == []
    assert engine.text == "abc\nabc\n\nx"
