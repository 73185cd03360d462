from __future__ import annotations

import pytest

from vimnote.actions.command import parse_command_line
from vimnote.host import EditorEngine
from vimnote.modes import HostAction


def type_keys(engine: EditorEngine, keys: str) -> None:
    """Deliver each character as a key event followed by its text event."""

    for char in keys:
        engine.handle_key(char)
        engine.handle_text(char)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        (":w", HostAction.SAVE),
        (":q", HostAction.QUIT),
        (":wq", HostAction.SAVE_QUIT),
        (":x", None),
        (":w ", None),
        ("w", None),
        (":", None),
        ("", None),
    ],
)
def test_parse_command_line(line: str, expected: HostAction | None) -> None:
    assert parse_command_line(line) == expected


def test_colon_enters_command_mode_with_prompt() -> None:
    engine = EditorEngine("text")

    type_keys(engine, ":")

    assert engine.mode == "command"
    assert engine.mode_label == ":"


def test_quit_command_returns_action_and_normal_mode() -> None:
    engine = EditorEngine("text")
    type_keys(engine, ":q")

    outcome = engine.handle_key("ENTER")

    assert outcome.consumed is True
    assert outcome.action is HostAction.QUIT
    assert engine.mode == "normal"
    assert engine.mode_label == "NORMAL"


def test_write_quit_command() -> None:
    engine = EditorEngine("text")
    type_keys(engine, ":wq")

    outcome = engine.handle_key("RETURN")

    assert outcome.action is HostAction.SAVE_QUIT
    assert engine.text == "text"


def test_unknown_command_yields_no_action() -> None:
    engine = EditorEngine()
    type_keys(engine, ":wat")

    outcome = engine.handle_key("ENTER")

    assert outcome.consumed is True
    assert outcome.action is None
    assert engine.mode == "normal"


def test_backspace_never_removes_prompt() -> None:
    engine = EditorEngine()
    type_keys(engine, ":w")

    engine.handle_key("BACKSPACE")
    assert engine.mode_label == ":"

    engine.handle_key("BACKSPACE")
    assert engine.mode_label == ":"
    assert engine.mode == "command"


def test_escape_discards_command() -> None:
    engine = EditorEngine()
    type_keys(engine, ":w")

    outcome = engine.handle_key("ESC")

    assert outcome.consumed is True
    assert outcome.action is None
    assert engine.mode == "normal"

    type_keys(engine, ":")
    assert engine.mode_label == ":"


def test_command_text_skips_control_characters() -> None:
    engine = EditorEngine()
    type_keys(engine, ":")

    engine.handle_text("w\tq")

    assert engine.mode_label == ":wq"


def test_host_action_event_published() -> None:
    engine = EditorEngine()
    actions: list[object] = []
    engine.subscribe("host.action", actions.append)
    type_keys(engine, ":w")

    engine.handle_key("ENTER")

    assert actions == [HostAction.SAVE]
