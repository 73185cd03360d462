"""Executable Textual app that edits one file with the vimnote engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vimnote.adapters.textual.app"
    ) from exc

from vimnote.buffer import BufferView
from vimnote.host import EditorEngine
from vimnote.modes import HostAction
from vimnote.runtime import telemetry

from .controller import TextualUIHooks, TextualVimAdapter

CURSOR_GLYPH = "█"


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    command_text: str = ""


def render_with_cursor(view: BufferView) -> str:
    """Buffer text with a block glyph drawn over the cursor position."""

    text = view.text
    position = view.position
    if position >= len(text) or text[position] == "\n":
        return text[:position] + CURSOR_GLYPH + text[position:]
    return text[:position] + CURSOR_GLYPH + text[position + 1 :]


class VimnoteApp(App[None]):
    """Single-document editor: ``:w`` saves, ``:q`` quits, ``:wq`` does both."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $boost;
	}

	#command-line {
		height: 1;
	}
	"""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path
        self.engine = EditorEngine(name=path.name)
        self.adapter: Optional[TextualVimAdapter] = None
        self.logger = telemetry.get_logger("vimnote.adapters.textual.app")
        self._state = UIState()
        self._buffer_widget: Optional[Static] = None
        self._status_widget: Optional[Static] = None
        self._command_widget: Optional[Static] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Vertical():
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            on_action=self._on_action,
        )
        self.adapter = TextualVimAdapter(self.engine, hooks)
        self.adapter.load(self._read_file())
        self.title = f"vimnote - {self.path}"

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _read_file(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""

    def _write_file(self) -> None:
        self.path.write_text(self.engine.text, encoding="utf-8")
        telemetry.record_event(
            "file.saved", data={"path": str(self.path), "length": len(self.engine.text)}
        )

    def _on_action(self, action: HostAction) -> None:
        if action in (HostAction.SAVE, HostAction.SAVE_QUIT):
            try:
                self._write_file()
            except OSError as exc:
                self.logger.error(f"save failed: {exc}")
                self._update_status(f"save failed: {exc}")
                return
            self._update_status(f"written {self.path}")
        if action in (HostAction.QUIT, HostAction.SAVE_QUIT):
            self.exit()

    def _update_buffer(self, view: BufferView) -> None:
        self._state.buffer_text = render_with_cursor(view)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        if self._command_widget:
            self._command_widget.update(command)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file with vimnote.")
    parser.add_argument("path", type=Path, help="File to edit (created on :w)")
    parser.add_argument(
        "--preset",
        choices=("development", "production", "quiet"),
        default="quiet",
        help="Telemetry preset (default: quiet, keeps the terminal clean)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.preset)
    VimnoteApp(args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
