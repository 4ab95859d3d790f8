"""Executable Textual app that hosts the BASIC line editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use bed_engine.adapters.textual.app"
    ) from exc

from rich.console import RenderableType
from rich.text import Text

from bed_engine.buffer import BufferMirror
from bed_engine.commands import CommandEngine
from bed_engine.lexer import BasicHighlighter
from bed_engine.runtime.history import PromptHistory
from bed_engine.runtime.settings import ShellSettings

from .controller import TextualBedAdapter, TextualUIHooks
from .input import BracketValidator, HistorySuggester

NO_HISTORY_MESSAGE = "No previous history."


@dataclass
class UIState:
    status_text: str = ""
    line_count: int = 0
    version: int = 0


class BedApp(App[None]):
    """Full-screen editor: output log, status line, and a ``:`` prompt."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#output {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#prompt-row {
		height: 3;
	}

	#prompt {
		width: 2;
		padding: 1 0 0 1;
	}

	#command-input {
		width: 1fr;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, settings: Optional[ShellSettings] = None) -> None:
        super().__init__()
        self.settings = settings or ShellSettings.from_env()
        self.history = PromptHistory()
        self.engine: CommandEngine | None = None
        self.adapter: TextualBedAdapter | None = None
        self._state = UIState()
        self._output_widget: RichLog | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._output_widget = RichLog(id="output", markup=False, highlight=False)
        yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        with Horizontal(id="prompt-row"):
            yield Static(self.settings.prompt, id="prompt")
            yield Input(
                id="command-input",
                highlighter=BasicHighlighter(),
                suggester=HistorySuggester(self.history),
                validators=[BracketValidator()],
                validate_on=["changed"],
            )
        yield Footer()

    def on_mount(self) -> None:
        history_file = self.settings.history_file
        if history_file is None or not self.history.load(history_file):
            self._write_output(Text(NO_HISTORY_MESSAGE))
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            write_output=self._write_output,
        )
        self.engine = CommandEngine(output=hooks.write_output)
        self.adapter = TextualBedAdapter(self.engine, hooks, history=self.history)
        self.query_one("#command-input", Input).focus()

    def on_unmount(self) -> None:
        if self.settings.history_file is not None:
            self.history.try_save(self.settings.history_file)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        result = self.adapter.submit_line(event.value)
        if result is not None:
            event.input.value = ""
        event.stop()

    def _write_output(self, renderable: RenderableType) -> None:
        if self._output_widget:
            self._output_widget.write(renderable)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.line_count = mirror.line_count
        self._state.version = mirror.version
        self._render_status()

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        self._render_status()

    def _render_status(self) -> None:
        if self._status_widget:
            self._status_widget.update(
                Text(
                    f"{self._state.line_count} lines | v{self._state.version}"
                    f" | {self._state.status_text}"
                )
            )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit numbered BASIC listings.")
    parser.add_argument(
        "--history-file",
        type=Path,
        default=None,
        help="Prompt history file (default: $BED_ENGINE_HISTORY_FILE or ~/.bed_history)",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not load or save prompt history",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Use the plain line-reading console instead of the Textual UI",
    )
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> ShellSettings:
    settings = ShellSettings.from_env()
    if args.no_history:
        settings.history_file = None
    elif args.history_file is not None:
        settings.history_file = args.history_file.expanduser()
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = _settings_from_args(args)
    if args.console:
        from bed_engine.adapters.console import ConsoleShell

        return ConsoleShell(settings=settings).run()
    BedApp(settings=settings).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
