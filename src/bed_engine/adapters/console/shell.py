"""Plain line-reading shell on a rich console."""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console
from rich.text import Text

from bed_engine.commands import CommandEngine, console_output
from bed_engine.lexer import check_brackets
from bed_engine.runtime.history import PromptHistory
from bed_engine.runtime.settings import ShellSettings

ReadLine = Callable[[str], str]

NO_HISTORY_MESSAGE = "No previous history."
CONTINUATION_PROMPT = "... "
SAVE_HISTORY_FAILED = "Could not save history"


class ConsoleShell:
    """Read lines at a prompt and feed them to a :class:`CommandEngine`.

    Lines with unclosed brackets are continued on the next read; mismatched
    brackets are reported and discarded. Ctrl-C or EOF ends the session and
    saves the prompt history.
    """

    def __init__(
        self,
        engine: Optional[CommandEngine] = None,
        *,
        settings: Optional[ShellSettings] = None,
        console: Optional[Console] = None,
        history: Optional[PromptHistory] = None,
        read_line: Optional[ReadLine] = None,
    ) -> None:
        self.console = console or Console()
        self.settings = settings or ShellSettings.from_env()
        self.engine = engine or CommandEngine(output=console_output(self.console))
        self.history = history if history is not None else PromptHistory()
        self._read_line: ReadLine = read_line or self.console.input

    def run(self) -> int:
        self._load_history()
        while True:
            try:
                line = self._read_submission()
            except KeyboardInterrupt:
                self.console.print(Text("Received interrupt"))
                break
            except EOFError:
                self.console.print(Text("Received EOF"))
                break
            if line is None:
                continue
            self.history.append(line)
            self.engine.handle(line)
        self._save_history()
        return 0

    def _read_submission(self) -> Optional[str]:
        line = self._read_line(self.settings.prompt)
        while True:
            check = check_brackets(line)
            if check.status == "valid":
                return line
            if check.status == "invalid":
                self.console.print(Text(check.message or "Mismatched brackets"))
                return None
            line = f"{line}\n{self._read_line(CONTINUATION_PROMPT)}"

    def _load_history(self) -> None:
        path = self.settings.history_file
        if path is None or not self.history.load(path):
            self.console.print(Text(NO_HISTORY_MESSAGE))

    def _save_history(self) -> None:
        path = self.settings.history_file
        if path is None:
            return
        reason = self.history.try_save(path)
        if reason is not None:
            self.console.print(Text(f"{SAVE_HISTORY_FAILED}: {reason}"))


__all__ = ["ConsoleShell", "ReadLine", "NO_HISTORY_MESSAGE"]
