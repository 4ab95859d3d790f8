from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Iterable, List

from rich.console import Console

from bed_engine.adapters.console import ConsoleShell
from bed_engine.commands import CommandEngine, console_output
from bed_engine.runtime.history import PromptHistory
from bed_engine.runtime.settings import ShellSettings


def scripted(lines: Iterable[str], *, end: BaseException | None = None) -> Callable[[str], str]:
    remaining = iter(lines)
    prompts: List[str] = []

    def read(prompt: str) -> str:
        prompts.append(prompt)
        try:
            return next(remaining)
        except StopIteration:
            raise end or EOFError() from None

    read.prompts = prompts  # type: ignore[attr-defined]
    return read


def make_shell(
    lines: Iterable[str],
    *,
    history_file: Path | None = None,
    end: BaseException | None = None,
) -> tuple[ConsoleShell, io.StringIO]:
    stream = io.StringIO()
    console = Console(file=stream, width=120, color_system=None)
    engine = CommandEngine(output=console_output(console))
    shell = ConsoleShell(
        engine,
        settings=ShellSettings(history_file=history_file),
        console=console,
        read_line=scripted(lines, end=end),
    )
    return shell, stream


def test_session_inserts_and_prints() -> None:
    shell, stream = make_shell(["20 PRINT X", "10 LET X = 1", "p"])

    assert shell.run() == 0

    output = stream.getvalue()
    assert "No previous history." in output
    assert "10 LET X = 1\n20 PRINT X" in output
    assert output.rstrip().endswith("Received EOF")


def test_interrupt_ends_session() -> None:
    shell, stream = make_shell(["xyz"], end=KeyboardInterrupt())

    shell.run()

    output = stream.getvalue()
    assert "Unknown command" in output
    assert "Received interrupt" in output


def test_unclosed_brackets_continue_on_next_line() -> None:
    shell, _ = make_shell(["10 PRINT (X", "+ 1)"])

    shell.run()

    assert shell.engine.buffer.get(10) == "10 PRINT (X\n+ 1)"
    assert shell._read_line.prompts == [":", "... ", ":"]  # type: ignore[attr-defined]


def test_mismatched_brackets_are_rejected() -> None:
    shell, stream = make_shell(["10 PRINT (X]", "20 END"])

    shell.run()

    assert "Mismatched brackets: '(' is not properly closed" in stream.getvalue()
    assert shell.engine.buffer.numbers() == (20,)
    assert shell.history.entries == ("20 END",)


def test_history_is_loaded_and_saved(tmp_path: Path) -> None:
    history_file = tmp_path / ".bed_history"
    PromptHistory(["p"]).save(history_file)
    shell, stream = make_shell(["10 END", "r"], history_file=history_file)

    shell.run()

    assert "No previous history." not in stream.getvalue()
    assert history_file.read_text().splitlines() == ["p", "10 END", "r"]


def test_history_save_failure_does_not_crash(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    shell, stream = make_shell(["10 END"], history_file=blocker / ".bed_history")

    assert shell.run() == 0

    assert "Could not save history" in stream.getvalue()
    assert shell.engine.buffer.get(10) == "10 END"
