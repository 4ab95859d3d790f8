"""Command engine: owns the line buffer and applies one input line at a time."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

from rich.console import Console, RenderableType
from rich.text import Text

from bed_engine.buffer import LineBuffer
from bed_engine.lexer import highlight
from bed_engine.runtime import telemetry

from .base import CommandResult, EngineBus
from .models import Command, NumberedInsert, Print, Renumber, SaveToFile, Unknown
from .parser import parse_command

OutputSink = Callable[[RenderableType], None]

UNKNOWN_COMMAND_MESSAGE = "Unknown command"


def console_output(console: Optional[Console] = None) -> OutputSink:
    target = console or Console()

    def _emit(renderable: RenderableType) -> None:
        target.print(renderable, soft_wrap=True)

    return _emit


class CommandEngine:
    """Interprets raw input lines against a :class:`LineBuffer`.

    Terminal output (printed listings, diagnostics) goes to ``output``; every
    call also returns a :class:`CommandResult` and emits a ``command.*`` event
    on ``bus``.
    """

    def __init__(
        self,
        buffer: Optional[LineBuffer] = None,
        *,
        output: Optional[OutputSink] = None,
        bus: Optional[EngineBus] = None,
        logger_name: str = "bed_engine.commands",
    ) -> None:
        self.buffer = buffer if buffer is not None else LineBuffer()
        self.output = output or console_output()
        self.bus = bus or EngineBus()
        self._logger_name = logger_name
        self._handlers: Dict[str, Callable[..., CommandResult]] = {
            NumberedInsert.name: self._handle_insert,
            Renumber.name: self._handle_renumber,
            SaveToFile.name: self._handle_write,
            Print.name: self._handle_print,
            Unknown.name: self._handle_unknown,
        }

    def handle(self, raw: str) -> CommandResult:
        command = parse_command(raw)
        return self.execute(command)

    def execute(self, command: Command) -> CommandResult:
        handler = self._handlers[command.name]
        with telemetry.span(
            f"engine::{command.name}",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command": command.name, "lines": len(self.buffer)},
        ):
            return handler(command)

    def _handle_insert(self, command: NumberedInsert) -> CommandResult:
        replaced = self.buffer.insert(command.line_number, command.raw_text)
        self.bus.emit(
            "command.insert", {"line": command.line_number, "replaced": replaced}
        )
        return CommandResult(command=command, status="inserted")

    def _handle_renumber(self, command: Renumber) -> CommandResult:
        moves = self.buffer.renumber()
        self.bus.emit("command.renumber", moves)
        return CommandResult(command=command, status="renumbered")

    def _handle_write(self, command: SaveToFile) -> CommandResult:
        path = Path(command.path)
        body = self.buffer.text()
        try:
            path.write_bytes(body.encode("utf-8"))
        except (OSError, ValueError) as exc:
            message = f"Could not write to file: {exc}"
            telemetry.record_event(
                "command.write_failed",
                level="error",
                data={"path": command.path, "reason": str(exc)},
                logger_name=self._logger_name,
            )
            self.output(Text(message))
            self.bus.emit("command.error", {"command": command.name, "reason": message})
            return CommandResult(command=command, status="save_error", message=message)

        self.bus.emit("command.write", {"path": command.path, "lines": len(self.buffer)})
        return CommandResult(
            command=command,
            status="saved",
            message=f"Wrote {len(self.buffer)} lines to {command.path}",
        )

    def _handle_print(self, command: Print) -> CommandResult:
        rendered = highlight(self.buffer.text())
        self.output(rendered)
        self.bus.emit("command.print", rendered.plain)
        return CommandResult(command=command, status="printed", renderable=rendered)

    def _handle_unknown(self, command: Unknown) -> CommandResult:
        telemetry.record_event(
            "command.unknown",
            level="debug",
            data={"input": command.text},
            logger_name=self._logger_name,
        )
        self.output(Text(UNKNOWN_COMMAND_MESSAGE))
        self.bus.emit(
            "command.error",
            {"command": command.text, "reason": UNKNOWN_COMMAND_MESSAGE},
        )
        return CommandResult(
            command=command, status="unknown_command", message=UNKNOWN_COMMAND_MESSAGE
        )


__all__ = ["CommandEngine", "OutputSink", "console_output", "UNKNOWN_COMMAND_MESSAGE"]
