"""Minimal Textual adapter that wires CommandEngine results into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from rich.console import RenderableType

from bed_engine.buffer import BufferMirror
from bed_engine.commands import CommandEngine, CommandResult
from bed_engine.lexer import BracketCheck, check_brackets
from bed_engine.runtime.history import PromptHistory


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    write_output: Callable[[RenderableType], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


_ENGINE_EVENTS = (
    "command.insert",
    "command.renumber",
    "command.write",
    "command.print",
    "command.error",
)


class TextualBedAdapter:
    """Bridges CommandEngine + bus events to a Textual-friendly surface."""

    def __init__(
        self,
        engine: CommandEngine,
        hooks: TextualUIHooks,
        *,
        history: Optional[PromptHistory] = None,
    ) -> None:
        self.engine = engine
        self.hooks = hooks
        self.history = history if history is not None else PromptHistory()
        self._subscribe_events()
        self._refresh_buffer()

    def check_line(self, line: str) -> BracketCheck:
        return check_brackets(line)

    def submit_line(self, line: str) -> Optional[CommandResult]:
        """Run ``line`` through the engine unless its brackets are unbalanced."""

        check = self.check_line(line)
        if not check.is_valid:
            self.hooks.update_status(check.message or "Unclosed brackets")
            self._log_state("rejected ->", line=line, status=check.status)
            return None

        self.history.append(line)
        self._log_state("line ->", line=line)
        result = self.engine.handle(line)
        self._after_result(result)
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def suggest(self, prefix: str) -> Optional[str]:
        return self.history.search_prefix(prefix)

    def _after_result(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in _ENGINE_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.engine.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.engine.buffer
        return {
            "buffer": buffer.name,
            "buffer_version": buffer.version,
            "lines": len(buffer),
        }


__all__ = ["TextualBedAdapter", "TextualUIHooks"]
