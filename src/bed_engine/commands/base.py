"""Result and event types shared by the command engine and its hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from rich.console import RenderableType

from .models import Command


@dataclass(slots=True)
class CommandResult:
    """Outcome of ``CommandEngine.handle`` for one input line."""

    command: Command
    status: str = "ok"
    message: Optional[str] = None
    renderable: Optional[RenderableType] = None

    @property
    def ok(self) -> bool:
        return self.status not in {"save_error", "unknown_command"}


class EngineBus:
    """Minimal event bus letting hosts observe engine activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["CommandResult", "EngineBus"]
