"""Ordered line buffer keyed by BASIC line number."""

from __future__ import annotations

from bisect import insort
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Dict, Iterable, Iterator, List, Optional, Tuple

from bed_engine.runtime import telemetry

from .lines import parse_line_number, replace_line_number
from .sync import BufferMirror
from .validation import MalformedLineError, ensure_numbered_line

RENUMBER_START = 10
RENUMBER_STEP = 10


@dataclass(slots=True)
class BufferView:
    version: int
    lines: Tuple[Tuple[int, str], ...]


class LineBuffer:
    """Line-number to line-text mapping that always iterates in ascending order.

    Stored text is kept verbatim, including the number the user typed.
    Every mutation runs inside a :class:`Transaction` and bumps ``version``.
    """

    def __init__(self, *, name: str = "default") -> None:
        self.name = name
        self.version = 0
        self._lines: Dict[int, str] = {}
        self._order: List[int] = []

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "default") -> "LineBuffer":
        buffer = cls(name=name)
        for line in lines:
            parsed = parse_line_number(line)
            if parsed is None:
                raise MalformedLineError(
                    "Line must begin with a line number followed by whitespace",
                    text=line,
                )
            buffer.insert(parsed.number, line)
        return buffer

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, number: object) -> bool:
        return number in self._lines

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        for number in self._order:
            yield number, self._lines[number]

    def get(self, number: int) -> Optional[str]:
        return self._lines.get(number)

    def numbers(self) -> Tuple[int, ...]:
        return tuple(self._order)

    def lines(self) -> Tuple[str, ...]:
        return tuple(self._lines[number] for number in self._order)

    def text(self) -> str:
        return _join_lines(self.lines())

    def snapshot(self) -> BufferView:
        return BufferView(version=self.version, lines=tuple(self))

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.text(),
            version=self.version,
            line_count=len(self),
            attributes=dict(attributes or {}),
        )

    def insert(self, number: int, text: str) -> bool:
        """Store ``text`` under ``number``, replacing any existing line.

        Returns ``True`` when an existing line was overwritten.
        """

        ensure_numbered_line(number, text)
        with Transaction(self, "insert") as tx:
            replaced = number in self._lines
            if not replaced:
                insort(self._order, number)
            self._lines[number] = text
            tx.handle.add_metadata("line", number)
            tx.handle.add_metadata("replaced", replaced)
        return replaced

    def renumber(
        self, *, start: int = RENUMBER_START, step: int = RENUMBER_STEP
    ) -> Dict[int, int]:
        """Re-key every line to ``start``, ``start + step``, ... in current order.

        Each line's leading number token is rewritten to its new key. The new
        mapping is built completely before it replaces the old one. Returns
        the old-to-new number mapping.
        """

        if start < 0 or step <= 0:
            raise ValueError("renumber needs a non-negative start and positive step")
        with Transaction(self, "renumber") as tx:
            rebuilt: Dict[int, str] = {}
            moves: Dict[int, int] = {}
            for index, (old_number, text) in enumerate(self):
                new_number = start + index * step
                rebuilt[new_number] = replace_line_number(text, new_number)
                moves[old_number] = new_number
            tx.handle.add_metadata("lines", len(rebuilt))
            self._lines = rebuilt
            self._order = list(rebuilt)
        return moves


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one buffer mutation; bumps the version on success."""

    def __init__(self, buffer: LineBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self.handle: telemetry.SpanHandle

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self.handle = self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.version += 1
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _join_lines(lines) -> str:
    return "\n".join(lines)
