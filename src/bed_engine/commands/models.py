"""Parsed intents for one line of editor input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True, slots=True)
class NumberedInsert:
    """Store ``raw_text`` verbatim under ``line_number``."""

    name: ClassVar[str] = "insert"

    line_number: int
    raw_text: str


@dataclass(frozen=True, slots=True)
class Renumber:
    name: ClassVar[str] = "renumber"


@dataclass(frozen=True, slots=True)
class SaveToFile:
    name: ClassVar[str] = "write"

    path: str


@dataclass(frozen=True, slots=True)
class Print:
    name: ClassVar[str] = "print"


@dataclass(frozen=True, slots=True)
class Unknown:
    name: ClassVar[str] = "unknown"

    text: str


Command = Union[NumberedInsert, Renumber, SaveToFile, Print, Unknown]


__all__ = [
    "Command",
    "NumberedInsert",
    "Renumber",
    "SaveToFile",
    "Print",
    "Unknown",
]
