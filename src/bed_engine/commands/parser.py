"""Turn a raw input line into a :data:`Command`."""

from __future__ import annotations

from typing import Optional

from bed_engine.buffer import parse_line_number

from .models import Command, NumberedInsert, Print, Renumber, SaveToFile, Unknown

RENUMBER_COMMAND = "r"
PRINT_COMMAND = "p"
WRITE_PREFIX = "w "


def parse_write_path(text: str) -> Optional[str]:
    """Return the path of a ``w <path>`` command, or ``None`` if ``text`` is not one."""

    if not text.startswith(WRITE_PREFIX):
        return None
    path = text[len(WRITE_PREFIX):].strip()
    return path or None


def parse_command(raw: str) -> Command:
    """Classify ``raw``; a leading line number always wins over commands."""

    numbered = parse_line_number(raw)
    if numbered is not None:
        return NumberedInsert(line_number=numbered.number, raw_text=raw)

    text = raw.strip()
    if text == RENUMBER_COMMAND:
        return Renumber()
    path = parse_write_path(text)
    if path is not None:
        return SaveToFile(path=path)
    if text == PRINT_COMMAND:
        return Print()
    return Unknown(text=raw)


__all__ = ["parse_command", "parse_write_path"]
