from __future__ import annotations

from pathlib import Path
from typing import Any, List, Tuple

import pytest
from rich.text import Text

from bed_engine.buffer import LineBuffer
from bed_engine.commands import (
    UNKNOWN_COMMAND_MESSAGE,
    CommandEngine,
    EngineBus,
    NumberedInsert,
    Print,
    Renumber,
    SaveToFile,
    Unknown,
    parse_command,
)


def make_engine(*lines: str) -> Tuple[CommandEngine, List[Any]]:
    outputs: List[Any] = []
    engine = CommandEngine(output=outputs.append)
    for line in lines:
        engine.handle(line)
    outputs.clear()
    return engine, outputs


def plain(renderable: Any) -> str:
    assert isinstance(renderable, Text)
    return renderable.plain


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10 LET X = 1", NumberedInsert(10, "10 LET X = 1")),
        ("10", NumberedInsert(10, "10")),
        ("10 r", NumberedInsert(10, "10 r")),
        ("r", Renumber()),
        ("  r  ", Renumber()),
        ("p", Print()),
        ("w out.txt", SaveToFile("out.txt")),
        ("w  my listing.bas ", SaveToFile("my listing.bas")),
        ("w", Unknown("w")),
        ("w ", Unknown("w ")),
        ("10abc", Unknown("10abc")),
        ("xyz", Unknown("xyz")),
        ("", Unknown("")),
        ("rp", Unknown("rp")),
    ],
)
def test_parse_command(raw: str, expected: object) -> None:
    assert parse_command(raw) == expected


def test_numbered_insert_stores_raw_line() -> None:
    engine, outputs = make_engine()

    result = engine.handle("20 PRINT X")

    assert result.status == "inserted"
    assert engine.buffer.get(20) == "20 PRINT X"
    assert outputs == []


def test_print_reproduces_listing_text() -> None:
    engine, outputs = make_engine("30 END", "10 LET X = 1", "20 PRINT X")

    result = engine.handle("p")

    expected = "10 LET X = 1\n20 PRINT X\n30 END"
    assert result.status == "printed"
    assert plain(result.renderable) == expected
    assert plain(outputs[-1]) == expected
    assert outputs[-1].spans


def test_renumber_command() -> None:
    engine, _ = make_engine("5 LET X = 1", "100 PRINT X")

    result = engine.handle("r")

    assert result.status == "renumbered"
    assert engine.buffer.numbers() == (10, 20)
    assert engine.buffer.lines() == ("10 LET X = 1", "20 PRINT X")


def test_renumber_is_idempotent_through_engine() -> None:
    engine, _ = make_engine("10 LET X = 1", "20 PRINT X", "30 END")
    before = engine.buffer.lines()

    engine.handle("r")
    engine.handle("r")

    assert engine.buffer.lines() == before


def test_save_writes_newline_joined_buffer(tmp_path: Path) -> None:
    engine, outputs = make_engine("20 PRINT X", "10 LET X = 1")
    target = tmp_path / "out.txt"
    target.write_text("stale contents that should be replaced\n" * 3)

    result = engine.handle(f"w {target}")

    assert result.status == "saved"
    assert target.read_bytes() == b"10 LET X = 1\n20 PRINT X"
    assert outputs == []


def test_save_empty_buffer_creates_empty_file(tmp_path: Path) -> None:
    engine, _ = make_engine()
    target = tmp_path / "empty.bas"

    engine.handle(f"w {target}")

    assert target.read_bytes() == b""


def test_save_failure_is_reported_and_buffer_unchanged(tmp_path: Path) -> None:
    engine, outputs = make_engine("10 END")
    target = tmp_path / "missing" / "out.txt"
    version = engine.buffer.version

    result = engine.handle(f"w {target}")

    assert result.status == "save_error"
    assert result.ok is False
    assert result.message is not None
    assert result.message.startswith("Could not write to file")
    assert plain(outputs[-1]) == result.message
    assert engine.buffer.version == version
    assert not target.exists()


def test_unknown_command_leaves_buffer_unchanged() -> None:
    engine, outputs = make_engine("10 END")
    before = engine.buffer.snapshot()

    result = engine.handle("xyz")

    assert result.status == "unknown_command"
    assert result.message == UNKNOWN_COMMAND_MESSAGE
    assert plain(outputs[-1]) == "Unknown command"
    assert engine.buffer.snapshot() == before


def test_engine_emits_bus_events(tmp_path: Path) -> None:
    bus = EngineBus()
    events: List[Tuple[str, object]] = []
    for name in (
        "command.insert",
        "command.renumber",
        "command.write",
        "command.print",
        "command.error",
    ):
        bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))
    engine = CommandEngine(LineBuffer(), output=lambda _: None, bus=bus)

    engine.handle("5 END")
    engine.handle("5 STOP")
    engine.handle("r")
    engine.handle("p")
    engine.handle(f"w {tmp_path / 'x.bas'}")
    engine.handle("?")

    names = [name for name, _ in events]
    assert names == [
        "command.insert",
        "command.insert",
        "command.renumber",
        "command.print",
        "command.write",
        "command.error",
    ]
    assert events[0][1] == {"line": 5, "replaced": False}
    assert events[1][1] == {"line": 5, "replaced": True}
    assert events[2][1] == {5: 10}
    assert events[3][1] == "10 STOP"


def test_engine_uses_given_buffer() -> None:
    buffer = LineBuffer.from_lines(["10 END"])
    engine = CommandEngine(buffer, output=lambda _: None)

    engine.handle("20 REM")

    assert buffer.numbers() == (10, 20)


def test_overlong_line_number_falls_through_to_unknown() -> None:
    raw = "1" * 5000 + " PRINT X"
    engine, outputs = make_engine()

    assert parse_command(raw) == Unknown(raw)
    result = engine.handle(raw)

    assert result.status == "unknown_command"
    assert len(engine.buffer) == 0
    assert plain(outputs[-1]) == UNKNOWN_COMMAND_MESSAGE


def test_save_to_unusable_path_is_recoverable(tmp_path: Path) -> None:
    engine, outputs = make_engine("10 END")

    result = engine.handle(f"w {tmp_path}/a\x00b")

    assert result.status == "save_error"
    assert result.message is not None
    assert result.message.startswith("Could not write to file")
    assert plain(outputs[-1]) == result.message
    assert engine.handle("p").status == "printed"
