"""Input-line commands: parsing, dispatch, and results."""

from .models import Command, NumberedInsert, Print, Renumber, SaveToFile, Unknown
from .parser import parse_command, parse_write_path
from .base import CommandResult, EngineBus
from .engine import CommandEngine, OutputSink, UNKNOWN_COMMAND_MESSAGE, console_output

__all__ = [
    "Command",
    "NumberedInsert",
    "Renumber",
    "SaveToFile",
    "Print",
    "Unknown",
    "parse_command",
    "parse_write_path",
    "CommandResult",
    "EngineBus",
    "CommandEngine",
    "OutputSink",
    "UNKNOWN_COMMAND_MESSAGE",
    "console_output",
]
