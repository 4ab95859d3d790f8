"""Textual ``Input`` helpers: bracket validation and history hints."""

from __future__ import annotations

from textual.suggester import Suggester
from textual.validation import ValidationResult, Validator

from bed_engine.lexer import check_brackets
from bed_engine.runtime.history import PromptHistory

INCOMPLETE_MESSAGE = "Unclosed brackets"


class BracketValidator(Validator):
    """Fails on mismatched or unclosed ``()[]{}``."""

    def validate(self, value: str) -> ValidationResult:
        check = check_brackets(value)
        if check.is_valid:
            return self.success()
        return self.failure(check.message or INCOMPLETE_MESSAGE)


class HistorySuggester(Suggester):
    """Suggest the newest history entry extending what has been typed."""

    def __init__(self, history: PromptHistory) -> None:
        super().__init__(use_cache=False, case_sensitive=True)
        self.history = history

    async def get_suggestion(self, value: str) -> str | None:
        return self.history.search_prefix(value)


__all__ = ["BracketValidator", "HistorySuggester", "INCOMPLETE_MESSAGE"]
