"""Prompt history persisted between shell sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from bed_engine.runtime import telemetry

DEFAULT_MAX_ENTRIES = 100


class PromptHistory:
    """Bounded list of submitted input lines, oldest first.

    Empty lines and immediate repeats of the previous entry are not recorded.
    """

    def __init__(
        self,
        entries: Sequence[str] = (),
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: List[str] = []
        for entry in entries:
            self.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def append(self, line: str) -> bool:
        if not line.strip():
            return False
        if self._entries and self._entries[-1] == line:
            return False
        self._entries.append(line)
        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]
        return True

    def search_prefix(self, prefix: str) -> Optional[str]:
        """Return the newest entry that extends ``prefix``.

        Entries equal to ``prefix`` are not suggestions, so ``None`` is
        returned when the newest match is the prefix itself.
        """

        if not prefix:
            return None
        for entry in reversed(self._entries):
            if entry.startswith(prefix):
                return None if entry == prefix else entry
        return None

    def load(self, path: Path) -> bool:
        """Replace entries with the contents of ``path``.

        Returns ``False`` when the file cannot be read.
        """

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            telemetry.record_event(
                "history.load_failed",
                level="debug",
                data={"path": str(path), "reason": str(exc)},
            )
            return False
        self._entries.clear()
        for line in text.splitlines():
            self.append(line)
        return True

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        body = "\n".join(self._entries)
        path.write_text(body + "\n" if body else "", encoding="utf-8")
        telemetry.record_event(
            "history.saved",
            level="debug",
            data={"path": str(path), "entries": len(self._entries)},
        )

    def try_save(self, path: Path) -> Optional[str]:
        """Like :meth:`save` but returns the failure reason instead of raising."""

        try:
            self.save(path)
        except OSError as exc:
            telemetry.record_event(
                "history.save_failed",
                level="warning",
                data={"path": str(path), "reason": str(exc)},
            )
            return str(exc)
        return None


__all__ = ["PromptHistory", "DEFAULT_MAX_ENTRIES"]
