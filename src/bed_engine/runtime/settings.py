"""Environment-driven settings for the interactive shells."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "BED_ENGINE_"
DEFAULT_HISTORY_NAME = ".bed_history"
DEFAULT_PROMPT = ":"


def _truthy(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    return raw.lower() in {"1", "true", "yes", "on"}


def default_history_file() -> Path:
    return Path.home() / DEFAULT_HISTORY_NAME


@dataclass(slots=True)
class ShellSettings:
    """Settings shared by the Textual app and the console loop.

    ``history_file`` is ``None`` when history persistence is disabled.
    """

    history_file: Optional[Path]
    prompt: str = DEFAULT_PROMPT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ShellSettings":
        env = os.environ if environ is None else environ
        prompt = env.get(f"{ENV_PREFIX}PROMPT", DEFAULT_PROMPT)
        if _truthy(env.get(f"{ENV_PREFIX}NO_HISTORY")):
            return cls(history_file=None, prompt=prompt)
        raw_path = env.get(f"{ENV_PREFIX}HISTORY_FILE")
        history_file = Path(raw_path).expanduser() if raw_path else default_history_file()
        return cls(history_file=history_file, prompt=prompt)


__all__ = ["ShellSettings", "default_history_file", "DEFAULT_PROMPT"]
