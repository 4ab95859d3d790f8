from __future__ import annotations

from pathlib import Path

import pytest

from bed_engine.runtime.history import PromptHistory
from bed_engine.runtime.telemetry import TelemetrySettings
from bed_engine.runtime.settings import ShellSettings, default_history_file


def test_history_skips_blank_lines_and_repeats() -> None:
    history = PromptHistory()

    assert history.append("10 PRINT X") is True
    assert history.append("10 PRINT X") is False
    assert history.append("   ") is False
    assert history.append("p") is True
    assert history.append("10 PRINT X") is True

    assert history.entries == ("10 PRINT X", "p", "10 PRINT X")


def test_history_drops_oldest_entries_beyond_limit() -> None:
    history = PromptHistory([f"{n} REM" for n in range(5)], max_entries=3)

    assert history.entries == ("2 REM", "3 REM", "4 REM")


def test_history_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        PromptHistory(max_entries=0)


def test_search_prefix_prefers_newest_entry() -> None:
    history = PromptHistory(["10 PRINT A", "10 PRINT B", "w out.bas"])

    assert history.search_prefix("10") == "10 PRINT B"
    assert history.search_prefix("w ") == "w out.bas"
    assert history.search_prefix("20") is None
    assert history.search_prefix("") is None


def test_search_prefix_ignores_exact_match() -> None:
    history = PromptHistory(["10 PRINT A", "p"])

    assert history.search_prefix("p") is None


def test_history_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / ".bed_history"
    PromptHistory(["10 LET X = 1", "r", "p"]).save(path)

    loaded = PromptHistory()
    assert loaded.load(path) is True

    assert loaded.entries == ("10 LET X = 1", "r", "p")


def test_history_load_missing_file(tmp_path: Path) -> None:
    history = PromptHistory(["keep"])

    assert history.load(tmp_path / "absent") is False
    assert history.entries == ("keep",)


def test_settings_default_to_home_history() -> None:
    settings = ShellSettings.from_env({})

    assert settings.history_file == default_history_file()
    assert settings.history_file.name == ".bed_history"
    assert settings.prompt == ":"


def test_settings_read_environment(tmp_path: Path) -> None:
    settings = ShellSettings.from_env(
        {
            "BED_ENGINE_HISTORY_FILE": str(tmp_path / "hist"),
            "BED_ENGINE_PROMPT": "> ",
        }
    )

    assert settings.history_file == tmp_path / "hist"
    assert settings.prompt == "> "


def test_settings_can_disable_history() -> None:
    settings = ShellSettings.from_env(
        {"BED_ENGINE_NO_HISTORY": "yes", "BED_ENGINE_HISTORY_FILE": "/tmp/x"}
    )

    assert settings.history_file is None


def test_history_try_save_reports_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    history = PromptHistory(["p"])

    reason = history.try_save(blocker / ".bed_history")

    assert reason
    assert history.try_save(tmp_path / ".bed_history") is None


def test_telemetry_settings_defaults() -> None:
    settings = TelemetrySettings.from_env({})

    assert settings.level == "WARNING"
    assert settings.console is True
    assert settings.buffer_size is None
    assert settings.logger_name == "bed_engine"


def test_telemetry_settings_read_environment(tmp_path: Path) -> None:
    settings = TelemetrySettings.from_env(
        {
            "BED_ENGINE_LOG_LEVEL": "debug",
            "BED_ENGINE_DISABLE_CONSOLE": "yes",
            "BED_ENGINE_LOG_FILE": str(tmp_path / "bed.log"),
            "BED_ENGINE_LOG_BUFFERED": "1",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.console is False
    assert settings.log_file == str(tmp_path / "bed.log")
    assert settings.buffer_size == 2048
