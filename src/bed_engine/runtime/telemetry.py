"""telelog wiring for the line editor.

Everything that logs goes through this module: ``get_logger`` hands out
cached loggers, ``record_event`` writes one structured ``event::<name>``
line and ``span`` profiles a block while tracking it as a component.
Settings come from ``BED_ENGINE_*`` environment variables.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "BED_ENGINE_"
DEFAULT_LOGGER_NAME = "bed_engine"

_TRUTHY = {"1", "true", "yes", "on"}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    level: str = "WARNING"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: Optional[int] = None
    logger_name: str = DEFAULT_LOGGER_NAME

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        def flag(name: str) -> bool:
            return (read(name) or "").lower() in _TRUTHY

        buffered = flag("LOG_BUFFERED")
        return cls(
            level=(read("LOG_LEVEL") or "WARNING").upper(),
            console=not flag("DISABLE_CONSOLE"),
            color=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            log_file=read("LOG_FILE") or "",
            buffer_size=int(read("LOG_BUFFER_SIZE") or "2048") if buffered else None,
            logger_name=read("LOGGER") or DEFAULT_LOGGER_NAME,
        )


def build_config(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    if settings.json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffer_size is not None:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


_SETTINGS = TelemetrySettings.from_env()


def configure(*, config: Optional[Any] = None) -> None:
    """Adopt ``config`` (a ``telelog.Config``), or rebuild it from the environment."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = config if config is not None else build_config(_SETTINGS)
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or _SETTINGS.logger_name
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            configure()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _stringify(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; metadata added here rides on the failure line."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block as ``name``.

    ``component=True`` also tracks it as a component of the same name; a
    string names the component. ``metadata`` is pushed as logger context for
    the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(context),
    )
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(log.track_component(component_name))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


configure()

__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
