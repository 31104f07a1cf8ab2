"""Structured logging setup with JSON-lines output for the ``typed_jsonb`` logger tree."""

from __future__ import annotations

import json
import logging
import math
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Final, TextIO

from typed_jsonb.constants import ROOT_LOGGER_NAME

if TYPE_CHECKING:
    from typed_jsonb.config import Settings

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_TEXT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_ACTIVE_LOCK = threading.Lock()
_ACTIVE_HANDLERS: list[tuple[logging.Logger, logging.Handler]] = []


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for the ``typed_jsonb`` log sinks."""

    logger_name: str = ROOT_LOGGER_NAME
    level: int | str = "WARNING"
    json_lines: bool = True
    stream: TextIO | None = None
    log_file: Path | str | None = None


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` keys are nested under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, JSONValue] = {
            "timestamp": _utc_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = {
            key: _to_json(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }
        if fields:
            line["fields"] = fields
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            line["stack"] = self.formatStack(record.stack_info)

        return json.dumps(line, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach stream (and optional file) sinks to the package logger and return it.

    Calling this again replaces the sinks installed by the previous call.
    """
    resolved = config or LoggingConfig()
    level = _parse_log_level(resolved.level)
    formatter: logging.Formatter = (
        JsonLineFormatter() if resolved.json_lines else logging.Formatter(_TEXT_FORMAT)
    )

    handlers: list[logging.Handler] = [
        logging.StreamHandler(resolved.stream if resolved.stream is not None else sys.stderr)
    ]
    if resolved.log_file is not None:
        log_path = Path(resolved.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logger = logging.getLogger(resolved.logger_name)
    shutdown_logging()

    with _ACTIVE_LOCK:
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            _ACTIVE_HANDLERS.append((logger, handler))
    logger.setLevel(level)
    logger.propagate = False
    return logger


def setup_logging_from_settings(settings: Settings, **overrides: object) -> logging.Logger:
    """Configure logging from the ``[logging]`` section of loaded settings."""
    return setup_logging(
        LoggingConfig(
            level=settings.logging.level,
            json_lines=settings.logging.format == "json",
            **overrides,  # type: ignore[arg-type]
        )
    )


def shutdown_logging() -> None:
    """Detach and close every sink installed by ``setup_logging``."""
    with _ACTIVE_LOCK:
        handlers = list(_ACTIVE_HANDLERS)
        _ACTIVE_HANDLERS.clear()

    for logger, handler in handlers:
        logger.removeHandler(handler)
        handler.flush()
        handler.close()


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")
    if isinstance(value, int):
        return value

    known = logging.getLevelNamesMapping()
    name = value.strip().upper()
    if name not in known:
        raise ValueError(f"unsupported logging level {value!r}")
    return known[name]


def _utc_timestamp(record: logging.LogRecord) -> str:
    moment = datetime.fromtimestamp(int(record.created), tz=UTC)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{int(record.msecs):03d}Z"


def _to_json(value: object) -> JSONValue:
    """Coerce an ``extra=`` value into something ``json.dumps`` accepts."""
    if value is None or isinstance(value, (str, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, Mapping):
        return {str(key): _to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json(item) for item in value]
    return str(value)


__all__ = [
    "JSONValue",
    "JsonLineFormatter",
    "LoggingConfig",
    "setup_logging",
    "setup_logging_from_settings",
    "shutdown_logging",
]
