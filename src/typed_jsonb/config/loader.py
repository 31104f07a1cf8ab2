"""
typed-jsonb — runtime settings loader

File: src/typed_jsonb/config/loader.py

Purpose
- Load effective settings from defaults, a TOML file, env vars, and explicit overrides.
- Hold the process-wide active settings consulted by document encoding.

What should be included in this file
- Precedence logic: overrides > env (TYPED_JSONB_) > file > defaults.
- TOML loading via ``tomllib``.
- Deterministic environment variable mapping and coercion.

Functional requirements
- Reject unknown keys and wrongly typed values with ``ConfigLoadError``.

Non-functional requirements
- Loading is deterministic; no settings are read at import time.
"""

from __future__ import annotations

import os
import threading
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Literal

from typed_jsonb.constants import DEFAULT_CONFIG_FILE, ENV_PREFIX
from typed_jsonb.errors import JsonbError

LogFormat = Literal["json", "text"]

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_LOG_FORMATS: Final[tuple[str, ...]] = ("json", "text")


class ConfigLoadError(JsonbError, ValueError):
    """Raised when settings cannot be loaded or overrides cannot be coerced."""


@dataclass(frozen=True, slots=True)
class EncodingSettings:
    """Options passed to ``json.dumps`` when a document is serialized."""

    sort_keys: bool = False
    ensure_ascii: bool = False
    compact: bool = True

    @property
    def separators(self) -> tuple[str, str]:
        return (",", ":") if self.compact else (", ", ": ")


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    level: str = "WARNING"
    format: LogFormat = "json"


@dataclass(frozen=True, slots=True)
class Settings:
    encoding: EncodingSettings = field(default_factory=EncodingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {
            "encoding": {
                "sort_keys": self.encoding.sort_keys,
                "ensure_ascii": self.encoding.ensure_ascii,
                "compact": self.encoding.compact,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
        }


_BINDINGS: Final[dict[tuple[str, str], type]] = {
    ("encoding", "sort_keys"): bool,
    ("encoding", "ensure_ascii"): bool,
    ("encoding", "compact"): bool,
    ("logging", "level"): str,
    ("logging", "format"): str,
}

_ACTIVE_LOCK = threading.Lock()
_ACTIVE_SETTINGS: Settings = Settings()


def default_settings() -> Settings:
    return Settings()


def load_settings(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load effective settings with deterministic precedence: overrides > env > file > defaults.

    ``overrides`` uses dotted keys (``"encoding.sort_keys"``). When
    ``config_path`` is omitted, ``typed_jsonb.toml`` in the working directory is
    read if it exists.
    """

    explicit_path = config_path is not None
    resolved_path = _resolve_config_path(config_path)
    env_map = dict(os.environ if environ is None else environ)

    merged = default_settings().to_dict()
    _merge(merged, _load_toml_file(resolved_path, required=explicit_path), source=str(resolved_path))
    _merge(merged, _collect_env_overrides(env_map), source="environment")
    _merge(merged, _materialize_overrides(overrides or {}), source="overrides")

    return _build_settings(merged)


def get_settings() -> Settings:
    """Return the active process-wide settings."""
    with _ACTIVE_LOCK:
        return _ACTIVE_SETTINGS


def configure(settings: Settings | None = None) -> Settings:
    """Install ``settings`` (or the defaults) as the active settings and return the previous ones."""
    global _ACTIVE_SETTINGS
    with _ACTIVE_LOCK:
        previous = _ACTIVE_SETTINGS
        _ACTIVE_SETTINGS = settings if settings is not None else default_settings()
    return previous


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / DEFAULT_CONFIG_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc


def _merge(
    target: dict[str, dict[str, object]],
    payload: Mapping[str, object],
    *,
    source: str,
) -> None:
    for section in sorted(payload):
        values = payload[section]
        if section not in target:
            raise ConfigLoadError(f"{source}: unknown settings section {section!r}")
        if not isinstance(values, Mapping):
            raise ConfigLoadError(f"{source}: section {section!r} must be a table")
        for key in sorted(values):
            expected = _BINDINGS.get((section, key))
            if expected is None:
                raise ConfigLoadError(f"{source}: unknown setting {section}.{key}")
            value = values[key]
            if type(value) is not expected:
                raise ConfigLoadError(
                    f"{source}: {section}.{key} must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            target[section][key] = value


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, dict[str, object]]:
    overrides: dict[str, dict[str, object]] = {}
    for path in sorted(_BINDINGS):
        env_name = _env_name_for_path(path)
        raw = environ.get(env_name)
        if raw is None:
            continue
        value = _coerce_env(raw, _BINDINGS[path], env_name, path)
        overrides.setdefault(path[0], {})[path[1]] = value
    return overrides


def _coerce_env(raw: str, value_type: type, env_name: str, path: tuple[str, str]) -> object:
    value = raw.strip()
    if value_type is str:
        return value

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{env_name} -> {'.'.join(path)} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


def _materialize_overrides(overrides: Mapping[str, object]) -> dict[str, dict[str, object]]:
    payload: dict[str, dict[str, object]] = {}
    for key in sorted(overrides):
        value = overrides[key]
        if isinstance(value, Mapping):
            payload.setdefault(key, {}).update(value)
            continue
        parts = tuple(part for part in key.split(".") if part)
        if len(parts) != 2:
            raise ConfigLoadError(f"invalid override key {key!r}; expected 'section.name'")
        payload.setdefault(parts[0], {})[parts[1]] = value
    return payload


def _build_settings(merged: Mapping[str, Mapping[str, object]]) -> Settings:
    encoding = merged["encoding"]
    logging_section = merged["logging"]

    log_format = str(logging_section["format"]).strip().lower()
    if log_format not in _LOG_FORMATS:
        raise ConfigLoadError(
            f"logging.format must be one of {', '.join(_LOG_FORMATS)}, got {log_format!r}"
        )
    level = str(logging_section["level"]).strip().upper()
    if not level:
        raise ConfigLoadError("logging.level must not be empty")

    return Settings(
        encoding=EncodingSettings(
            sort_keys=bool(encoding["sort_keys"]),
            ensure_ascii=bool(encoding["ensure_ascii"]),
            compact=bool(encoding["compact"]),
        ),
        logging=LoggingSettings(level=level, format=log_format),  # type: ignore[arg-type]
    )


def _env_name_for_path(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "_".join(part.upper() for part in path)


__all__ = [
    "ConfigLoadError",
    "EncodingSettings",
    "LogFormat",
    "LoggingSettings",
    "Settings",
    "configure",
    "default_settings",
    "get_settings",
    "load_settings",
]
