"""
typed-jsonb config package public API.

File: src/typed_jsonb/config/__init__.py

Purpose
- Export settings loading entrypoints, the settings dataclasses, and the load error.
"""

from typed_jsonb.config.loader import (
    ConfigLoadError,
    EncodingSettings,
    LogFormat,
    LoggingSettings,
    Settings,
    configure,
    default_settings,
    get_settings,
    load_settings,
)

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
