# uiauto_macos/config.py
"""
@file config.py
@brief Centralized timeout and polling configuration for element waits.
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Generator, Optional

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError
from .timings import TIMEOUT_FIELDS, build_preset_values, list_presets


_SETTING_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "timeout": {"type": "number", "minimum": 0},
        "interval": {"type": "number", "minimum": 0},
    },
    "additionalProperties": False,
}

TIMINGS_FILE_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "preset": {"type": "string", "enum": sorted(list_presets())},
        "overrides": {
            "type": "object",
            "properties": {name: _SETTING_SCHEMA for name in TIMEOUT_FIELDS},
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


@dataclass
class TimeoutSettings:
    """Timeout and polling interval for one kind of wait."""
    timeout: float
    interval: float

    def with_overrides(
        self,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
    ) -> TimeoutSettings:
        """Create a new settings instance with overrides applied."""
        return TimeoutSettings(
            timeout=timeout if timeout is not None else self.timeout,
            interval=interval if interval is not None else self.interval,
        )


class TimeConfig:
    """
    Timeout configuration for element waits.

    Precedence per run: base defaults -> preset -> overrides.
    The effective config is resolved per thread: run config, then any
    active `override()` block, then the process default.
    """

    _default_instance: Optional[TimeConfig] = None
    _local = threading.local()
    _lock = threading.Lock()

    poll: TimeoutSettings
    element_exists: TimeoutSettings
    element_hidden: TimeoutSettings
    element_match: TimeoutSettings
    external_wait: TimeoutSettings
    script_run: TimeoutSettings

    def __init__(self, preset: Optional[str] = None):
        self.preset = preset or "default"
        self._apply_values(build_preset_values(self.preset))

    def _apply_values(self, values: Dict[str, Any]) -> None:
        for name in TIMEOUT_FIELDS:
            val = values.get(name)
            if isinstance(val, TimeoutSettings):
                setting = deepcopy(val)
            elif isinstance(val, dict):
                setting = TimeoutSettings(
                    timeout=float(val["timeout"]),
                    interval=float(val["interval"]),
                )
            else:
                raise ConfigError(f"Invalid timeout setting for {name}: {val}")
            setattr(self, name, setting)

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: {"timeout": getattr(self, name).timeout, "interval": getattr(self, name).interval}
            for name in TIMEOUT_FIELDS
        }

    def clone(self) -> TimeConfig:
        """Return a deep clone of this config."""
        clone = TimeConfig(self.preset)
        clone._apply_values(self.to_dict())
        return clone

    @classmethod
    def build_from(
        cls,
        *,
        preset: str = "default",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> TimeConfig:
        """Build a deterministic run-scope config snapshot."""
        try:
            cfg = cls(preset)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if overrides:
            _apply_overrides(cfg, overrides)
        return cfg

    @classmethod
    def from_yaml(cls, path: str) -> TimeConfig:
        """
        Build a config from a YAML timings file::

            preset: fast
            overrides:
              element_match: {timeout: 8.0, interval: 0.25}

        @throws ConfigError if the file is missing, unparseable or fails schema validation
        """
        path = os.path.abspath(path)
        if not os.path.exists(path):
            raise ConfigError(f"Timings YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if data is None:
            data = {}
        validator = Draft202012Validator(TIMINGS_FILE_SCHEMA)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
        if errors:
            lines = [f"Timings file validation failed: {path}"]
            for e in errors:
                lines.append(f"- {list(e.path)}: {e.message}")
            raise ConfigError("\n".join(lines))

        return cls.build_from(
            preset=data.get("preset", "default"),
            overrides=data.get("overrides") or {},
        )

    @classmethod
    def default(cls) -> TimeConfig:
        """Get the process default configuration (singleton)."""
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls("default")
        return cls._default_instance

    @classmethod
    def install_run_config(cls, config: TimeConfig) -> None:
        """Install per-thread run configuration snapshot."""
        cls._local.run_config = config

    @classmethod
    def clear_run_config(cls) -> None:
        """Clear per-thread run configuration snapshot."""
        cls._local.run_config = None

    @classmethod
    def current(cls) -> TimeConfig:
        """Get the current effective configuration."""
        run_cfg = getattr(cls._local, "run_config", None)
        if run_cfg is not None:
            return run_cfg

        override = getattr(cls._local, "override", None)
        if override is not None:
            return override

        return cls.default()

    @classmethod
    @contextmanager
    def override(cls, **kwargs: Any) -> Generator[TimeConfig, None, None]:
        """Context manager for temporary configuration overrides."""
        previous = getattr(cls._local, "override", None)
        new_config = cls.current().clone()
        _apply_overrides(new_config, kwargs)

        cls._local.override = new_config
        try:
            yield new_config
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Reset default and clear all thread-local config state."""
        with cls._lock:
            cls._default_instance = cls("default")
        cls._local.override = None
        cls._local.run_config = None


def _apply_overrides(config: TimeConfig, overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if key not in TIMEOUT_FIELDS:
            raise ConfigError(f"Unknown TimeConfig field: {key}")
        base_setting: TimeoutSettings = getattr(config, key)
        if isinstance(value, TimeoutSettings):
            setattr(config, key, deepcopy(value))
        elif isinstance(value, dict):
            setattr(config, key, base_setting.with_overrides(
                timeout=value.get("timeout"),
                interval=value.get("interval"),
            ))
        else:
            raise ConfigError(f"Invalid override for {key}: {value}")


def available_presets() -> Dict[str, Dict[str, Any]]:
    return list_presets()
