# uiauto_macos/timings.py
"""
@file timings.py
@brief Time configuration presets and defaults for element waits.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict


TIMEOUT_FIELDS: Dict[str, Dict[str, Any]] = {
    "poll": {"timeout": 5.0, "interval": 0.1},
    "element_exists": {"timeout": 5.0, "interval": 0.1},
    "element_hidden": {"timeout": 5.0, "interval": 0.1},
    "element_match": {"timeout": 5.0, "interval": 0.1},
    "external_wait": {"timeout": 60.0, "interval": 0.1},
    "script_run": {"timeout": 30.0, "interval": 0.0},
}

PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "fast": {
        "poll": {"timeout": 3.0, "interval": 0.05},
        "element_exists": {"timeout": 3.0, "interval": 0.05},
        "element_hidden": {"timeout": 3.0, "interval": 0.05},
        "element_match": {"timeout": 3.0, "interval": 0.05},
        "external_wait": {"timeout": 30.0},
        "script_run": {"timeout": 15.0},
    },
    "slow": {
        "poll": {"timeout": 10.0, "interval": 0.2},
        "element_exists": {"timeout": 10.0, "interval": 0.2},
        "element_hidden": {"timeout": 10.0, "interval": 0.2},
        "element_match": {"timeout": 15.0, "interval": 0.3},
        "external_wait": {"timeout": 120.0, "interval": 0.2},
        "script_run": {"timeout": 60.0},
    },
    "ci": {
        "poll": {"timeout": 20.0, "interval": 0.3},
        "element_exists": {"timeout": 20.0, "interval": 0.3},
        "element_hidden": {"timeout": 20.0, "interval": 0.3},
        "element_match": {"timeout": 30.0, "interval": 0.4},
        "external_wait": {"timeout": 180.0, "interval": 0.3},
        "script_run": {"timeout": 90.0},
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **PRESET_OVERRIDES}


def build_preset_values(preset: str) -> Dict[str, Any]:
    preset_key = (preset or "default").lower()
    values: Dict[str, Any] = deepcopy(TIMEOUT_FIELDS)

    if preset_key == "default":
        return values

    overrides = PRESET_OVERRIDES.get(preset_key)
    if overrides is None:
        raise ValueError(f"Unknown timing preset: {preset}")

    for key, value in overrides.items():
        base = deepcopy(values[key])
        base.update(value)
        values[key] = base

    return values
