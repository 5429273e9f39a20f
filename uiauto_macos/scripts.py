# uiauto_macos/scripts.py
"""
@file scripts.py
@brief AppleScript text builders for System Events queries.
"""

from __future__ import annotations

from textwrap import dedent, indent
from typing import Sequence

from .path import quote_applescript_string


def _format_interval(interval: float) -> str:
    # AppleScript `delay` takes seconds; avoid exponent notation.
    return f"{max(float(interval), 0.0):.3f}".rstrip("0").rstrip(".") or "0"


def tell_process(process_name: str, body: str) -> str:
    """Wrap body in `tell application "System Events"` / `tell process`."""
    inner = indent(dedent(body).strip("\n"), "    ")
    return (
        'tell application "System Events"\n'
        f"  tell process {quote_applescript_string(process_name)}\n"
        f"{inner}\n"
        "  end tell\n"
        "end tell"
    )


def entire_contents(process_name: str, front_window: bool = False) -> str:
    target = "front window of process" if front_window else "process"
    return (
        'tell application "System Events"\n'
        f"  tell {target} {quote_applescript_string(process_name)}\n"
        "    get entire contents\n"
        "  end tell\n"
        "end tell"
    )


def exists_query(path_string: str) -> str:
    return f"exists {path_string}"


def repeat_until_exists(path_string: str, interval: float) -> str:
    return (
        f"repeat until exists {path_string}\n"
        f"  delay {_format_interval(interval)}\n"
        "end repeat"
    )


def repeat_while_exists(path_string: str, interval: float) -> str:
    return (
        f"repeat while exists {path_string}\n"
        f"  delay {_format_interval(interval)}\n"
        "end repeat"
    )


def properties_query(path_strings: Sequence[str]) -> str:
    """One round trip returning a list of property records, in input order."""
    items = ", ".join(f"(get properties of {p})" for p in path_strings)
    return f"return {{{items}}}"
