# uiauto_macos/cli.py
"""
@file cli.py
@brief Command-line interface for uiauto-macos.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .config import TimeConfig
from .element import create_element_references
from .exceptions import Cancelled, PollTimeoutError, UIAutoError
from .osascript import OsaScriptRunner
from .properties import PropertyFetcher
from .resolver import ElementResolver
from .timinglogger import TIMING_LOGGER


def _configure_timing_logger_from_env() -> None:
    """Configure timing logging from environment variables."""
    enabled = os.getenv("UIAUTO_TIMING_LOGGING", "").lower() in {"1", "true", "yes", "on"}
    if not enabled:
        TIMING_LOGGER.disable()
        return

    log_file = os.getenv("UIAUTO_TIMING_LOG_FILE")
    level = os.getenv("UIAUTO_TIMING_LOG_LEVEL", "INFO")
    TIMING_LOGGER.configure(file_path=log_file, level=level)
    TIMING_LOGGER.enable()


def _resolve_time_config(args: argparse.Namespace) -> TimeConfig:
    """Resolve the run-scope timing snapshot without mutating global state."""
    if getattr(args, "timings", None):
        return TimeConfig.from_yaml(args.timings)

    preset = "default"
    if getattr(args, "ci", False):
        preset = "ci"
    elif getattr(args, "fast", False):
        preset = "fast"
    elif getattr(args, "slow", False):
        preset = "slow"
    return TimeConfig.build_from(preset=preset)


def _cmd_elements(resolver: ElementResolver, args: argparse.Namespace) -> int:
    elements = resolver.get_elements(args.process, front_window=args.front_window)
    if args.json:
        payload = [
            {
                "index": e.element_index,
                "application": e.application,
                "application_process": e.application_process,
                "path": e.path_string,
            }
            for e in elements
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        for e in elements:
            print(f"{e.element_index:>5}  {e.path_string}")
    return 0


def _cmd_properties(resolver: ElementResolver, args: argparse.Namespace) -> int:
    elements = resolver.get_elements(args.process, front_window=args.front_window)
    selected = []
    for index in args.indices:
        if not 0 <= index < len(elements):
            print(f"Index {index} out of range (0..{len(elements) - 1})", file=sys.stderr)
            return 1
        selected.append(elements[index])

    fetcher = PropertyFetcher(resolver.runner)
    records = fetcher.get_properties_batch(selected)
    output: List[Dict[str, Any]] = [
        {"index": e.element_index, "path": e.path_string, "properties": props}
        for e, props in zip(selected, records)
    ]
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def _cmd_wait(resolver: ElementResolver, args: argparse.Namespace) -> int:
    element = create_element_references([args.path])[0]
    if args.hidden:
        resolver.wait_for_element_hidden(element, interval=args.interval, timeout=args.timeout)
        print(f"Gone: {element.path_string}")
    else:
        resolver.wait_for_element_exists(element, interval=args.interval, timeout=args.timeout)
        print(f"Exists: {element.path_string}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    argv = argv if argv is not None else sys.argv[1:]
    _configure_timing_logger_from_env()

    p = argparse.ArgumentParser(
        prog="uiauto-macos",
        description="uiauto-macos - System Events element inspection and waits",
    )
    p.add_argument("--timings", default=None, help="YAML timings file (preset + overrides)")
    speed = p.add_mutually_exclusive_group()
    speed.add_argument("--fast", action="store_true", help="Use the fast timing preset")
    speed.add_argument("--slow", action="store_true", help="Use the slow timing preset")
    speed.add_argument("--ci", action="store_true", help="Use the CI timing preset")
    p.add_argument("--osascript", default="osascript", help="osascript executable")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    elp = sub.add_parser("elements", help="List every element of a process")
    elp.add_argument("process", help="Application process name, e.g. Finder")
    elp.add_argument("--front-window", action="store_true", help="Only the front window")
    elp.add_argument("--json", action="store_true", help="Emit JSON")

    prp = sub.add_parser("properties", help="Read properties of enumerated elements")
    prp.add_argument("process", help="Application process name")
    prp.add_argument("indices", nargs="+", type=int, help="Enumeration indices")
    prp.add_argument("--front-window", action="store_true", help="Only the front window")

    wp = sub.add_parser("wait", help="Wait for an element path to exist or disappear")
    wp.add_argument("path", help="Full element path")
    wp.add_argument("--hidden", action="store_true", help="Wait until the element is gone")
    wp.add_argument("--timeout", type=float, default=None, help="Local timeout in seconds")
    wp.add_argument("--interval", type=float, default=None, help="Polling interval in seconds")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        TimeConfig.install_run_config(_resolve_time_config(args))
        resolver = ElementResolver(OsaScriptRunner(osascript=args.osascript))
        handlers = {"elements": _cmd_elements, "properties": _cmd_properties, "wait": _cmd_wait}
        return handlers[args.cmd](resolver, args)
    except (PollTimeoutError, Cancelled) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except UIAutoError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        TimeConfig.clear_run_config()


if __name__ == "__main__":
    sys.exit(main())
