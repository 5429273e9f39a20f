# uiauto_macos/timinglogger.py
"""
@file timinglogger.py
@brief Timing-specific logger for wait/poll observability.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, Optional

_STATUS_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "error": logging.WARNING,
}


class TimingLogger:
    """Thread-safe, opt-in logger for poll loop events."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._file_handler: Optional[logging.Handler] = None
        self._log = logger or logging.getLogger("uiauto_macos.timing")

    def configure(
        self,
        *,
        file_path: Optional[str] = None,
        level: str = "INFO",
    ) -> None:
        """Configure level and an optional file sink."""
        with self._lock:
            self._log.setLevel(level.upper())
            if self._file_handler is not None:
                self._log.removeHandler(self._file_handler)
                self._file_handler.close()
                self._file_handler = None
            if file_path:
                os.makedirs(os.path.dirname(os.path.abspath(file_path)) or ".", exist_ok=True)
                handler = logging.FileHandler(file_path, encoding="utf-8")
                handler.setFormatter(logging.Formatter("%(asctime)s %(message)s", "%H:%M:%S"))
                self._log.addHandler(handler)
                self._file_handler = handler

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log(
        self,
        *,
        event: str,
        description: Optional[str] = None,
        status: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Emit a timing log event."""
        if not self._enabled:
            return

        parts = [f"[{status.lower()}]", "[timing]", f"event={event}"]
        if description:
            parts.append(f"description={description}")
        for key, value in (metadata or {}).items():
            parts.append(f"{key}={value}")

        self._log.log(_STATUS_LEVELS.get(status.lower(), logging.INFO), " ".join(parts))


TIMING_LOGGER = TimingLogger()
