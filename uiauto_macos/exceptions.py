# uiauto_macos/exceptions.py
"""
@file exceptions.py
@brief Custom exception classes for System Events UI automation.
"""

from __future__ import annotations

import traceback
from typing import Any, List, Optional, Sequence


class UIAutoError(Exception):
    """Base exception for the framework."""
    pass


class ConfigError(UIAutoError):
    """Raised when timing configuration or its YAML file is invalid."""
    pass


class MalformedPathError(UIAutoError):
    """
    Raised when an element path string cannot be parsed, or lacks the
    required `application` / `application process` segments.
    """

    def __init__(self, path_string: str, reason: str):
        self.path_string = path_string
        self.reason = reason
        super().__init__(f"Malformed element path {path_string!r}: {reason}")


class PollTimeoutError(UIAutoError):
    """
    Raised when a local poll loop exceeds its deadline.

    Attributes:
        description: Human-readable description of what was being waited for
        timeout: The configured timeout in seconds
        interval: The configured polling interval in seconds
        attempt_count: Number of predicate invocations
        elapsed_time: Actual elapsed time in seconds
        stage: Optional caller-provided stage label
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.description: Optional[str] = None
        self.timeout: Optional[float] = None
        self.interval: Optional[float] = None
        self.attempt_count: Optional[int] = None
        self.elapsed_time: Optional[float] = None
        self.stage: Optional[str] = None

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.interval is not None:
            details.append(f"Interval: {self.interval}s")
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")
        if self.stage is not None:
            details.append(f"Stage: {self.stage}")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg


class Cancelled(UIAutoError):
    """Raised when a wait observes its cancellation token."""

    def __init__(self, reason: Optional[str] = None, description: Optional[str] = None):
        self.reason = reason
        self.description = description
        msg = "Wait cancelled"
        if description:
            msg += f" while waiting for {description}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class CrossProcessBatchError(UIAutoError):
    """Raised when a batched property read spans more than one process."""

    def __init__(self, processes: Sequence[str]):
        self.processes: List[str] = list(processes)
        super().__init__(
            "Batched property lookup requires a single application process, "
            f"got: {', '.join(repr(p) for p in self.processes)}"
        )


class ScriptExecutionError(UIAutoError):
    """
    Raised when the script runner fails to execute a script.

    Carries the diagnostic payload of the external process so the caller
    can decide whether the failure is worth retrying.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: Optional[int] = None,
        stderr: str = "",
        script: Optional[str] = None,
        timed_out: bool = False,
        cause: Optional[BaseException] = None,
    ):
        self.returncode = returncode
        self.stderr = stderr
        self.script = script
        self.timed_out = timed_out
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.returncode is not None:
            base += f" (exit status {self.returncode})"
        if self.timed_out:
            base += " (timed out)"
        if self.stderr:
            base += f": {self.stderr.strip()}"
        return base

    def get_traceback_str(self) -> str:
        """Formatted traceback of the underlying cause, if any."""
        if self.cause is None:
            return ""
        return "".join(
            traceback.format_exception(type(self.cause), self.cause, self.cause.__traceback__)
        )


class ScriptResultError(UIAutoError):
    """Raised when script output cannot be decoded or has an unexpected shape."""

    def __init__(self, message: str, raw: Any = None):
        self.raw = raw
        super().__init__(message)
