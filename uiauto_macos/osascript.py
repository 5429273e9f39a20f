# uiauto_macos/osascript.py
"""
@file osascript.py
@brief Production script runner backed by the osascript binary.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Any, List, Optional

from .config import TimeConfig
from .exceptions import ScriptExecutionError
from .interfaces import IScriptRunner
from .values import parse_applescript_value


class OsaScriptRunner(IScriptRunner):
    """
    Runs AppleScript through the `osascript` binary.

    Results are requested in source form (`-s s`) so lists, records and
    object specifiers survive the trip and can be decoded structurally.
    """

    def __init__(
        self,
        osascript: str = "osascript",
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        @param osascript Path or name of the osascript executable
        @param timeout Default subprocess timeout (TimeConfig `script_run` when None)
        @param logger Logger for script dispatch
        """
        self.osascript = osascript
        self.default_timeout = timeout
        self.log = logger or logging.getLogger("uiauto_macos")

    def _command(self, script: str) -> List[str]:
        return [self.osascript, "-s", "s", "-e", script]

    def run_script(self, script: str, timeout: Optional[float] = None) -> Any:
        if timeout is None:
            timeout = self.default_timeout
        if timeout is None:
            timeout = TimeConfig.current().script_run.timeout

        self.log.debug("Running AppleScript (timeout=%ss):\n%s", timeout, script)
        try:
            result = subprocess.run(
                self._command(script),
                capture_output=True,
                text=True,
                timeout=timeout or None,
            )
        except subprocess.TimeoutExpired as e:
            self.log.warning("AppleScript timed out after %ss", timeout)
            stderr = e.stderr or ""
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            raise ScriptExecutionError(
                f"osascript did not finish within {timeout}s",
                stderr=stderr,
                script=script,
                timed_out=True,
                cause=e,
            ) from e
        except OSError as e:
            self.log.warning("Could not start %s: %s", self.osascript, e)
            raise ScriptExecutionError(
                f"Could not run {self.osascript}: {e}",
                script=script,
                cause=e,
            ) from e

        if result.returncode != 0:
            self.log.warning("AppleScript failed (exit %s): %s", result.returncode, result.stderr.strip())
            raise ScriptExecutionError(
                "osascript failed",
                returncode=result.returncode,
                stderr=result.stderr,
                script=script,
            )

        return parse_applescript_value(result.stdout)
