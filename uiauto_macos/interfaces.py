# uiauto_macos/interfaces.py
"""
@file interfaces.py
@brief Abstract script runner interface.

The runner is the only boundary to the OS: it executes AppleScript text
against System Events and returns the decoded result. Components receive a
runner explicitly so tests can substitute a fake.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from . import scripts


class IScriptRunner(ABC):
    """
    Abstract script runner.

    Implementations provide `run_script`; the query helpers below are
    built on top of it.
    """

    @abstractmethod
    def run_script(self, script: str, timeout: Optional[float] = None) -> Any:
        """
        Execute an AppleScript body.

        Args:
            script: Script source
            timeout: Optional bound on the external call, in seconds

        Returns:
            Decoded result: str, int, float, bool, None, list or dict

        Raises:
            ScriptExecutionError: on external failure
        """
        pass

    def tell_process(self, process_name: str, body: str, timeout: Optional[float] = None) -> Any:
        """Run body inside `tell process <process_name>` of System Events."""
        return self.run_script(scripts.tell_process(process_name, body), timeout=timeout)

    def enumerate_process_elements(self, process_name: str, front_window: bool = False) -> List[str]:
        """
        Raw path strings of every element under the process (or its front window).
        """
        result = self.run_script(scripts.entire_contents(process_name, front_window))
        if result is None:
            return []
        if isinstance(result, str):
            return [result]
        return [str(item) for item in result]

    def element_exists(self, process_name: str, path_string: str) -> bool:
        return bool(self.tell_process(process_name, scripts.exists_query(path_string)))

    def wait_for_exists_externally(
        self,
        process_name: str,
        path_string: str,
        interval: float,
        timeout: Optional[float] = None,
    ) -> None:
        """Block inside the scripting layer until the element exists."""
        self.tell_process(
            process_name,
            scripts.repeat_until_exists(path_string, interval),
            timeout=timeout,
        )

    def wait_for_hidden_externally(
        self,
        process_name: str,
        path_string: str,
        interval: float,
        timeout: Optional[float] = None,
    ) -> None:
        """Block inside the scripting layer while the element exists."""
        self.tell_process(
            process_name,
            scripts.repeat_while_exists(path_string, interval),
            timeout=timeout,
        )
