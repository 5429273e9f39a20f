# uiauto_macos/resolver.py
"""
@file resolver.py
@brief Enumerates process elements and waits on their existence or on a matcher.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, List, Optional, Union

from .config import TimeConfig
from .element import BaseElementReference, ElementReference, create_element_references
from .interfaces import IScriptRunner
from .waits import CancelToken, Clock, Sleep, poll_until, poll_until_not

ElementLike = Union[ElementReference, BaseElementReference]
Matcher = Callable[[ElementReference], Any]


def _settle(result: Any) -> Any:
    """Run an awaitable matcher result to completion; plain values pass through."""
    if inspect.isawaitable(result):
        return asyncio.run(_await(result))
    return result


async def _await(awaitable: Any) -> Any:
    return await awaitable


class ElementResolver:
    """
    Resolves System Events elements through an injected script runner.

    Existence waits come in two shapes: without a timeout the repeat loop
    runs inside the scripting layer and any runner error surfaces as is;
    with a timeout, a cancel token, or `local=True` the loop is local, takes
    the configured timeout when none is given and ends in PollTimeoutError.
    The scripting-layer loop cannot observe a CancelToken.
    """

    def __init__(
        self,
        runner: IScriptRunner,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ):
        """
        @param runner Script runner used for every external call
        @param clock Time source forwarded to local poll loops
        @param sleep Pause primitive forwarded to local poll loops
        """
        self.runner = runner
        self.log = logger or logging.getLogger("uiauto_macos")
        self._clock = clock
        self._sleep = sleep

    def get_elements(self, process_name: str, front_window: bool = False) -> List[ElementReference]:
        """Enumerate the entire contents of a process as one reference batch."""
        paths = self.runner.enumerate_process_elements(process_name, front_window=front_window)
        self.log.debug("Enumerated %d element(s) of %r", len(paths), process_name)
        return create_element_references(paths)

    def element_exists(self, element: ElementLike) -> bool:
        return self.runner.element_exists(element.application_process, element.path_string)

    def wait_for_element_exists(
        self,
        element: ElementLike,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel: Optional[CancelToken] = None,
        local: bool = False,
    ) -> None:
        settings = TimeConfig.current().element_exists
        interval = settings.interval if interval is None else interval

        if timeout is None and not local and cancel is None:
            self.runner.wait_for_exists_externally(
                element.application_process,
                element.path_string,
                interval,
                timeout=TimeConfig.current().external_wait.timeout,
            )
            return

        poll_until(
            lambda: self.element_exists(element),
            timeout=settings.timeout if timeout is None else timeout,
            interval=interval,
            description=f"element {element.path_string!r} to exist",
            cancel=cancel,
            clock=self._clock,
            sleep=self._sleep,
        )

    def wait_for_element_hidden(
        self,
        element: ElementLike,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        cancel: Optional[CancelToken] = None,
        local: bool = False,
    ) -> None:
        settings = TimeConfig.current().element_hidden
        interval = settings.interval if interval is None else interval

        if timeout is None and not local and cancel is None:
            self.runner.wait_for_hidden_externally(
                element.application_process,
                element.path_string,
                interval,
                timeout=TimeConfig.current().external_wait.timeout,
            )
            return

        poll_until_not(
            lambda: self.element_exists(element),
            timeout=settings.timeout if timeout is None else timeout,
            interval=interval,
            description=f"element {element.path_string!r} to disappear",
            cancel=cancel,
            clock=self._clock,
            sleep=self._sleep,
        )

    def wait_for_element_match(
        self,
        process_name: str,
        matcher: Matcher,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        front_window: bool = False,
        cancel: Optional[CancelToken] = None,
    ) -> ElementReference:
        """
        Re-enumerate the process until matcher accepts an element.

        Within one pass the matcher runs sequentially in index order and the
        first accepted element wins; later elements are not evaluated. An
        async matcher is awaited per element before the next one runs.

        @throws PollTimeoutError if no pass finds a match in time
        @throws Cancelled if cancel is observed
        """
        settings = TimeConfig.current().element_match
        timeout = settings.timeout if timeout is None else timeout
        interval = settings.interval if interval is None else interval
        description = f"element matching {getattr(matcher, '__name__', 'matcher')} in {process_name!r}"

        def find_first() -> Optional[ElementReference]:
            for element in self.get_elements(process_name, front_window=front_window):
                if cancel is not None:
                    cancel.raise_if_cancelled(description)
                if _settle(matcher(element)):
                    return element
            return None

        return poll_until(
            find_first,
            timeout=timeout,
            interval=interval,
            description=description,
            cancel=cancel,
            clock=self._clock,
            sleep=self._sleep,
        )
