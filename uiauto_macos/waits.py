# uiauto_macos/waits.py
"""
@file waits.py
@brief Polling utilities with timeout and cooperative cancellation.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional, TypeVar

from .config import TimeConfig
from .exceptions import Cancelled, PollTimeoutError
from .timinglogger import TIMING_LOGGER

T = TypeVar("T")

Clock = Callable[[], float]
Sleep = Callable[[float], Any]


class CancelToken:
    """
    Cancellation signal shared between a waiting thread and its controller.

    Poll loops check the token before every predicate invocation.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        if not self._event.is_set():
            self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def raise_if_cancelled(self, description: Optional[str] = None) -> None:
        if self._event.is_set():
            raise Cancelled(self._reason, description=description)

    def wait(self, seconds: float) -> bool:
        """Sleep up to seconds; returns early (True) once cancelled."""
        return self._event.wait(seconds)


def _set_timeout_metadata(
    error: PollTimeoutError,
    *,
    description: str,
    timeout: float,
    interval: float,
    attempt_count: int,
    elapsed: float,
    stage: Optional[str],
) -> None:
    error.description = description
    error.timeout = timeout
    error.interval = interval
    error.attempt_count = attempt_count
    error.elapsed_time = elapsed
    error.stage = stage


def _resolve_sleep(sleep: Optional[Sleep], cancel: Optional[CancelToken]) -> Sleep:
    if sleep is not None:
        return sleep
    if cancel is not None:
        return cancel.wait
    return time.sleep


def _poll(
    predicate: Callable[[], Any],
    accept: Callable[[Any], bool],
    *,
    timeout: Optional[float],
    interval: Optional[float],
    description: str,
    stage: Optional[str],
    cancel: Optional[CancelToken],
    clock: Optional[Clock],
    sleep: Optional[Sleep],
    falsy_hint: str,
) -> Any:
    defaults = TimeConfig.current().poll
    timeout = defaults.timeout if timeout is None else timeout
    interval = defaults.interval if interval is None else interval
    now = clock or time.monotonic
    pause = _resolve_sleep(sleep, cancel)

    start_time = now()
    attempt_count = 0

    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_start",
            description=description,
            metadata={"timeout_s": timeout, "interval_s": interval, "stage": stage},
        )

    while True:
        if cancel is not None and cancel.cancelled:
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="wait_cancelled",
                    description=description,
                    status="error",
                    metadata={"attempts": attempt_count, "reason": cancel.reason, "stage": stage},
                )
            cancel.raise_if_cancelled(description)

        elapsed = now() - start_time
        if elapsed >= timeout:
            break

        attempt_count += 1
        result = predicate()
        if accept(result):
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="wait_success",
                    description=description,
                    status="success",
                    metadata={
                        "attempts": attempt_count,
                        "elapsed_s": round(now() - start_time, 3),
                        "stage": stage,
                    },
                )
            return result

        time_left = timeout - (now() - start_time)
        sleep_time = min(interval, time_left)
        if sleep_time > 0:
            pause(sleep_time)

    elapsed = now() - start_time
    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_timeout",
            description=description,
            status="error",
            metadata={
                "timeout_s": timeout,
                "attempts": attempt_count,
                "elapsed_s": round(elapsed, 3),
                "stage": stage,
            },
        )

    error = PollTimeoutError(
        f"Timed out waiting for {description} after {timeout}s ({falsy_hint})"
    )
    _set_timeout_metadata(
        error,
        description=description,
        timeout=timeout,
        interval=interval,
        attempt_count=attempt_count,
        elapsed=elapsed,
        stage=stage,
    )
    raise error


def poll_until(
    predicate: Callable[[], Optional[T]],
    timeout: Optional[float] = None,
    interval: Optional[float] = None,
    description: str = "condition",
    stage: Optional[str] = None,
    cancel: Optional[CancelToken] = None,
    clock: Optional[Clock] = None,
    sleep: Optional[Sleep] = None,
) -> T:
    """
    Repeatedly runs predicate until it returns a truthy value, or until
    timeout. Exceptions raised by predicate propagate unchanged.

    @param timeout Deadline in seconds (TimeConfig `poll` when None)
    @param interval Pause between invocations (TimeConfig `poll` when None)
    @param cancel Token checked before every invocation
    @param clock Monotonic time source, injectable for tests
    @param sleep Pause primitive, injectable for tests
    @return The first truthy predicate result
    @throws PollTimeoutError when the deadline passes
    @throws Cancelled when cancel is observed
    """
    return _poll(
        predicate,
        bool,
        timeout=timeout,
        interval=interval,
        description=description,
        stage=stage,
        cancel=cancel,
        clock=clock,
        sleep=sleep,
        falsy_hint="condition kept returning falsy",
    )


def poll_until_not(
    predicate: Callable[[], Any],
    timeout: Optional[float] = None,
    interval: Optional[float] = None,
    description: str = "condition to become false",
    stage: Optional[str] = None,
    cancel: Optional[CancelToken] = None,
    clock: Optional[Clock] = None,
    sleep: Optional[Sleep] = None,
) -> None:
    """Wait until predicate returns a falsy value."""
    _poll(
        predicate,
        lambda result: not result,
        timeout=timeout,
        interval=interval,
        description=description,
        stage=stage,
        cancel=cancel,
        clock=clock,
        sleep=sleep,
        falsy_hint="condition kept returning truthy",
    )
