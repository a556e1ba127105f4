# -*- coding: utf-8 -*-
"""Pacing of calls to external services

Each external service gets its own ``MinIntervalGate``.  The gate is released
after a call returns and the next ``wait()`` blocks until ``interval`` seconds
have passed since then, independent of how long the call itself took.
"""

import time
import typing

from logzero import logger


class MinIntervalGate:
    """Enforce a minimal pause between the end of one call and the start of the next"""

    def __init__(
        self,
        interval: float,
        name: str = "",
        clock: typing.Callable[[], float] = time.monotonic,
        sleep: typing.Callable[[float], None] = time.sleep,
    ):
        if interval < 0:
            raise ValueError("Interval must not be negative: {}".format(interval))
        #: Minimal number of seconds between release and next call
        self.interval = interval
        #: Name of the service, for logging
        self.name = name
        #: Time source
        self._clock = clock
        #: Sleep function
        self._sleep = sleep
        #: Time of the last release, ``None`` before the first call
        self._released_at: typing.Optional[float] = None

    def wait(self) -> float:
        """Block until the next call may be made, return seconds slept"""
        if self._released_at is None:
            return 0.0
        remaining = self.interval - (self._clock() - self._released_at)
        if remaining <= 0:
            return 0.0
        logger.debug("Pacing %s: sleeping %.3f s", self.name or "calls", remaining)
        self._sleep(remaining)
        return remaining

    def release(self) -> None:
        """Record that a call has just finished"""
        self._released_at = self._clock()

    def call(self, func, *args, **kwargs):
        """Call ``func`` after waiting and release the gate afterwards"""
        self.wait()
        try:
            return func(*args, **kwargs)
        finally:
            self.release()
