"""Fixed-interval pacer for outbound generation calls.

Guarantees a minimum spacing between successive releases so the batch loop
never calls the generation service faster than the configured interval.
"""

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Pacer:
    """Releases callers no more often than once per ``interval_seconds``.

    Usage::

        pacer = Pacer(0.1)
        for item in items:
            await pacer.wait()
            ...  # call the rate-limited service

    The first wait() returns immediately. An interval of 0 disables pacing.
    """

    def __init__(
        self,
        interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_seconds < 0:
            msg = f"interval_seconds must be >= 0, got {interval_seconds}"
            raise ValueError(msg)
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._last_release: float | None = None
        self._lock = asyncio.Lock()

    async def wait(self) -> float:
        """Suspend until the interval since the previous release has elapsed.

        Returns the number of seconds actually slept.
        """
        async with self._lock:
            slept = 0.0
            if self._last_release is not None and self.interval_seconds > 0:
                remaining = self._last_release + self.interval_seconds - self._clock()
                if remaining > 0:
                    logger.debug("Pacing: sleeping %.3fs", remaining)
                    await asyncio.sleep(remaining)
                    slept = remaining
            self._last_release = self._clock()
            return slept

    def reset(self) -> None:
        """Forget the previous release so the next wait() is immediate."""
        self._last_release = None
