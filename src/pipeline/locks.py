"""Per-job mutual exclusion for batch runs.

A batch run deletes and repopulates the match set of one job. Runs for the
same job are serialized; runs for different jobs proceed independently.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class JobLocks:
    """Registry of asyncio locks keyed by job id."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def is_locked(self, job_id: str) -> bool:
        lock = self._locks.get(job_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, job_id: str) -> AsyncIterator[None]:
        """Hold the lock for job_id for the duration of the block."""
        lock = self._locks.setdefault(job_id, asyncio.Lock())
        self._holders[job_id] = self._holders.get(job_id, 0) + 1
        if lock.locked():
            logger.info("Batch for job '%s' already running - waiting", job_id)
        try:
            async with lock:
                yield
        finally:
            self._holders[job_id] -= 1
            if not self._holders[job_id]:
                # No holders or waiters left.
                del self._holders[job_id]
                del self._locks[job_id]
