"""
Property-scoped locks.

Operations touching the same property run one at a time; different
properties proceed concurrently. A lock exists only while some operation
holds or waits for it, so ids that never resolve leave nothing behind.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Dict

logger = logging.getLogger(__name__)


class PropertyLockRegistry:

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        # holders plus waiters per property
        self._users: Dict[str, int] = {}

    @property
    def active(self) -> int:
        """Number of properties with an operation running or queued"""
        return len(self._locks)

    def lock_for(self, property_id: str) -> asyncio.Lock:
        lock = self._locks.get(property_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[property_id] = lock
        return lock

    def is_locked(self, property_id: str) -> bool:
        lock = self._locks.get(property_id)
        return bool(lock and lock.locked())

    @asynccontextmanager
    async def hold(self, property_id: str):
        lock = self.lock_for(property_id)
        self._users[property_id] = self._users.get(property_id, 0) + 1
        try:
            if lock.locked():
                logger.debug(f"Waiting for in-flight operation on property {property_id}")
            async with lock:
                yield
        finally:
            self._users[property_id] -= 1
            if not self._users[property_id]:
                del self._users[property_id]
                del self._locks[property_id]
