"""
Per-record lock table.

Serializes read-modify-write sequences on the same record while letting
updates to different records run in parallel. Lock acquisition is bounded:
a writer that cannot get the lock in time gets StoreContentionError
instead of waiting forever.
"""

import asyncio
import contextlib
import logging
from typing import AsyncIterator, Dict, Optional

from core.domain.exceptions import StoreContentionError

logger = logging.getLogger(__name__)


class _Entry:
    """A lock plus the number of coroutines holding or waiting for it."""

    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = asyncio.Lock()
        self.users = 0


class KeyedLockTable:
    """
    Table of asyncio locks keyed by record identifier.

    Entries are reference counted and removed as soon as nobody holds or
    waits for them, so the table only ever contains keys under contention.
    """

    def __init__(self, default_timeout: Optional[float] = None):
        """
        Initialize the lock table.

        Args:
            default_timeout: Seconds to wait for a lock when hold() gets no timeout
        """
        self._entries: Dict[str, _Entry] = {}
        self.default_timeout = default_timeout

    def __len__(self) -> int:
        return len(self._entries)

    def is_locked(self, key: str) -> bool:
        """Return True if some coroutine currently holds the lock for key."""
        entry = self._entries.get(key)
        return entry is not None and entry.lock.locked()

    @contextlib.asynccontextmanager
    async def hold(self, key: str, timeout: Optional[float] = None) -> AsyncIterator[None]:
        """
        Hold the lock for key for the duration of the block.

        Args:
            key: Record identifier
            timeout: Seconds to wait for the lock (None uses the table default)

        Raises:
            StoreContentionError: If the lock was not acquired in time
        """
        if timeout is None:
            timeout = self.default_timeout

        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
        entry.users += 1

        try:
            try:
                await asyncio.wait_for(entry.lock.acquire(), timeout=timeout)
            except asyncio.TimeoutError as exc:
                logger.warning("Timed out after %ss waiting for lock on %s", timeout, key)
                raise StoreContentionError(
                    f"Record {key} is locked by a concurrent update"
                ) from exc

            try:
                yield
            finally:
                entry.lock.release()
        finally:
            entry.users -= 1
            if entry.users == 0 and self._entries.get(key) is entry:
                del self._entries[key]


# Global lock table shared by the repositories of this process
record_locks = KeyedLockTable()
