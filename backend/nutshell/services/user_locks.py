"""
Per-user locks for scheduling writes.

Operations that check state and then write (overlap check + time block write,
status change, custom order upsert) hold the caller's lock for the whole
sequence, so requests of one user run one at a time inside the process.
"""

import asyncio
import weakref


class UserLockRegistry:
    """One asyncio.Lock per user, dropped once nobody holds a reference."""

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def get(self, user_id: str) -> asyncio.Lock:
        """
        Get the lock for ``user_id``, creating it when no request holds one.

        Callers keep the returned lock referenced while using it
        (``async with registry.get(user_id):``).
        """
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock


user_locks = UserLockRegistry()
