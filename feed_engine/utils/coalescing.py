"""
Coalescing cache — at most one in-flight computation per key.

Each key maps either to a resolved value or to a shared pending task. Callers
asking for a key that is already being computed await the same task; the
pending marker is removed when the task finishes, whether it succeeded or
failed. A computation returning None is not memoized, so the key can be
retried later.
"""

import asyncio
from typing import Awaitable, Callable, Dict, Generic, Hashable, Optional, TypeVar

from .tasks import TaskTracker

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CoalescingCache(Generic[K, V]):
    """Memoized async computations keyed by K, deduplicated while in flight."""

    def __init__(self, tracker: Optional[TaskTracker] = None):
        self._tracker = tracker or TaskTracker("coalescing")
        self._values: Dict[K, V] = {}
        self._pending: Dict[K, asyncio.Task] = {}

    def __contains__(self, key: K) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: K) -> Optional[V]:
        """Resolved value for key, without starting a computation."""
        return self._values.get(key)

    def is_pending(self, key: K) -> bool:
        return key in self._pending

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def set(self, key: K, value: V) -> None:
        self._values[key] = value

    def discard(self, key: K) -> None:
        """Forget a resolved value. A pending computation for key keeps running."""
        self._values.pop(key, None)

    def start(self, key: K, compute: Callable[[], Awaitable[Optional[V]]]) -> Optional[asyncio.Task]:
        """
        Ensure a computation for key is running and return its task.

        Returns None when the value is already resolved.
        """
        if key in self._values:
            return None
        task = self._pending.get(key)
        if task is not None:
            return task

        async def run() -> Optional[V]:
            value = await compute()
            if value is not None:
                self._values[key] = value
            return value

        task = self._tracker.spawn(run(), name=f"coalesce:{key}")
        self._pending[key] = task

        def _release(done: asyncio.Task, k: K = key) -> None:
            if self._pending.get(k) is done:
                del self._pending[k]

        task.add_done_callback(_release)
        return task

    async def get_or_compute(self, key: K, compute: Callable[[], Awaitable[Optional[V]]]) -> Optional[V]:
        """
        Resolved value, else the shared in-flight result, else a new computation.

        Exceptions raised by compute propagate to every waiter. Cancelling one
        waiter does not cancel the shared computation.
        """
        if key in self._values:
            return self._values[key]
        task = self.start(key, compute)
        if task is None:
            return self._values.get(key)
        return await asyncio.shield(task)
