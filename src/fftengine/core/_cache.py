"""
Process-wide memo store used by the twiddle and bit-reversal caches.

Reads are plain dict lookups. First-time population of a key holds a lock
owned by that key only, so building the table for one size never blocks
lookups or builds for another size.
"""

import threading
from typing import Callable, Dict, Hashable, Iterator, Tuple, TypeVar

V = TypeVar('V')


class ComputeIfAbsentCache:
    """Insert-if-absent mapping with per-key locking. Entries are never evicted."""

    def __init__(self, name: str):
        self.name = name
        self._values: Dict[Hashable, object] = {}
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, key: Hashable, default=None):
        return self._values.get(key, default)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[Tuple[Hashable, object]]:
        # Snapshot so concurrent inserts do not break iteration
        return iter(list(self._values.items()))

    def keys(self):
        return sorted(self._values.keys())

    def _lock_for(self, key: Hashable) -> threading.Lock:
        lock = self._key_locks.get(key)
        if lock is not None:
            return lock
        with self._guard:
            return self._key_locks.setdefault(key, threading.Lock())

    def get_or_compute(self, key: Hashable, compute: Callable[[Hashable], V]) -> V:
        """
        Return the value for key, computing and publishing it on first use.

        compute runs at most once per key even under concurrent callers.
        """
        value = self._values.get(key)
        if value is not None:
            return value
        with self._lock_for(key):
            value = self._values.get(key)
            if value is None:
                value = compute(key)
                self._values[key] = value
        return value
