"""Bounded, thread-safe LRU cache for product price lookups.

Entries live in a fixed arena of slots; the recency list links slots by
index rather than by object reference, and a dict maps each key to its slot.
``get`` and ``put`` are O(1). A single ``threading.Lock`` guards the map and
the list together, and is only ever held for that bookkeeping: callers must
do any network I/O before calling ``put``.

Note: ``product_cache`` below is one instance per process, shared by every
request. Each uvicorn worker has its own copy, so with --workers 2 a product
may be fetched once per worker.
"""

from __future__ import annotations

import threading
from collections.abc import Hashable
from typing import Generic, TypeVar

from config import settings
from errors import ConfigurationError
from models import ProductSummary

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_NIL = -1


class _Slot:
    __slots__ = ("key", "value", "prev", "next")

    def __init__(self) -> None:
        self.key = None
        self.value = None
        self.prev = _NIL
        self.next = _NIL


class RecencyCache(Generic[K, V]):
    """Fixed-capacity key/value store that evicts the least-recently-used entry.

    Parameters
    ----------
    capacity: int
        Maximum number of entries. Must be a positive integer; anything else
        raises :class:`ConfigurationError`.
    """

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"Cache capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        self._slots = [_Slot() for _ in range(self._capacity)]
        self._index: dict[K, int] = {}
        self._head = _NIL  # most recently used
        self._tail = _NIL  # least recently used
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> V | None:
        """Return the value for `key` and mark it most-recently-used, or None."""
        with self._lock:
            pos = self._index.get(key)
            if pos is None:
                self._misses += 1
                return None
            self._move_to_front(pos)
            self._hits += 1
            return self._slots[pos].value

    def put(self, key: K, value: V) -> None:
        """Insert or overwrite `key`, evicting the oldest entry when full."""
        with self._lock:
            pos = self._index.get(key)
            if pos is not None:
                self._slots[pos].value = value
                self._move_to_front(pos)
                return

            if len(self._index) >= self._capacity:
                pos = self._tail
                self._unlink(pos)
                del self._index[self._slots[pos].key]
                self._evictions += 1
            else:
                # Slots are only released by eviction, which reuses them at once,
                # so the first free slot is always the next unused one.
                pos = len(self._index)

            slot = self._slots[pos]
            slot.key = key
            slot.value = value
            self._index[key] = pos
            self._push_front(pos)

    def clear(self) -> None:
        """Drop every entry and reset counters. Capacity is unchanged."""
        with self._lock:
            self._reset()

    def keys(self) -> list[K]:
        """Snapshot of the cached keys, most recently used first."""
        with self._lock:
            result = []
            pos = self._head
            while pos != _NIL:
                slot = self._slots[pos]
                result.append(slot.key)
                pos = slot.next
            return result

    def stats(self) -> dict:
        with self._lock:
            return {
                "capacity": self._capacity,
                "size": len(self._index),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def __contains__(self, key: object) -> bool:
        # Membership test only; does not count as a use.
        with self._lock:
            return key in self._index

    # Linked-list helpers. Caller must hold self._lock.

    def _unlink(self, pos: int) -> None:
        slot = self._slots[pos]
        if slot.prev != _NIL:
            self._slots[slot.prev].next = slot.next
        else:
            self._head = slot.next
        if slot.next != _NIL:
            self._slots[slot.next].prev = slot.prev
        else:
            self._tail = slot.prev
        slot.prev = slot.next = _NIL

    def _push_front(self, pos: int) -> None:
        slot = self._slots[pos]
        slot.prev = _NIL
        slot.next = self._head
        if self._head != _NIL:
            self._slots[self._head].prev = pos
        self._head = pos
        if self._tail == _NIL:
            self._tail = pos

    def _move_to_front(self, pos: int) -> None:
        if pos == self._head:
            return
        self._unlink(pos)
        self._push_front(pos)


product_cache: RecencyCache[int, ProductSummary] = RecencyCache(settings.cache_capacity)
