"""Concurrency tests for the recency cache.

Many threads hammer one shared instance with a randomized mix of ``get`` and
``put``; afterwards (and along the way) the capacity and uniqueness
invariants must hold.
"""

from __future__ import annotations

import random
import threading

import pytest

from models import ProductSummary
from services.cache import RecencyCache

THREADS = 16
OPS_PER_THREAD = 2000


def _hammer(cache: RecencyCache, seed: int, key_space: int, violations: list, barrier: threading.Barrier) -> None:
    rng = random.Random(seed)
    barrier.wait()
    for _ in range(OPS_PER_THREAD):
        key = rng.randrange(key_space)
        if rng.random() < 0.5:
            cache.put(key, ProductSummary(id=key, price=float(key)))
        else:
            value = cache.get(key)
            if value is not None and value.id != key:
                violations.append(f"key {key} returned value for {value.id}")
        if len(cache) > cache.capacity:
            violations.append(f"size {len(cache)} over capacity {cache.capacity}")


@pytest.mark.parametrize("seed", [1, 7, 42])
@pytest.mark.parametrize("capacity,key_space", [(1, 4), (8, 32), (64, 50)])
def test_concurrent_get_put_preserves_invariants(seed, capacity, key_space):
    cache = RecencyCache(capacity)
    violations: list[str] = []
    barrier = threading.Barrier(THREADS)

    threads = [
        threading.Thread(target=_hammer, args=(cache, seed * 1000 + i, key_space, violations, barrier))
        for i in range(THREADS)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert violations == []

    keys = cache.keys()
    assert len(keys) == len(set(keys))
    assert len(keys) == len(cache) <= capacity
    for key in keys:
        assert key in cache
        assert cache.get(key) == ProductSummary(id=key, price=float(key))

    stats = cache.stats()
    assert stats["size"] == len(keys)


def test_concurrent_puts_of_distinct_keys_evict_exactly_the_overflow():
    capacity = 10
    cache = RecencyCache(capacity)
    barrier = threading.Barrier(THREADS)

    def put_range(start: int) -> None:
        barrier.wait()
        for key in range(start, start + 50):
            cache.put(key, ProductSummary(id=key, price=1.0))

    threads = [threading.Thread(target=put_range, args=(i * 50,)) for i in range(THREADS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == capacity
    assert cache.stats()["evictions"] == THREADS * 50 - capacity
