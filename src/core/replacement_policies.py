"""Replacement policy implementations for the cache policy simulator.

This module provides three policies behind one small, consistent API so the
simulator can drive them interchangeably:

- LRUReplacement(capacity)
- FIFOReplacement(capacity)
- LFUReplacement(capacity)

API:
- access(key): register an access, return AccessOutcome.HIT or MISS
- stats(): immutable CacheStats snapshot (hits, misses, hit_rate)
- snapshot(): resident keys in the policy's display order
- last_eviction: the Eviction caused by the most recent access, or None

The policies never print or log; the simulator hands each step to an
observability callback instead.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from src.data.stats_export import CacheStats, Statistics


class AccessOutcome(str, Enum):
    """Result of a single access."""

    HIT = "HIT"
    MISS = "MISS"


@dataclass(frozen=True)
class Eviction:
    """A key pushed out to make room for a new one.

    `frequency` is only filled in by LFU (the count the key had when evicted).
    """

    key: str
    frequency: Optional[int] = None


class EvictionPolicy(ABC):
    """Common contract for all replacement policies.

    Subclasses implement `_on_hit` and `_on_miss`; counters and the
    eviction record are handled here so every policy counts the same way.
    """

    name = "BASE"

    def __init__(self, capacity: int):
        # a zero-capacity cache is meaningless, treat it as a single slot
        self._capacity = max(1, int(capacity))
        self._stats = Statistics()
        self.last_eviction: Optional[Eviction] = None

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def hits(self) -> int:
        return self._stats.hits

    @property
    def misses(self) -> int:
        return self._stats.misses

    def access(self, key: str) -> AccessOutcome:
        """Register an access to `key` and report whether it was resident."""
        if key in self:
            self._on_hit(key)
            self.last_eviction = None
            self._stats.record_access(True)
            return AccessOutcome.HIT

        evicted = None
        if len(self) >= self._capacity:
            evicted = self._evict()
        self._insert(key)
        self.last_eviction = evicted
        self._stats.record_access(False, evicted=evicted is not None)
        assert len(self) <= self._capacity
        return AccessOutcome.MISS

    def stats(self) -> CacheStats:
        return self._stats.snapshot()

    @abstractmethod
    def snapshot(self) -> List[str]:
        """Return resident keys in the policy's display order."""

    @abstractmethod
    def _on_hit(self, key: str) -> None:
        ...

    @abstractmethod
    def _evict(self) -> Eviction:
        ...

    @abstractmethod
    def _insert(self, key: str) -> None:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self)})"


class LRUReplacement(EvictionPolicy):
    """Least-Recently-Used replacement using OrderedDict.

    The most recently used key sits at the end of the dict, so the least
    recently used one is always at the beginning.
    """

    name = "LRU"

    def __init__(self, capacity: int):
        super().__init__(capacity)
        self._od: "OrderedDict[str, None]" = OrderedDict()

    def _on_hit(self, key: str) -> None:
        # mark as most recently used
        self._od.move_to_end(key)

    def _evict(self) -> Eviction:
        assert self._od, "eviction from an empty LRU cache"
        key, _ = self._od.popitem(last=False)
        return Eviction(key)

    def _insert(self, key: str) -> None:
        self._od[key] = None

    def snapshot(self) -> List[str]:
        """Return keys from MRU -> LRU."""
        return list(reversed(self._od))

    def __len__(self) -> int:
        return len(self._od)

    def __contains__(self, key: object) -> bool:
        return key in self._od


class FIFOReplacement(EvictionPolicy):
    """First-In-First-Out replacement using deque.

    Hits never touch the queue, which is what separates it from LRU.
    """

    name = "FIFO"

    def __init__(self, capacity: int):
        super().__init__(capacity)
        self._dq: "deque[str]" = deque()
        self._set = set()

    def _on_hit(self, key: str) -> None:
        return

    def _evict(self) -> Eviction:
        assert self._dq, "eviction from an empty FIFO cache"
        key = self._dq.popleft()
        self._set.discard(key)
        return Eviction(key)

    def _insert(self, key: str) -> None:
        self._dq.append(key)
        self._set.add(key)

    def snapshot(self) -> List[str]:
        """Return keys from oldest -> newest."""
        return list(self._dq)

    def __len__(self) -> int:
        return len(self._set)

    def __contains__(self, key: object) -> bool:
        return key in self._set


class _Node:
    """Doubly linked list node holding one resident key and its count."""

    __slots__ = ("key", "frequency", "prev", "next")

    def __init__(self, key: str, frequency: int = 1):
        self.key = key
        self.frequency = frequency
        self.prev: Optional["_Node"] = None
        self.next: Optional["_Node"] = None


class _Bucket:
    """Keys sharing one frequency, most recently touched at the head.

    Sentinel head/tail nodes keep push, unlink and pop free of edge cases.
    """

    def __init__(self):
        self._head = _Node("")
        self._tail = _Node("")
        self._head.next = self._tail
        self._tail.prev = self._head
        self._size = 0

    def push_front(self, node: _Node) -> None:
        node.prev = self._head
        node.next = self._head.next
        self._head.next.prev = node
        self._head.next = node
        self._size += 1

    def unlink(self, node: _Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = None
        self._size -= 1

    def pop_back(self) -> _Node:
        node = self._tail.prev
        assert node is not self._head, "pop from an empty frequency bucket"
        self.unlink(node)
        return node

    def keys(self) -> List[str]:
        out = []
        node = self._head.next
        while node is not self._tail:
            out.append(node.key)
            node = node.next
        return out

    def __len__(self) -> int:
        return self._size


class LFUReplacement(EvictionPolicy):
    """Least-Frequently-Used replacement in O(1) per access.

    Three structures move together:

    - ``_directory``: key -> node (the node knows its frequency and links)
    - ``_buckets``: frequency -> _Bucket, MRU to LRU within the frequency
    - ``_min_frequency``: lowest frequency that currently has a bucket

    Ties at the lowest frequency go to the least recently touched key, so the
    victim is always the tail of ``_buckets[_min_frequency]``. Empty buckets
    are dropped, which keeps the pointer check a plain dict lookup.
    """

    name = "LFU"

    def __init__(self, capacity: int):
        super().__init__(capacity)
        self._directory: Dict[str, _Node] = {}
        self._buckets: Dict[int, _Bucket] = {}
        self._min_frequency = 0

    def frequency_of(self, key: str) -> Optional[int]:
        """Return the access count of a resident key, or None."""
        node = self._directory.get(key)
        return node.frequency if node is not None else None

    def _push(self, node: _Node) -> None:
        bucket = self._buckets.get(node.frequency)
        if bucket is None:
            bucket = self._buckets[node.frequency] = _Bucket()
        bucket.push_front(node)

    def _on_hit(self, key: str) -> None:
        node = self._directory[key]
        old_frequency = node.frequency
        bucket = self._buckets[old_frequency]
        bucket.unlink(node)
        if not bucket:
            del self._buckets[old_frequency]
            # only the promoted key could have been holding the minimum
            if old_frequency == self._min_frequency:
                self._min_frequency = old_frequency + 1
        node.frequency = old_frequency + 1
        self._push(node)

    def _evict(self) -> Eviction:
        bucket = self._buckets.get(self._min_frequency)
        assert bucket, f"minimum frequency {self._min_frequency} has no bucket"
        node = bucket.pop_back()
        if not bucket:
            del self._buckets[self._min_frequency]
        del self._directory[node.key]
        return Eviction(node.key, node.frequency)

    def _insert(self, key: str) -> None:
        node = _Node(key)
        self._directory[key] = node
        self._push(node)
        # a fresh key is always among the least frequent
        self._min_frequency = 1

    def snapshot(self) -> List[str]:
        """Return keys grouped by ascending frequency, MRU first in a group."""
        keys = []
        for frequency in sorted(self._buckets):
            keys.extend(self._buckets[frequency].keys())
        return keys

    def buckets(self) -> Dict[int, List[str]]:
        """Return {frequency: keys MRU->LRU} for display."""
        return {f: self._buckets[f].keys() for f in sorted(self._buckets)}

    def check_invariants(self) -> None:
        """Assert that directory, buckets and the minimum pointer agree."""
        seen = 0
        for frequency, bucket in self._buckets.items():
            assert len(bucket) > 0, f"empty bucket left for frequency {frequency}"
            for key in bucket.keys():
                assert self._directory[key].frequency == frequency
                seen += 1
        assert seen == len(self._directory)
        if self._directory:
            assert self._min_frequency == min(self._buckets)

    def __len__(self) -> int:
        return len(self._directory)

    def __contains__(self, key: object) -> bool:
        return key in self._directory


__all__ = [
    "AccessOutcome",
    "Eviction",
    "EvictionPolicy",
    "LRUReplacement",
    "FIFOReplacement",
    "LFUReplacement",
]
