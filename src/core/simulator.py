"""CacheSimulator coordinates policy accesses and statistics.
Feeds keys into one replacement policy and hands every step to an optional
observability callback. Counters live in the policy, not here.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .replacement_policies import AccessOutcome, Eviction, EvictionPolicy
from ..data.stats_export import CacheStats


@dataclass(frozen=True)
class AccessEvent:
    """Everything an observer may want to know about one access."""

    index: int
    key: str
    outcome: AccessOutcome
    eviction: Optional[Eviction]
    snapshot: List[str]
    hit_rate: float
    # frequency -> keys MRU->LRU, only for policies that group by count
    buckets: Optional[Dict[int, List[str]]] = None

    @property
    def hit(self) -> bool:
        return self.outcome is AccessOutcome.HIT


AccessCallback = Callable[[AccessEvent], None]


class CacheSimulator:
    def __init__(self, policy: EvictionPolicy, on_access: Optional[AccessCallback] = None):
        self.policy = policy
        self.on_access = on_access
        self.sequence: List[str] = []
        self.index = 0
        self.hit_rate_history: List[float] = []

    def load_sequence(self, keys: Iterable[str]):
        self.sequence = [str(k) for k in keys]
        self.index = 0
        # step() walks self.sequence one key at a time

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def step(self) -> Optional[AccessEvent]:
        if not self.has_next():
            return None
        key = self.sequence[self.index]
        self.index += 1

        outcome = self.policy.access(key)
        stats = self.policy.stats()
        self.hit_rate_history.append(stats.hit_rate)

        event = AccessEvent(
            index=self.index,
            key=key,
            outcome=outcome,
            eviction=self.policy.last_eviction,
            snapshot=self.policy.snapshot(),
            hit_rate=stats.hit_rate,
            buckets=self.policy.buckets() if hasattr(self.policy, "buckets") else None,
        )
        if self.on_access:
            self.on_access(event)
        return event

    def run_all(self) -> CacheStats:
        while self.has_next():
            self.step()
        return self.policy.stats()


def run(policy: EvictionPolicy, keys: Iterable[str],
        on_access: Optional[AccessCallback] = None) -> CacheStats:
    """Feed every key through `policy` in order and return its final stats."""
    sim = CacheSimulator(policy, on_access=on_access)
    sim.load_sequence(keys)
    return sim.run_all()
