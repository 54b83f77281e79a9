"""Per-step trace output for simulator runs.

TraceLogger is the observability sink handed to CacheSimulator as its
`on_access` callback. It only reads the events it receives.
"""
import structlog

from src.core.simulator import AccessEvent
from src.data.stats_export import CacheStats


def format_hit_rate(rate: float) -> str:
    """Format a 0..1 hit rate as a percentage with two decimals."""
    return f"{rate * 100.0:.2f}%"


class TraceLogger:
    def __init__(self, policy_name: str, logger=None):
        self.policy_name = policy_name
        self.log = (logger or structlog.get_logger(__name__)).bind(policy=policy_name)

    def __call__(self, event: AccessEvent) -> None:
        fields = {'cache': event.snapshot}
        if event.buckets is not None:
            fields['frequencies'] = event.buckets
        self.log.info(
            "cache_access",
            step=event.index,
            key=event.key,
            outcome=event.outcome.value,
            **fields,
        )
        if event.eviction is not None:
            fields = {'evicted': event.eviction.key}
            if event.eviction.frequency is not None:
                fields['frequency'] = event.eviction.frequency
            self.log.info("cache_eviction", **fields)

    def log_start(self, capacity: int) -> None:
        self.log.info("simulation_started", capacity=capacity)

    def log_summary(self, stats: CacheStats) -> None:
        self.log.info(
            "simulation_complete",
            total_accesses=stats.accesses,
            hits=stats.hits,
            misses=stats.misses,
            hit_rate=format_hit_rate(stats.hit_rate),
        )
