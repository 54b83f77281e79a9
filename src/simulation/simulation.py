"""Simulation wrapper used by the command line runner

Runs the same access sequence through several replacement policies so
their hit rates can be compared side by side.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from src.core.policy_factory import new_policy
from src.core.replacement_policies import EvictionPolicy
from src.core.simulator import CacheSimulator
from src.data.stats_export import CacheStats
from src.simulation.trace_log import TraceLogger


@dataclass
class PolicyRun:
    policy: EvictionPolicy
    stats: CacheStats
    hit_rate_history: List[float] = field(default_factory=list)


class Simulation:
    def __init__(self, capacity: int, policies: Sequence[str], trace: bool = True):
        self.capacity = capacity
        self.policies = list(policies)
        self.trace = trace

    def run_simulation(self, keys: Iterable[str]) -> Dict[str, PolicyRun]:
        # every policy gets a fresh instance and the same sequence
        keys = list(keys)
        results: Dict[str, PolicyRun] = {}
        for variant in self.policies:
            policy = new_policy(self.capacity, variant)
            tracer: Optional[TraceLogger] = TraceLogger(policy.name) if self.trace else None
            if tracer is not None:
                tracer.log_start(policy.capacity)
            sim = CacheSimulator(policy, on_access=tracer)
            sim.load_sequence(keys)
            stats = sim.run_all()
            if tracer is not None:
                tracer.log_summary(stats)

            # an unknown name falls back to LRU; key results by what actually ran
            results[policy.name] = PolicyRun(policy, stats, list(sim.hit_rate_history))
        return results
