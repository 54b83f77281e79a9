"""Statistics and exporters.
"""
import csv
import json
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class CacheStats:
    """Read-only view of a policy's counters at one point in time."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def accesses(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self) -> float:
        return (self.misses / self.accesses) if self.accesses else 0.0

    def as_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data['accesses'] = self.accesses
        data['hit_rate'] = self.hit_rate
        data['miss_rate'] = self.miss_rate
        return data


class Statistics:
    def __init__(self):
        # counters only ever grow for the lifetime of a policy
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def record_access(self, hit: bool, evicted: bool = False):
        # call this exactly once per access
        if hit:
            self.hits += 1
        else:
            self.misses += 1
        if evicted:
            self.evictions += 1

    def snapshot(self) -> CacheStats:
        return CacheStats(hits=self.hits, misses=self.misses, evictions=self.evictions)


STATS_COLUMNS = ['policy', 'accesses', 'hits', 'misses', 'evictions', 'hit_rate', 'miss_rate']


def export_stats_csv(path: str, results: Dict[str, CacheStats]) -> str:
    """Write one CSV row per policy. Returns the path written."""
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(STATS_COLUMNS)
        for policy, stats in results.items():
            writer.writerow([
                policy, stats.accesses, stats.hits, stats.misses, stats.evictions,
                stats.hit_rate, stats.miss_rate,
            ])
    return path


def export_stats_json(path: str, results: Dict[str, CacheStats],
                      hit_rate_history: Optional[Dict[str, Sequence[float]]] = None) -> str:
    """Export per-policy stats (and optional hit-rate history) to JSON."""
    history = hit_rate_history or {}
    data = {
        policy: {
            'stats': stats.as_dict(),
            'hit_rate_history': list(history.get(policy, [])),
        }
        for policy, stats in results.items()
    }
    with open(path, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    return path


def export_hit_rate_chart(path: str, hit_rate_history: Dict[str, List[float]]) -> str:
    """Render running hit rate per policy with matplotlib and save it.

    The output format follows the file extension (pdf, png, svg).
    """
    # Use matplotlib without a display
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6, 2.5))
    try:
        for policy, data in hit_rate_history.items():
            data = list(data) or [0]
            ax.plot(range(1, len(data) + 1), data, linewidth=2, label=policy)
        ax.set_ylim(0, 1)
        ax.set_xlabel('Access')
        ax.set_ylabel('Hit rate')
        if hit_rate_history:
            ax.legend(loc='lower right')
        ax.grid(False)
        fig.tight_layout()
        fig.savefig(path, dpi=150)
    finally:
        plt.close(fig)
    return path
