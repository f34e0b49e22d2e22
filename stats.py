# stats.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Any, Mapping

from states import STATE_NAMES, is_known_state

@dataclass(frozen=True)
class DashboardStats:
    """Aggregate counts over the canonical host list."""

    host_count: int = 0
    scanned_count: int = 0
    state_counts: Mapping[str, int] = field(default_factory=lambda: {name: 0 for name in STATE_NAMES})

    def __post_init__(self):
        if not isinstance(self.state_counts, MappingProxyType):
            object.__setattr__(self, "state_counts", MappingProxyType(dict(self.state_counts)))

    @property
    def unscanned_count(self) -> int:
        return self.host_count - self.scanned_count

    @property
    def unrecognized_count(self) -> int:
        """Hosts whose state falls in none of the known buckets."""
        return self.host_count - sum(self.state_counts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host_count": self.host_count,
            "scanned_count": self.scanned_count,
            "unscanned_count": self.unscanned_count,
            "state": dict(self.state_counts),
        }

def compute_stats(hosts: Iterable) -> DashboardStats:
    """Recomputes statistics from scratch for a list of host records.

    Args:
        hosts: HostRecord objects with normalized states. Not modified.

    Returns:
        DashboardStats: Fresh counts; states outside STATE_NAMES count in no bucket.
    """
    state_counts = {name: 0 for name in STATE_NAMES}
    host_count = 0
    scanned_count = 0
    for host in hosts:
        host_count += 1
        if host.last_checked is not None:
            scanned_count += 1
        if is_known_state(host.state):
            state_counts[host.state] += 1
    return DashboardStats(host_count=host_count, scanned_count=scanned_count, state_counts=state_counts)
