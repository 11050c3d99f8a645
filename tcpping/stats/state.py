# tcpping/stats/state.py
from dataclasses import dataclass, asdict


@dataclass
class AggregateStats:
    total_count: int = 0
    success_count: int = 0
    fail_count: int = 0
    loss_ratio: float = 0.0          # percent of counted probes that failed

    # latency, only meaningful once success_count > 0
    sum_rtt: float = 0.0
    min_rtt: float | None = None
    max_rtt: float | None = None
    avg_rtt: float | None = None

    # jitter between consecutive successes
    prev_rtt: float | None = None
    jitter_sum: float = 0.0
    jitter_count: int = 0
    jitter_avg: float | None = None

    # warm-up probes still to be ignored
    skip_remaining: int = 0

    @property
    def range_rtt(self) -> float | None:
        if self.min_rtt is None or self.max_rtt is None:
            return None
        return self.max_rtt - self.min_rtt

    def as_dict(self) -> dict:
        d = asdict(self)
        d["range_rtt"] = self.range_rtt
        return d
