# tcpping/stats/aggregator.py
from dataclasses import replace

from tcpping.schemas import ProbeOutcome
from tcpping.stats.rules import jitter_term, loss_percent
from tcpping.stats.state import AggregateStats


class StatsAggregator:
    """
    Running statistics over a stream of probe outcomes.

    The first `skip` outcomes are swallowed without touching any counter.
    Timeouts and errors count as loss but leave prev_rtt alone, so jitter
    always compares the last two successes no matter what happened between them.
    """

    def __init__(self, skip: int = 0):
        self.stats = AggregateStats(skip_remaining=max(0, skip))

    def record(self, outcome: ProbeOutcome) -> bool:
        """Fold one outcome into the stats. Returns False if it fell in the skip window."""
        st = self.stats
        if st.skip_remaining > 0:
            st.skip_remaining -= 1
            return False

        st.total_count += 1

        if outcome.status == "success":
            rtt = outcome.rtt_ms
            st.success_count += 1
            st.sum_rtt += rtt
            if st.success_count == 1:
                st.min_rtt = st.max_rtt = rtt
            else:
                st.min_rtt = min(st.min_rtt, rtt)
                st.max_rtt = max(st.max_rtt, rtt)
            # float rounding can push sum/n a hair outside [min, max]
            st.avg_rtt = min(max(st.sum_rtt / st.success_count, st.min_rtt), st.max_rtt)

            term = jitter_term(st.prev_rtt, rtt)
            if term is not None:
                st.jitter_sum += term
                st.jitter_count += 1
                st.jitter_avg = st.jitter_sum / st.jitter_count
            st.prev_rtt = rtt
        else:
            # timeout / error
            st.fail_count += 1

        st.loss_ratio = loss_percent(st.fail_count, st.total_count)
        return True

    def snapshot(self) -> AggregateStats:
        return replace(self.stats)
