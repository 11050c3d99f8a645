# tests/test_stats_unit.py
import itertools

import pytest

from tcpping.schemas import ProbeOutcome
from tcpping.stats.aggregator import StatsAggregator
from tcpping.stats.rules import jitter_term, loss_percent


def ok(ms):
    return ProbeOutcome.success(ms)


def feed(outcomes, skip=0):
    agg = StatsAggregator(skip=skip)
    for o in outcomes:
        agg.record(o)
    return agg.snapshot()


def test_empty_snapshot_has_no_division_by_zero():
    """Zero probes (e.g. cancelled right away) gives zeroed, None-safe stats."""
    st = StatsAggregator().snapshot()
    assert st.total_count == st.success_count == st.fail_count == 0
    assert st.loss_ratio == 0.0
    assert st.min_rtt is None and st.max_rtt is None and st.avg_rtt is None
    assert st.jitter_avg is None
    assert st.range_rtt is None


def test_mixed_stream_summary():
    """Success/timeout/error mix produces the expected counters, latency and jitter."""
    st = feed([ok(5), ProbeOutcome.timeout(), ok(15), ProbeOutcome.error(111), ok(10)])
    assert st.total_count == 5
    assert st.success_count == 3
    assert st.fail_count == 2
    assert st.loss_ratio == pytest.approx(40.0)
    assert st.min_rtt == 5
    assert st.max_rtt == 15
    assert st.avg_rtt == pytest.approx(10.0)
    assert st.jitter_avg == pytest.approx(7.5)
    assert st.range_rtt == 10
    assert st.total_count == st.success_count + st.fail_count


def test_min_max_avg_do_not_depend_on_order():
    samples = [12.5, 3.25, 40.0, 7.75]
    for perm in itertools.permutations(samples):
        st = feed([ok(x) for x in perm])
        assert st.min_rtt == 3.25
        assert st.max_rtt == 40.0
        assert st.avg_rtt == pytest.approx(sum(samples) / len(samples))
        assert st.min_rtt <= st.avg_rtt <= st.max_rtt


def test_jitter_depends_on_order():
    """Same multiset of RTTs, different sequence, different jitter."""
    assert feed([ok(10), ok(10), ok(20)]).jitter_avg == pytest.approx(5.0)
    assert feed([ok(10), ok(20), ok(10)]).jitter_avg == pytest.approx(10.0)


def test_jitter_needs_two_successes():
    st = feed([ok(10), ProbeOutcome.timeout()])
    assert st.jitter_avg is None
    assert st.jitter_count == 0
    assert st.prev_rtt == 10


def test_failures_between_successes_keep_prev_rtt():
    """A gap does not add a jitter term and does not reset the comparison point."""
    st = feed([ok(10), ProbeOutcome.timeout(), ProbeOutcome.error(), ok(30)])
    assert st.jitter_count == 1
    assert st.jitter_avg == pytest.approx(20.0)
    assert st.prev_rtt == 30


def test_min_is_seeded_from_first_success_not_zero():
    st = feed([ProbeOutcome.timeout(), ok(42.0), ok(50.0)])
    assert st.min_rtt == 42.0


@pytest.mark.parametrize("fails,succ", [(0, 4), (1, 3), (3, 1), (4, 0)])
def test_loss_ratio(fails, succ):
    st = feed([ProbeOutcome.timeout()] * fails + [ok(1.0)] * succ)
    assert st.loss_ratio == pytest.approx(fails / (fails + succ) * 100)


def test_skip_window_leaves_stats_untouched():
    """Skipped outcomes change nothing, whatever their type."""
    agg = StatsAggregator(skip=3)
    assert agg.record(ok(500.0)) is False
    assert agg.record(ProbeOutcome.timeout()) is False
    assert agg.record(ProbeOutcome.error()) is False

    st = agg.snapshot()
    assert st.total_count == st.success_count == st.fail_count == 0
    assert st.sum_rtt == 0.0
    assert st.prev_rtt is None
    assert st.jitter_count == 0
    assert st.skip_remaining == 0

    assert agg.record(ok(10.0)) is True
    assert agg.record(ok(12.0)) is True
    st = agg.snapshot()
    assert st.total_count == 2
    assert st.max_rtt == 12.0
    assert st.jitter_avg == pytest.approx(2.0)


def test_negative_skip_is_treated_as_zero():
    agg = StatsAggregator(skip=-2)
    assert agg.record(ok(1.0)) is True


def test_snapshot_is_a_copy():
    agg = StatsAggregator()
    agg.record(ok(1.0))
    snap = agg.snapshot()
    agg.record(ProbeOutcome.timeout())
    assert snap.total_count == 1
    assert agg.snapshot().total_count == 2


def test_rules_helpers():
    assert loss_percent(0, 0) == 0.0
    assert loss_percent(1, 4) == 25.0
    assert jitter_term(None, 3.0) is None
    assert jitter_term(5.0, 3.0) == 2.0


def test_avg_stays_within_min_max_under_float_rounding():
    """0.1 * 3 / 3 rounds above 0.1; the average must still sit between min and max."""
    st = feed([ok(0.1), ok(0.1), ok(0.1)])
    assert st.min_rtt <= st.avg_rtt <= st.max_rtt
    assert st.avg_rtt == pytest.approx(0.1)
