# tcpping/stats/rules.py


def loss_percent(fail_count: int, total_count: int) -> float:
    if total_count <= 0:
        return 0.0
    return fail_count / total_count * 100.0


def jitter_term(prev_rtt: float | None, rtt: float) -> float | None:
    """
    Absolute difference between two consecutive successful RTTs.
    None when there is no previous success to compare against.
    """
    if prev_rtt is None:
        return None
    return abs(prev_rtt - rtt)
