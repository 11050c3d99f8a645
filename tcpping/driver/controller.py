# tcpping/driver/controller.py

import logging
import threading
import time

from tcpping.stats.aggregator import StatsAggregator

log = logging.getLogger(__name__)


class CancelToken:
    """Stop request shared between a signal handler and the ping loop."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds; returns True early if cancelled."""
        return self._event.wait(timeout)


class PingController:
    def __init__(self, prober, settings, presenter=None):
        self.prober = prober
        self.s = settings
        self.presenter = presenter

    def run(self, address: str, cancel: CancelToken | None = None, target: str | None = None):
        cancel = cancel or CancelToken()
        agg = StatsAggregator(skip=self.s.skip)
        count = self.s.count
        seq = 0
        stop_reason = None

        log.info("probing %s:%d every %.3fs (count=%s, skip=%d)",
                 address, self.s.port, self.s.interval, count or "unbounded", self.s.skip)
        started = time.perf_counter()

        while True:
            if cancel.cancelled:
                stop_reason = "cancelled"
                break
            if count is not None and seq >= count:
                stop_reason = "count_reached"
                break

            # -------------------------------
            # 1) One probe; a probe in flight always runs to its own timeout
            # -------------------------------
            seq += 1
            outcome = self.prober.probe_once(address, self.s.port, self.s.timeout)
            counted = agg.record(outcome)
            if self.presenter is not None:
                self.presenter.probe(seq, address, outcome, counted)

            # -------------------------------
            # 2) Pace, unless that was the last one
            # -------------------------------
            last = count is not None and seq >= count
            if not last and self.s.interval > 0:
                # returns early on cancel; the check at the top of the loop picks it up
                cancel.wait(self.s.interval)

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        log.info("stopped after %d probes (%s)", seq, stop_reason)

        return {
            "target": target or address,
            "address": address,
            "port": self.s.port,
            "probes_sent": seq,
            "elapsed_ms": elapsed_ms,
            "stop_reason": stop_reason,
            "stats": agg.snapshot(),
        }
