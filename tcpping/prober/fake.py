# tcpping/prober/fake.py
from collections import deque

from tcpping.prober.base import Prober
from tcpping.schemas import ProbeOutcome


class FakeProber(Prober):
    """
    script: iterable of ProbeOutcome returned one per call, in order.
    If no scripted outcome is left, returns a timeout.
    """
    def __init__(self, script=None):
        self.script = deque(script or [])
        self.calls = []

    def probe_once(self, address: str, port: int, timeout: float) -> ProbeOutcome:
        self.calls.append((address, port, timeout))
        if self.script:
            return self.script.popleft()
        # default: timeout
        return ProbeOutcome.timeout()
