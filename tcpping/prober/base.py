# tcpping/prober/base.py
from abc import ABC, abstractmethod

from tcpping.schemas import ProbeOutcome


class TcpPingError(Exception):
    """Base class for faults that stop a run (as opposed to probe outcomes)."""


class SocketCreationError(TcpPingError):
    """The local socket could not be created, usually fd or memory exhaustion."""


class Prober(ABC):
    @abstractmethod
    def probe_once(self, address: str, port: int, timeout: float) -> ProbeOutcome:
        """Open exactly one TCP connection to address:port and return its ProbeOutcome.

        Timeouts and refusals are returned as outcomes, never raised.
        """
        raise NotImplementedError
