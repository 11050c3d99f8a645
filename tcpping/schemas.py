# tcpping/schemas.py
from dataclasses import dataclass
from typing import Literal, Optional

OutcomeStatus = Literal["success", "timeout", "error"]


@dataclass(frozen=True)
class ProbeOutcome:
    status: OutcomeStatus
    rtt_ms: Optional[float] = None
    errno: Optional[int] = None     # only set for "error"
    detail: Optional[str] = None

    @classmethod
    def success(cls, rtt_ms: float) -> "ProbeOutcome":
        return cls(status="success", rtt_ms=rtt_ms)

    @classmethod
    def timeout(cls) -> "ProbeOutcome":
        return cls(status="timeout")

    @classmethod
    def error(cls, errno: Optional[int] = None, detail: Optional[str] = None) -> "ProbeOutcome":
        return cls(status="error", errno=errno, detail=detail)

    @property
    def ok(self) -> bool:
        return self.status == "success"
