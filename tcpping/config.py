from dataclasses import dataclass

VERSION = "1.1.0"

MODES = ("normal", "quiet", "csv", "json")

@dataclass
class Settings:
    port: int = 443
    timeout: float = 3.0        # seconds to wait for the handshake
    count: int | None = None    # None = keep probing until cancelled
    interval: float = 1.0       # seconds between probes
    skip: int = 0               # warm-up probes left out of the stats

    # output
    mode: str = "normal"
    bell: bool = False
    log_level: str = "WARNING"

    def validate(self) -> "Settings":
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.count is not None and self.count < 1:
            raise ValueError(f"count must be at least 1, got {self.count}")
        if self.interval < 0:
            raise ValueError(f"interval cannot be negative, got {self.interval}")
        if self.skip < 0:
            raise ValueError(f"skip cannot be negative, got {self.skip}")
        if self.mode not in MODES:
            raise ValueError(f"unknown output mode {self.mode!r}")
        return self
