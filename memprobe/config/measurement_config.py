"""
Measurement timing configuration.

This module provides the immutable MeasurementConfig passed to the
orchestrator at construction. All durations are in seconds.
"""

from dataclasses import dataclass

SAMPLE_COUNT = 3  # number of sequential measurement cycles
STARTUP_TIMEOUT = 120.0  # seconds to wait for the readiness notification
SETTLE_TIME = 10.0  # seconds to wait after readiness before sampling
GRACE_PERIOD = 10.0  # seconds between SIGTERM and SIGKILL


@dataclass(frozen=True)
class MeasurementConfig:

    sample_count: int = SAMPLE_COUNT
    startup_timeout: float = STARTUP_TIMEOUT
    settle_time: float = SETTLE_TIME
    grace_period: float = GRACE_PERIOD

    def __post_init__(self):
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {self.sample_count}")
        for name in ("startup_timeout", "grace_period"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.settle_time < 0:
            raise ValueError(f"settle_time must not be negative, got {self.settle_time}")
