"""
Error taxonomy of a measurement run.

Every subclass of MeasurementError is fatal for the run: it aborts the
remaining cycles and is reported as the error document.
"""


class MeasurementError(Exception):
    """Base class for fatal measurement failures."""


class ConfigError(MeasurementError):
    """Configuration is missing or invalid."""


class LaunchError(MeasurementError):
    """The OS refused to spawn the target process."""


class StartupTimeout(MeasurementError):
    """The target did not signal readiness in time."""

    def __init__(self, elapsed: float):
        self.elapsed = elapsed
        super().__init__(f"Server startup timeout after {elapsed:.1f}s")


class MemoryReadError(MeasurementError):
    """Both the status-file read and the ps fallback failed."""
