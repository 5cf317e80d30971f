"""Configuration module for memory measurements."""

from .measurement_config import MeasurementConfig
from .probe_config import ProbeConfig
from .target_spec import TargetSpec

__all__ = ["MeasurementConfig", "ProbeConfig", "TargetSpec"]
