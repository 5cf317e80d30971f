"""Models for memory measurement data structures."""

from .memory_result import AggregateResult, ErrorReport, MeasurementResult, MemorySample
from .target_process import TargetProcessHandle

__all__ = ["AggregateResult", "ErrorReport", "MeasurementResult", "MemorySample", "TargetProcessHandle"]
