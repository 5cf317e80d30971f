"""Memory measurement data models."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MemorySample:
    """
    Memory footprint of one process, in bytes.

    A field is None when the OS metric could not be read. None is kept
    distinct from 0 until aggregation.
    """
    rss: Optional[int] = None
    heap_used: Optional[int] = None  # VmData, proxy for heap usage
    vm_size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (camelCase keys)"""
        return {
            "rss": self.rss,
            "heapUsed": self.heap_used,
            "vmSize": self.vm_size,
        }


@dataclass(frozen=True)
class MeasurementResult:
    """One sampling cycle: when the sample was read and what it read."""
    timestamp: str
    memory: MemorySample

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp, "memory": self.memory.to_dict()}


@dataclass(frozen=True)
class AggregateResult:
    """
    Averaged memory over all cycles of a run.

    The timestamp is the time of aggregation, not of any individual sample.
    """
    timestamp: str
    memory: MemorySample

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {"timestamp": self.timestamp, "memory": self.memory.to_dict()}


@dataclass(frozen=True)
class ErrorReport:
    """Structured report of a fatal run failure."""
    error: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "timestamp": self.timestamp}
