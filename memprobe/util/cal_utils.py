from typing import List, Optional

from memprobe.models.memory_result import AggregateResult, MeasurementResult, MemorySample
from memprobe.util.time_utils import now_iso


def round_half_up(total: int, count: int) -> int:
    """Integer mean of non-negative values, .5 rounded up"""
    return (2 * total + count) // (2 * count)


def average_field(values: List[Optional[int]]) -> int:
    """Mean of one metric across samples; an absent value counts as 0"""
    if not values:
        raise ValueError("cannot average an empty list of samples")
    return round_half_up(sum(value or 0 for value in values), len(values))


def aggregate_results(results: List[MeasurementResult]) -> AggregateResult:
    """Average every memory field across all cycles of a run"""
    samples = [r.memory for r in results]
    return AggregateResult(
        timestamp=now_iso(),
        memory=MemorySample(
            rss=average_field([s.rss for s in samples]),
            heap_used=average_field([s.heap_used for s in samples]),
            vm_size=average_field([s.vm_size for s in samples]),
        ),
    )
