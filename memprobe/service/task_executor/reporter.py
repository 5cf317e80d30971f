from typing import List, Optional

from tabulate import tabulate

from memprobe.consts.errors import MeasurementError
from memprobe.models.memory_result import ErrorReport, MeasurementResult
from memprobe.service.task_executor.orchestrator import SampleOrchestrator
from memprobe.service.task_executor.run_outcome import RunOutcome
from memprobe.util.cal_utils import aggregate_results
from memprobe.util.log_config import setup_logger
from memprobe.util.time_utils import now_iso

logger = setup_logger(__name__)


def _mib(value: Optional[int]) -> str:
    return "n/a" if value is None else f"{value / (1024 * 1024):.1f} MB"


def format_samples_table(results: List[MeasurementResult]) -> str:
    headers = ["Run", "Timestamp", "RSS", "Heap (VmData)", "VmSize"]
    table_data = [
        [idx, r.timestamp, _mib(r.memory.rss), _mib(r.memory.heap_used), _mib(r.memory.vm_size)]
        for idx, r in enumerate(results, 1)
    ]
    return tabulate(table_data, headers=headers, tablefmt="github", stralign="right", numalign="right")


class MemoryReporter:
    """Run the measurement cycles one after another and aggregate them"""

    def __init__(self, orchestrator: SampleOrchestrator, sample_count: int):
        self.orchestrator = orchestrator
        self.sample_count = sample_count

    def run(self) -> RunOutcome:
        """
        Execute all cycles sequentially.

        The first failing cycle aborts the run: no aggregate is produced and
        later cycles never start.
        """
        results: List[MeasurementResult] = []
        try:
            for i in range(1, self.sample_count + 1):
                logger.info(f"  Run {i}/{self.sample_count}: Measuring memory...")
                result = self.orchestrator.run_cycle(i)
                logger.info(f"  Run {i}/{self.sample_count}: RSS={_mib(result.memory.rss)}, "
                            f"Heap={_mib(result.memory.heap_used)}, "
                            f"VmSize={_mib(result.memory.vm_size)}")
                results.append(result)
        except MeasurementError as e:
            logger.error(f"Run aborted after {len(results)}/{self.sample_count} cycle(s): {e}")
            return RunOutcome.failure(ErrorReport(error=str(e), timestamp=now_iso()))
        except Exception as e:
            logger.exception(f"Unexpected failure after {len(results)}/{self.sample_count} cycle(s)")
            return RunOutcome.failure(ErrorReport(error=str(e) or type(e).__name__, timestamp=now_iso()))

        logger.info(f"  Aggregating {len(results)} run(s)...")
        for line in format_samples_table(results).splitlines():
            logger.info(line)
        aggregate = aggregate_results(results)
        logger.info(f"  → Avg RSS={_mib(aggregate.memory.rss)}, "
                    f"Heap={_mib(aggregate.memory.heap_used)}, "
                    f"VmSize={_mib(aggregate.memory.vm_size)}")
        return RunOutcome.success(aggregate)
