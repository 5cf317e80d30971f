import time
from typing import Callable, Optional

from memprobe.config.measurement_config import MeasurementConfig
from memprobe.consts.CycleState import CycleState
from memprobe.models.memory_result import MeasurementResult
from memprobe.models.target_process import TargetProcessHandle
from memprobe.service.monitor.memory_reader import MemoryReader
from memprobe.service.runner.launcher import ProcessLauncher
from memprobe.service.runner.readiness import ReadinessGate
from memprobe.service.runner.terminator import TerminationManager
from memprobe.util.log_config import setup_logger
from memprobe.util.time_utils import now_iso

logger = setup_logger(__name__)


class SampleOrchestrator:
    """
    Drive one measurement cycle:
    launch -> wait for readiness -> settle -> read memory -> terminate.

    The target is always terminated once it has been launched, whichever
    step fails.
    """

    def __init__(
        self,
        launcher: ProcessLauncher,
        config: MeasurementConfig,
        reader: Optional[MemoryReader] = None,
        terminator: Optional[TerminationManager] = None,
        gate: Optional[ReadinessGate] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.launcher = launcher
        self.config = config
        self.reader = reader or MemoryReader()
        self.terminator = terminator or TerminationManager()
        self.gate = gate or ReadinessGate(self.terminator, config.grace_period)
        self.sleep = sleep
        self.state = CycleState.IDLE

    def _transition(self, state: CycleState) -> None:
        logger.debug(f"Cycle state: {self.state.value} -> {state.value}")
        self.state = state

    def run_cycle(self, index: int = 1) -> MeasurementResult:
        handle: Optional[TargetProcessHandle] = None
        try:
            self._transition(CycleState.LAUNCHING)
            handle = self.launcher.launch()

            self._transition(CycleState.AWAITING_READY)
            startup_time = self.gate.await_ready(handle, self.config.startup_timeout)
            logger.info(f"  Run {index}: Server started in {round(startup_time * 1000)}ms")

            self._transition(CycleState.SETTLING)
            self.sleep(self.config.settle_time)

            self._transition(CycleState.SAMPLING)
            memory = self.reader.read_memory(handle.pid)
            result = MeasurementResult(timestamp=now_iso(), memory=memory)

            self._transition(CycleState.TERMINATING)
            self.terminator.terminate(handle, self.config.grace_period)

            self._transition(CycleState.DONE)
            return result
        except BaseException:
            self._transition(CycleState.FAILED)
            raise
        finally:
            if handle is not None:
                if not handle.terminated:
                    self.terminator.terminate(handle, self.config.grace_period)
                handle.close()
