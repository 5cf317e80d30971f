import queue
import time
from typing import Callable

from memprobe.consts.errors import StartupTimeout
from memprobe.models.target_process import CHANNEL_CLOSED, TargetProcessHandle
from memprobe.service.runner.terminator import TerminationManager
from memprobe.util.log_config import setup_logger

logger = setup_logger(__name__)

READY_MESSAGE = "ok"


class ReadinessGate:
    """Wait for the target's one-shot "ok" notification, bounded by a timeout."""

    def __init__(self, terminator: TerminationManager, grace_period: float,
                 clock: Callable[[], float] = time.monotonic):
        self.terminator = terminator
        self.grace_period = grace_period
        self.clock = clock

    def await_ready(self, handle: TargetProcessHandle, timeout: float) -> float:
        """
        Block until the target reports readiness.

        Messages other than the ready marker are ignored. On timeout the
        target is terminated before the error is raised.

        Returns:
            Seconds elapsed until the ready notification arrived

        Raises:
            StartupTimeout: If no ready notification arrived within `timeout`
        """
        start = self.clock()
        deadline = start + timeout

        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                break
            try:
                message = handle.notifications.get(timeout=remaining)
            except queue.Empty:
                break

            if message is CHANNEL_CLOSED:
                logger.warning(f"Target pid {handle.pid} closed its notification channel before becoming ready")
            elif message == READY_MESSAGE:
                return self.clock() - start
            else:
                logger.debug(f"Ignoring notification from pid {handle.pid}: {message!r}")

        elapsed = self.clock() - start
        logger.error(f"Target pid {handle.pid} not ready after {elapsed:.1f}s, terminating")
        self.terminator.terminate(handle, self.grace_period)
        raise StartupTimeout(elapsed)
