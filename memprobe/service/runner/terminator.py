import queue
import signal
from typing import List

import psutil

from memprobe.models.target_process import TargetProcessHandle
from memprobe.util.log_config import setup_logger

logger = setup_logger(__name__)


def _descendants(pid: int) -> List[psutil.Process]:
    try:
        return psutil.Process(pid).children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return []


class TerminationManager:
    """Stop a target with SIGTERM, escalating to SIGKILL after a grace period."""

    def terminate(self, handle: TargetProcessHandle, grace_period: float) -> bool:
        """
        Stop the target process.

        Args:
            handle: Target to stop
            grace_period: Seconds to wait for an exit after SIGTERM

        Returns:
            True if the process exited on its own, False if it had to be killed
        """
        handle.terminated = True
        if handle.has_exited():
            return True

        # Collected up front: once the parent is gone its children are reparented
        descendants = _descendants(handle.pid)

        logger.debug(f"Sending SIGTERM to pid {handle.pid}")
        handle.send_signal(signal.SIGTERM)
        try:
            handle.exit_events.get(timeout=grace_period)
            return True
        except queue.Empty:
            pass

        logger.warning(f"Target pid {handle.pid} did not exit within {grace_period:.1f}s, sending SIGKILL")
        handle.send_signal(signal.SIGKILL)
        for child in descendants:
            try:
                child.kill()
            except psutil.NoSuchProcess:
                pass
            except psutil.AccessDenied as e:
                logger.warning(f"Could not kill descendant pid {child.pid}: {e}")
        return False
