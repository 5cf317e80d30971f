"""
Memory Reader Module

This module reads the memory footprint of a running process from the OS.
The /proc status file is the primary source; `ps` is the fallback when the
proc filesystem is unavailable, at the cost of reporting RSS only.
"""
import re
import subprocess
from pathlib import Path
from typing import Dict, Optional

from memprobe.consts.errors import MemoryReadError
from memprobe.models.memory_result import MemorySample
from memprobe.util.file_utils import resolve_cmd
from memprobe.util.log_config import setup_logger

logger = setup_logger(__name__)

# Values in /proc/<pid>/status are reported in kB
STATUS_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "rss": re.compile(r"VmRSS:\s+(\d+)\s+kB"),
    "heap_used": re.compile(r"VmData:\s+(\d+)\s+kB"),
    "vm_size": re.compile(r"VmSize:\s+(\d+)\s+kB"),
}

KIB = 1024


class MemoryReader:
    """Read resident, data-segment and virtual size of a process"""

    def __init__(self, proc_root: Path = Path("/proc"), ps_cmd: str = "ps", ps_timeout: float = 5.0):
        """
        Initialize memory reader.

        Args:
            proc_root: Mount point of the proc filesystem
            ps_cmd: Process-status utility used by the fallback path
            ps_timeout: Seconds to wait for the fallback utility
        """
        self.proc_root = proc_root
        self.ps_cmd = ps_cmd
        self.ps_timeout = ps_timeout

    def read_memory(self, pid: int) -> MemorySample:
        """
        Read the current memory footprint of a process.

        Args:
            pid: Process ID to inspect

        Returns:
            MemorySample with all fields from /proc, or only rss from ps

        Raises:
            MemoryReadError: If neither /proc nor ps yields a value
        """
        status_path = self.proc_root / str(pid) / "status"
        try:
            return self._read_status(status_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {status_path}: {e}")

        try:
            return self._read_ps(pid)
        except (OSError, subprocess.SubprocessError, ValueError) as e:
            raise MemoryReadError(f"Failed to get memory usage via ps command: {e}") from e

    def _read_status(self, status_path: Path) -> MemorySample:
        # Name: is printed raw by the kernel and may hold invalid UTF-8
        status = status_path.read_text(encoding="utf-8", errors="replace")

        values: Dict[str, Optional[int]] = {}
        for field, pattern in STATUS_PATTERNS.items():
            match = pattern.search(status)
            values[field] = int(match.group(1)) * KIB if match else None

        if all(value is None for value in values.values()):
            raise ValueError(f"no Vm* memory fields in {status_path}")

        return MemorySample(**values)

    def _read_ps(self, pid: int) -> MemorySample:
        completed = subprocess.run(
            [resolve_cmd(self.ps_cmd), "-o", "rss=", "-p", str(pid)],
            capture_output=True,
            text=True,
            timeout=self.ps_timeout,
            check=True,
        )
        # ps rss is KiB
        rss_kib = int(completed.stdout.strip())
        return MemorySample(rss=rss_kib * KIB, heap_used=None, vm_size=None)


if __name__ == "__main__":

    # python3 -m memprobe.service.monitor.memory_reader <pid>

    import os
    import sys

    target_pid = int(sys.argv[1]) if len(sys.argv) > 1 else os.getpid()
    print(MemoryReader().read_memory(target_pid).to_dict())
