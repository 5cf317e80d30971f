import sys
from pathlib import Path

import psutil
import pytest

from memprobe.config.target_spec import TargetSpec
from memprobe.models.target_process import TargetProcessHandle

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def make_target():
    """Build a TargetSpec running one of the fixture servers with this interpreter."""
    def _make(script: str, **kwargs) -> TargetSpec:
        return TargetSpec(executable=sys.executable, args=[str(FIXTURES / script)], cwd=FIXTURES, **kwargs)
    return _make


@pytest.fixture
def wait_gone():
    """Wait until a handle's process has exited and been reaped; return its code."""
    def _wait(handle: TargetProcessHandle, timeout: float = 5.0) -> int:
        returncode = handle.process.wait(timeout=timeout)
        assert not psutil.pid_exists(handle.pid)
        return returncode
    return _wait
