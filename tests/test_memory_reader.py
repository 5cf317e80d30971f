import os
import shutil
import subprocess
from pathlib import Path

import pytest

from memprobe.consts.errors import MemoryReadError
from memprobe.models.memory_result import MemorySample
from memprobe.service.monitor import memory_reader
from memprobe.service.monitor.memory_reader import MemoryReader

STATUS = """Name:\tnode
State:\tS (sleeping)
Pid:\t4242
VmPeak:\t 1300000 kB
VmSize:\t 1200000 kB
VmData:\t  150000 kB
VmRSS:\t  250000 kB
Threads:\t11
"""


def _write_status(proc_root: Path, pid: int, text: str) -> None:
    (proc_root / str(pid)).mkdir(parents=True)
    (proc_root / str(pid) / "status").write_text(text)


@pytest.fixture
def fake_ps(monkeypatch):
    """Replace the ps invocation; returns the list of commands that were run."""
    calls = []

    def _install(stdout: str = "", error: Exception = None):
        def _run(cmd, **kwargs):
            calls.append(cmd)
            if error is not None:
                raise error
            return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")
        monkeypatch.setattr(memory_reader.subprocess, "run", _run)
        monkeypatch.setattr(memory_reader, "resolve_cmd", lambda cmd: "/bin/" + cmd)
        return calls

    return _install


def test_reads_all_fields_from_status_file(tmp_path, fake_ps):
    calls = fake_ps(stdout="1\n")
    _write_status(tmp_path, 4242, STATUS)

    sample = MemoryReader(proc_root=tmp_path).read_memory(4242)

    assert sample == MemorySample(rss=250000 * 1024, heap_used=150000 * 1024, vm_size=1200000 * 1024)
    assert calls == []


def test_missing_field_is_none_not_zero(tmp_path):
    _write_status(tmp_path, 7, "VmRSS:\t  100 kB\nVmSize:\t 400 kB\n")

    sample = MemoryReader(proc_root=tmp_path).read_memory(7)

    assert sample.rss == 100 * 1024
    assert sample.heap_used is None
    assert sample.vm_size == 400 * 1024


def test_invalid_utf8_in_name_keeps_primary_path(tmp_path, fake_ps):
    calls = fake_ps(stdout="1\n")
    (tmp_path / "11").mkdir()
    # comm truncated in the middle of a multi-byte character
    (tmp_path / "11" / "status").write_bytes(
        b"Name:\tsrv\xff\nVmSize:\t 400 kB\nVmData:\t 200 kB\nVmRSS:\t 100 kB\n"
    )

    sample = MemoryReader(proc_root=tmp_path).read_memory(11)

    assert sample == MemorySample(rss=100 * 1024, heap_used=200 * 1024, vm_size=400 * 1024)
    assert calls == []


def test_falls_back_to_ps_when_status_missing(tmp_path, fake_ps):
    calls = fake_ps(stdout="  2048\n")

    sample = MemoryReader(proc_root=tmp_path).read_memory(4242)

    assert sample == MemorySample(rss=2048 * 1024, heap_used=None, vm_size=None)
    assert calls == [["/bin/ps", "-o", "rss=", "-p", "4242"]]


def test_falls_back_to_ps_when_status_unparseable(tmp_path, fake_ps):
    fake_ps(stdout="512\n")
    _write_status(tmp_path, 9, "Name:\tkthreadd\nState:\tS\n")

    sample = MemoryReader(proc_root=tmp_path).read_memory(9)

    assert sample.rss == 512 * 1024
    assert sample.heap_used is None
    assert sample.vm_size is None


def test_both_paths_failing_raises(tmp_path, fake_ps):
    fake_ps(error=subprocess.CalledProcessError(1, ["ps"]))

    with pytest.raises(MemoryReadError):
        MemoryReader(proc_root=tmp_path).read_memory(4242)


def test_empty_ps_output_raises(tmp_path, fake_ps):
    # ps prints nothing for a pid that is gone
    fake_ps(stdout="")

    with pytest.raises(MemoryReadError):
        MemoryReader(proc_root=tmp_path).read_memory(4242)


@pytest.mark.skipif(not Path("/proc/self/status").exists(), reason="needs /proc")
def test_reads_own_process_from_real_proc():
    sample = MemoryReader().read_memory(os.getpid())

    assert sample.rss > 0
    assert sample.heap_used > 0
    assert sample.vm_size >= sample.rss


@pytest.mark.skipif(shutil.which("ps") is None, reason="needs ps")
def test_real_ps_fallback_reads_own_process(tmp_path):
    # empty proc root forces the fallback
    sample = MemoryReader(proc_root=tmp_path).read_memory(os.getpid())

    assert sample.rss > 0
    assert sample.heap_used is None
    assert sample.vm_size is None
