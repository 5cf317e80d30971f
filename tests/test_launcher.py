import pytest

from memprobe.config.target_spec import TargetSpec
from memprobe.consts.errors import LaunchError
from memprobe.service.runner.launcher import ProcessLauncher
from memprobe.service.runner.terminator import TerminationManager


def test_build_env_layers_overrides_on_parent_env(monkeypatch, tmp_path):
    monkeypatch.setenv("INHERITED_VAR", "yes")
    target = TargetSpec(executable="node", cwd=tmp_path, env={"MK_FORCE_GC": "1", "RUN_MODE": "staging"})

    env = ProcessLauncher(target).build_env(notify_fd=7)

    assert env["INHERITED_VAR"] == "yes"
    assert env["RUN_MODE"] == "staging"
    assert env["DISABLE_CLUSTERING"] == "1"
    assert env["FORCE_GC"] == "1"
    assert env["MK_FORCE_GC"] == "1"
    assert env["NODE_CHANNEL_FD"] == "7"
    assert env["NODE_CHANNEL_SERIALIZATION_MODE"] == "json"


def test_build_env_with_custom_notify_variable(tmp_path):
    target = TargetSpec(executable="server", cwd=tmp_path, notify_fd_env="READY_FD")

    env = ProcessLauncher(target).build_env(notify_fd=9)

    assert env["READY_FD"] == "9"
    assert env["RUN_MODE"] == "production"
    assert env.get("NODE_CHANNEL_SERIALIZATION_MODE") is None


def test_default_arguments_expose_gc(tmp_path):
    assert TargetSpec(executable="node", cwd=tmp_path).args == ["expose-gc"]


def test_missing_executable_is_a_launch_error(tmp_path):
    target = TargetSpec(executable="definitely-not-a-real-server-binary", cwd=tmp_path)

    with pytest.raises(LaunchError):
        ProcessLauncher(target).launch()


def test_non_executable_file_is_a_launch_error(tmp_path):
    script = tmp_path / "server.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o644)
    target = TargetSpec(executable=str(script), cwd=tmp_path)

    with pytest.raises(LaunchError):
        ProcessLauncher(target).launch()


def test_launch_delivers_notifications_in_order(make_target, wait_gone):
    handle = ProcessLauncher(make_target("ready_server.py")).launch()
    try:
        first = handle.notifications.get(timeout=10)
        second = handle.notifications.get(timeout=10)
        assert first == {"cmd": "booting"}
        # the undecodable line in between is dropped
        assert second == "ok"
    finally:
        TerminationManager().terminate(handle, grace_period=5)
        handle.close()
    wait_gone(handle)
