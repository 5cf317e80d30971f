import json
import os
import socket
import subprocess
import threading
from typing import Dict, IO

from memprobe.config.target_spec import TargetSpec
from memprobe.consts.errors import LaunchError
from memprobe.models.target_process import CHANNEL_CLOSED, TargetProcessHandle
from memprobe.util.file_utils import resolve_cmd
from memprobe.util.log_config import setup_logger

logger = setup_logger(__name__)


class ProcessLauncher:
    """Start the target server with its notification channel and output relays."""

    def __init__(self, target: TargetSpec):
        self.target = target

    def build_env(self, notify_fd: int) -> Dict[str, str]:
        """Parent environment plus the target overrides and the channel fd."""
        env = dict(os.environ)
        env.update(self.target.env_overrides())
        env[self.target.notify_fd_env] = str(notify_fd)
        if self.target.notify_fd_env == "NODE_CHANNEL_FD":
            # one JSON document per line, as Node writes them in json mode
            env["NODE_CHANNEL_SERIALIZATION_MODE"] = "json"
        return env

    def launch(self) -> TargetProcessHandle:
        """
        Spawn the target and return its handle promptly.

        - Create the notification socket pair and pass the child end to the target.
        - Start the subprocess with stdout/stderr piped.
        - Start background threads that relay output, decode notifications
          and wait for the process to exit.

        Raises:
            LaunchError: If the executable cannot be found or the OS refuses to spawn it
        """
        try:
            executable = resolve_cmd(self.target.executable)
        except FileNotFoundError as e:
            raise LaunchError(str(e)) from e

        cmd_args = [executable] + list(self.target.args)
        parent_sock, child_sock = socket.socketpair()
        logger.debug(f"Launching target: {' '.join(cmd_args)} (cwd={self.target.cwd})")

        try:
            process = subprocess.Popen(
                cmd_args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=self.target.cwd,
                env=self.build_env(child_sock.fileno()),
                pass_fds=(child_sock.fileno(),),
            )
        except OSError as e:
            parent_sock.close()
            raise LaunchError(f"Failed to launch {executable}: {e}") from e
        finally:
            # the child holds its own copy now
            child_sock.close()

        handle = TargetProcessHandle(process, parent_sock)
        self._start_background_threads(handle)
        logger.debug(f"Target started with pid {handle.pid}")
        return handle

    def _start_background_threads(self, handle: TargetProcessHandle) -> None:
        workers = [
            (_relay_output, (handle.process.stdout, "[server stdout]")),
            (_relay_output, (handle.process.stderr, "[server stderr]")),
            (_read_notifications, (handle,)),
            (_wait_for_exit, (handle,)),
        ]
        for target, args in workers:
            thread = threading.Thread(target=target, args=args, daemon=True)
            thread.start()
            handle.threads.append(thread)


def _relay_output(stream: IO[bytes], prefix: str) -> None:
    """Forward each line the target writes to the diagnostic log."""
    with stream:
        for raw in iter(stream.readline, b""):
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            logger.info(f"{prefix} {line}")


def _read_notifications(handle: TargetProcessHandle) -> None:
    """Decode newline-delimited JSON messages into the notification queue."""
    try:
        with handle.notify_socket.makefile("rb") as reader:
            for raw in reader:
                line = raw.decode("utf-8", errors="replace").strip()
                if not line:
                    continue
                try:
                    message = json.loads(line)
                except ValueError:
                    logger.debug(f"Ignoring undecodable notification: {line!r}")
                    continue
                handle.notifications.put(message)
    except OSError as e:
        logger.debug(f"Notification channel of pid {handle.pid} closed: {e}")
    finally:
        handle.notifications.put(CHANNEL_CLOSED)


def _wait_for_exit(handle: TargetProcessHandle) -> None:
    returncode = handle.process.wait()
    handle.returncode = returncode
    handle.exit_events.put(returncode)
    logger.debug(f"Target pid {handle.pid} exited with code {returncode}")
