import queue
import socket
import subprocess
import threading
from typing import List, Optional

# Put on the notification queue once the target closes its end of the channel
CHANNEL_CLOSED = object()


class TargetProcessHandle:
    """
    A spawned target process and the channels attached to it.

    Owned by a single measurement cycle. `notifications` receives every
    decoded message the target sends on its notification channel, and
    `exit_events` receives the return code once the process has exited.
    """

    def __init__(self, process: subprocess.Popen, notify_socket: socket.socket):
        self.process = process
        self.pid: int = process.pid
        self.notify_socket = notify_socket
        self.notifications: "queue.Queue[object]" = queue.Queue()
        self.exit_events: "queue.Queue[int]" = queue.Queue()
        self.returncode: Optional[int] = None
        self.terminated = False
        self.threads: List[threading.Thread] = []

    def has_exited(self) -> bool:
        return self.returncode is not None or self.process.poll() is not None

    def send_signal(self, sig: int) -> None:
        """Signal the process unless it has already been reaped."""
        if self.has_exited():
            return
        try:
            self.process.send_signal(sig)
        except ProcessLookupError:
            pass

    def close(self) -> None:
        """Release the pipes and the notification socket."""
        if self.process.stdin:
            try:
                self.process.stdin.close()
            except OSError:
                pass
        try:
            self.notify_socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.notify_socket.close()
        for thread in self.threads:
            thread.join(timeout=1.0)

    def __repr__(self):
        return f"TargetProcessHandle(pid={self.pid}, returncode={self.returncode})"
