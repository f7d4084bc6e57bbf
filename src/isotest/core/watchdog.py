"""Watchdog that force-terminates an isolated child which outlives its deadline."""

import logging
import os
import signal
import subprocess
import sys
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)


def terminate_process(process: subprocess.Popen) -> None:
    """Kill a child process and, on POSIX, every process in its group.

    Killing the group closes all write ends of the child's stdout pipe, so a
    parent blocked reading it sees end-of-stream.
    """
    if sys.platform != "win32":
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except (ProcessLookupError, PermissionError):
            pass

    try:
        process.kill()
    except ProcessLookupError:
        pass


class Watchdog:
    """Races a child process against a timeout.

    The watching thread waits on a condition for :meth:`finish`. If the wait
    times out first, :attr:`timed_out` is set and the process is terminated.
    A timeout of zero disables supervision: the thread waits until finished.

    Use as a context manager around the blocking read of the child's result;
    leaving the block signals completion and joins the watching thread.
    """

    def __init__(
        self,
        process: subprocess.Popen,
        timeout_seconds: float,
        terminate: Callable[[subprocess.Popen], None] = terminate_process,
    ):
        self.process = process
        self.timeout_seconds = timeout_seconds
        self.timed_out = False

        self._terminate = terminate
        self._finished = False
        self._condition = threading.Condition()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._watch,
            name=f"watchdog-{self.process.pid}",
            daemon=True,
        )
        self._thread.start()

    def finish(self) -> None:
        """Signal natural completion and wait for the watching thread to exit."""
        with self._condition:
            self._finished = True
            self._condition.notify_all()

        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _watch(self) -> None:
        timeout = self.timeout_seconds or None

        with self._condition:
            if self._condition.wait_for(lambda: self._finished, timeout=timeout):
                return
            self.timed_out = True

        log.warning(
            "Process %s exceeded %ss timeout, terminating",
            self.process.pid,
            self.timeout_seconds,
        )
        self._terminate(self.process)

    def __enter__(self) -> "Watchdog":
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.finish()
