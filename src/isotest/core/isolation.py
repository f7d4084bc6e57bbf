"""Parent side of isolated execution: spawn, supervise and decode one child."""

import logging
import os
import signal
import subprocess
import sys
import time
from typing import Optional, Sequence

from isotest.core import protocol
from isotest.core.results import TestResult, TestStatus
from isotest.core.watchdog import Watchdog, terminate_process

log = logging.getLogger(__name__)

# How long a child may keep running after it has reported its result
REAP_GRACE_SECONDS = 5.0


def describe_exit(returncode: Optional[int]) -> str:
    """Describe how a child process ended, for Crashed results."""
    if returncode is None:
        return "process did not exit"
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = f"signal {-returncode}"
        return f"process terminated by {name} before reporting a result"
    return f"process exited with code {returncode} before reporting a result"


class IsolatedLauncher:
    """Runs single test cases in child processes of the test program itself.

    Each child is the same program re-invoked with an exact test filter and the
    ``subprocess`` reporter, so it executes the one test in-process and reports
    the outcome as a protocol line on its stdout.
    """

    def __init__(
        self,
        executable: Sequence[str],
        timeout_seconds: float = 60,
        environment: Optional[dict[str, str]] = None,
    ):
        """Initialize the launcher.

        Args:
            executable: Command prefix that re-invokes the test program
            timeout_seconds: Watchdog deadline per child, 0 to disable
            environment: Additional environment variables for children
        """
        self.executable = list(executable)
        self.timeout_seconds = timeout_seconds
        self.environment = environment or {}

    def child_arguments(self, qualified_path: str) -> list[str]:
        return [*self.executable, "--test", qualified_path, "--reporter", "subprocess"]

    def run(self, qualified_path: str) -> TestResult:
        """Run one test case in a fresh child process and return its result."""
        args = self.child_arguments(qualified_path)
        env = {**os.environ, **self.environment}

        popen_kwargs = {}
        if sys.platform != "win32":
            popen_kwargs["start_new_session"] = True

        start_time = time.monotonic()

        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                env=env,
                text=True,
                encoding="utf-8",
                errors="replace",
                **popen_kwargs,
            )
        except OSError as e:
            log.error("Could not launch %s: %s", args[0], e)
            return TestResult(
                qualified_path=qualified_path,
                status=TestStatus.CRASHED,
                description=f"could not launch isolated process: {e}",
                duration_ms=_elapsed_ms(start_time),
            )

        log.debug("Spawned process %s for %s", process.pid, qualified_path)

        with process.stdout:
            with Watchdog(process, self.timeout_seconds) as watchdog:
                try:
                    status, message = protocol.read_result(process.stdout)
                    decoded = True
                except (protocol.ProtocolError, OSError) as e:
                    log.debug("No result from process %s: %s", process.pid, e)
                    decoded = False

        returncode = self._reap(process)
        duration_ms = _elapsed_ms(start_time)

        if decoded:
            return TestResult(
                qualified_path=qualified_path,
                status=status,
                description=message,
                duration_ms=duration_ms,
            )

        if watchdog.timed_out:
            return TestResult(
                qualified_path=qualified_path,
                status=TestStatus.TIMED_OUT,
                duration_ms=duration_ms,
            )

        return TestResult(
            qualified_path=qualified_path,
            status=TestStatus.CRASHED,
            description=describe_exit(returncode),
            duration_ms=duration_ms,
        )

    def _reap(self, process: subprocess.Popen) -> Optional[int]:
        try:
            return process.wait(timeout=REAP_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            log.warning("Process %s did not exit after reporting, killing it", process.pid)
            terminate_process(process)
            return process.wait()


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)
