"""Reporter used by isolated children to hand their result to the parent."""

import os
import sys
from typing import IO

from isotest.core import protocol
from isotest.core.results import RunSummary, TestResult, TestStatus
from isotest.reporting.base import Reporter


class ProtocolReporter(Reporter):
    """Writes one protocol line per finished test.

    A run that dispatched nothing (the requested test does not exist) writes a
    ``NOT_FOUND`` line instead, so the parent can tell it apart from a crash.
    """

    def __init__(self, stream: IO[str]):
        super().__init__()
        self.stream = stream

    @classmethod
    def attach_to_stdout(cls) -> "ProtocolReporter":
        """Take over the process stdout as the protocol channel.

        The original stdout descriptor is duplicated for protocol lines, then
        descriptor 1 is pointed at stderr so that anything a test body prints
        lands on stderr instead of the channel.
        """
        sys.stdout.flush()
        stdout_fd = sys.stdout.fileno()
        stream = os.fdopen(os.dup(stdout_fd), "w", encoding="utf-8")
        os.dup2(sys.stderr.fileno(), stdout_fd)
        return cls(stream)

    def suite_started(self, path: str) -> None:
        pass

    def suite_finished(self, path: str) -> None:
        pass

    def test_started(self, path: str) -> None:
        pass

    def test_finished(self, result: TestResult) -> None:
        protocol.write_result(self.stream, result.status, result.description)

    def summary(self, summary: RunSummary) -> None:
        if summary.total == 0:
            protocol.write_result(self.stream, TestStatus.NOT_FOUND, "no such test")
