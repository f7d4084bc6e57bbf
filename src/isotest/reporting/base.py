"""Reporter gateway interface."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Sequence

from isotest.core.results import RunSummary, TestResult


class Reporter(ABC):
    """Sink for run progress notifications.

    Notifications may arrive from several worker threads. :meth:`exclusive`
    lets a caller hold the reporter across several calls, so that the start
    and finish notifications of one test are never interleaved with another's.
    """

    def __init__(self):
        self._lock = threading.RLock()

    @contextmanager
    def exclusive(self) -> Iterator["Reporter"]:
        """Hold exclusive access to this reporter for the duration of the block."""
        with self._lock:
            yield self

    @abstractmethod
    def suite_started(self, path: str) -> None:
        pass

    @abstractmethod
    def suite_finished(self, path: str) -> None:
        pass

    @abstractmethod
    def test_started(self, path: str) -> None:
        pass

    @abstractmethod
    def test_finished(self, result: TestResult) -> None:
        pass

    @abstractmethod
    def summary(self, summary: RunSummary) -> None:
        """Receive the final summary once every suite has finished."""
        pass


class CombinedReporter(Reporter):
    """Forwards every notification to several reporters, in order."""

    def __init__(self, reporters: Sequence[Reporter] = ()):
        super().__init__()
        self.reporters = list(reporters)

    def suite_started(self, path: str) -> None:
        with self._lock:
            for reporter in self.reporters:
                reporter.suite_started(path)

    def suite_finished(self, path: str) -> None:
        with self._lock:
            for reporter in self.reporters:
                reporter.suite_finished(path)

    def test_started(self, path: str) -> None:
        with self._lock:
            for reporter in self.reporters:
                reporter.test_started(path)

    def test_finished(self, result: TestResult) -> None:
        with self._lock:
            for reporter in self.reporters:
                reporter.test_finished(result)

    def summary(self, summary: RunSummary) -> None:
        with self._lock:
            for reporter in self.reporters:
                reporter.summary(summary)
