"""Shared fixtures for isotest tests."""

import sys
import textwrap
import threading
from pathlib import Path
from typing import Optional

import pytest

from isotest.core.results import RunSummary, TestResult, TestStatus
from isotest.reporting.base import Reporter


class RecordingReporter(Reporter):
    """Reporter that records every notification as a tuple."""

    def __init__(self):
        super().__init__()
        self.events: list[tuple] = []
        self.results: list[TestResult] = []
        self.summaries: list[RunSummary] = []

    def suite_started(self, path):
        self.events.append(("suite_started", path))

    def suite_finished(self, path):
        self.events.append(("suite_finished", path))

    def test_started(self, path):
        self.events.append(("test_started", path))

    def test_finished(self, result):
        self.results.append(result)
        self.events.append(("test_finished", result.qualified_path))

    def summary(self, summary):
        self.summaries.append(summary)

    def of_kind(self, kind: str) -> list[str]:
        return [path for event, path in self.events if event == kind]


class FakeLauncher:
    """Stands in for IsolatedLauncher, returning canned statuses."""

    def __init__(
        self,
        statuses: Optional[dict[str, TestStatus]] = None,
        events: Optional[list] = None,
    ):
        self.statuses = statuses or {}
        self.events = events
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def run(self, qualified_path: str) -> TestResult:
        with self._lock:
            self.calls.append(qualified_path)
            if self.events is not None:
                self.events.append(("run", qualified_path))

        status = self.statuses.get(qualified_path, TestStatus.PASSED)
        description = "" if status == TestStatus.PASSED else f"{status.label} in child"
        return TestResult(qualified_path, status, description)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def write_program(tmp_path):
    """Write a Python test program to a temp file and return its command prefix."""

    def _write(source: str, name: str = "program.py") -> list[str]:
        path = Path(tmp_path) / name
        path.write_text(textwrap.dedent(source))
        return [sys.executable, str(path)]

    return _write
