"""Test results and run-level aggregation."""

import threading
from dataclasses import dataclass, field
from enum import IntEnum


class TestStatus(IntEnum):
    """Outcome of one test case.

    The integer values are the status codes used on the isolation protocol wire.
    """

    __test__ = False

    PASSED = 0
    FAILED = 1
    CRASHED = 2
    TIMED_OUT = 3
    NOT_FOUND = 4

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True)
class TestResult:
    """Result of a single dispatched test case."""

    __test__ = False

    qualified_path: str
    status: TestStatus
    description: str = ""
    duration_ms: int = 0

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASSED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "qualified_path": self.qualified_path,
            "status": self.status.label,
            "description": self.description,
            "duration_ms": self.duration_ms,
        }


@dataclass
class RunSummary:
    """Counts and failures of a whole run."""

    total: int = 0
    passed: int = 0
    failures: list[tuple[TestStatus, str]] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def successful(self) -> bool:
        """The run's exit condition: every dispatched test passed."""
        return self.passed == self.total

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "failures": [
                {"status": status.label, "qualified_path": path}
                for status, path in self.failures
            ],
        }


class ResultAggregator:
    """Thread-safe counters and failure list shared by all workers of a run."""

    def __init__(self):
        self._lock = threading.Lock()
        self._dispatched = 0
        self._passed = 0
        self._failures: list[tuple[TestStatus, str]] = []

    def record_dispatched(self) -> None:
        with self._lock:
            self._dispatched += 1

    def record(self, result: TestResult) -> None:
        """Record the outcome of a previously dispatched test."""
        with self._lock:
            if result.passed:
                self._passed += 1
            else:
                self._failures.append((result.status, result.qualified_path))

    def summary(self) -> RunSummary:
        with self._lock:
            return RunSummary(
                total=self._dispatched,
                passed=self._passed,
                failures=list(self._failures),
            )
