"""Core test execution functionality."""

from isotest.core.filter import NameFilter
from isotest.core.isolation import IsolatedLauncher
from isotest.core.results import ResultAggregator, RunSummary, TestResult, TestStatus
from isotest.core.runner import ExecutionMode, Runner
from isotest.core.suite import Suite, Testcase
from isotest.core.watchdog import Watchdog

__all__ = [
    "ExecutionMode",
    "IsolatedLauncher",
    "NameFilter",
    "ResultAggregator",
    "Runner",
    "RunSummary",
    "Suite",
    "TestResult",
    "TestStatus",
    "Testcase",
    "Watchdog",
]
