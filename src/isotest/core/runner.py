"""Suite traversal and test dispatch."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Optional, Sequence

from isotest.config import RunConfig
from isotest.core.filter import NameFilter
from isotest.core.isolation import IsolatedLauncher
from isotest.core.results import ResultAggregator, RunSummary, TestResult, TestStatus
from isotest.core.suite import Suite, Testcase, join_path
from isotest.diagnostics import format_failure
from isotest.reporting.base import Reporter

log = logging.getLogger(__name__)


class ExecutionMode(str, Enum):
    """Where a dispatched test case runs."""

    IN_PROCESS = "in_process"
    ISOLATED = "isolated"


class Runner:
    """Walks suite trees and runs their test cases.

    Suites are processed depth-first and one at a time: a suite's child suites
    finish completely before its own test cases are dispatched. Those test
    cases run concurrently on a pool of ``worker_count`` threads created for
    that suite alone.

    A test case runs in-process only when the filter names it exactly, which is
    how an isolated child runs the single test it was spawned for. Every other
    test case runs isolated in a child process, so a child never spawns
    children of its own.
    """

    def __init__(
        self,
        config: RunConfig,
        reporter: Reporter,
        launcher: Optional[IsolatedLauncher] = None,
    ):
        """Initialize the runner.

        Raises:
            InvalidFilterFormat: If the configured filter has no ``/``
        """
        self.config = config
        self.reporter = reporter
        self.name_filter = NameFilter.parse(config.test_filter)
        self.launcher = launcher or IsolatedLauncher(
            config.executable,
            timeout_seconds=config.timeout_seconds,
            environment=config.environment,
        )
        self.results = ResultAggregator()

    def run(self, suites: Sequence[Suite]) -> RunSummary:
        """Run every in-scope test case and report the summary."""
        for suite in suites:
            self._handle_suite(suite)

        summary = self.results.summary()
        self.reporter.summary(summary)
        return summary

    def execution_mode(self, qualified_path: str) -> ExecutionMode:
        if self.name_filter.is_exact_match(qualified_path):
            return ExecutionMode.IN_PROCESS
        return ExecutionMode.ISOLATED

    def _handle_suite(self, suite: Suite, parent_path: str = "") -> None:
        path = join_path(parent_path, suite.name) if parent_path else suite.name
        if not self.name_filter.in_scope(path):
            return

        self.reporter.suite_started(path)

        for sub in suite.suites:
            self._handle_suite(sub, path)

        selected = [
            (test, join_path(path, test.name))
            for test in suite
            if self.name_filter.matches_test(join_path(path, test.name))
        ]

        if selected:
            with ThreadPoolExecutor(
                max_workers=self.config.worker_count,
                thread_name_prefix=f"isotest-{suite.name}",
            ) as pool:
                futures = []
                for test, test_path in selected:
                    self.results.record_dispatched()
                    futures.append(pool.submit(self._dispatch, test, test_path))

                for future in futures:
                    future.result()

        self.reporter.suite_finished(path)

    def _dispatch(self, test: Testcase, qualified_path: str) -> TestResult:
        serial = self.config.worker_count == 1

        if serial:
            self.reporter.test_started(qualified_path)

        mode = self.execution_mode(qualified_path)
        log.debug("Running %s (%s)", qualified_path, mode.value)

        if mode == ExecutionMode.IN_PROCESS:
            result = self._run_in_process(test, qualified_path)
        else:
            result = self.launcher.run(qualified_path)

        if serial:
            self.reporter.test_finished(result)
        else:
            with self.reporter.exclusive():
                self.reporter.test_started(qualified_path)
                self.reporter.test_finished(result)

        self.results.record(result)
        return result

    def _run_in_process(self, test: Testcase, qualified_path: str) -> TestResult:
        status = TestStatus.PASSED
        description = ""
        start_time = time.monotonic()

        try:
            test()
        except Exception as e:
            # Domain failures carry their location, generic ones only a message
            status = TestStatus.FAILED
            description = format_failure(e)

        return TestResult(
            qualified_path=qualified_path,
            status=status,
            description=description,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
