"""
isotest - test execution engine with per-test process isolation.

This package provides tools to:
- Describe test programs as trees of suites and test cases
- Run each test case in its own watchdog-supervised child process
- Select a single test or a whole suite with a path filter
- Report results to the console, an HTML file or a parent process
"""

__version__ = "0.1.0"
__author__ = "isotest Team"

from isotest.cli import main, run
from isotest.core.suite import Suite, Testcase
from isotest.exceptions import TestFailure

__all__ = ["Suite", "Testcase", "TestFailure", "main", "run"]
