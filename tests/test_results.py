"""Tests for results and aggregation."""

import threading

from isotest.core.results import ResultAggregator, RunSummary, TestResult, TestStatus


class TestTestStatus:
    """Tests for TestStatus."""

    def test_wire_codes(self):
        """Test the integer code of every status."""
        assert TestStatus.PASSED == 0
        assert TestStatus.FAILED == 1
        assert TestStatus.CRASHED == 2
        assert TestStatus.TIMED_OUT == 3
        assert TestStatus.NOT_FOUND == 4

    def test_labels(self):
        """Test human-readable labels."""
        assert TestStatus.TIMED_OUT.label == "timed out"
        assert TestStatus.PASSED.label == "passed"


class TestTestResult:
    """Tests for TestResult."""

    def test_defaults(self):
        """Test default values."""
        result = TestResult("A/t1", TestStatus.PASSED)
        assert result.description == ""
        assert result.duration_ms == 0
        assert result.passed

    def test_to_dict(self):
        """Test converting to dictionary."""
        result = TestResult("A/t1", TestStatus.FAILED, "boom", 12)
        assert result.to_dict() == {
            "qualified_path": "A/t1",
            "status": "failed",
            "description": "boom",
            "duration_ms": 12,
        }


class TestRunSummary:
    """Tests for RunSummary."""

    def test_successful(self):
        """Test the exit condition."""
        assert RunSummary(total=3, passed=3).successful
        assert not RunSummary(total=3, passed=2).successful
        assert RunSummary().successful

    def test_failed_count(self):
        """Test the derived failure count."""
        assert RunSummary(total=5, passed=2).failed == 3


class TestResultAggregator:
    """Tests for ResultAggregator."""

    def test_counts(self):
        """Test counting dispatched and passed tests."""
        aggregator = ResultAggregator()
        for _ in range(3):
            aggregator.record_dispatched()

        aggregator.record(TestResult("A/t1", TestStatus.PASSED))
        aggregator.record(TestResult("A/t2", TestStatus.CRASHED))
        aggregator.record(TestResult("A/t3", TestStatus.TIMED_OUT))

        summary = aggregator.summary()
        assert summary.total == 3
        assert summary.passed == 1
        assert summary.failures == [
            (TestStatus.CRASHED, "A/t2"),
            (TestStatus.TIMED_OUT, "A/t3"),
        ]

    def test_concurrent_records(self):
        """Test that no update is lost under concurrent writers."""
        aggregator = ResultAggregator()

        def worker(index):
            for n in range(200):
                aggregator.record_dispatched()
                status = TestStatus.PASSED if n % 2 else TestStatus.FAILED
                aggregator.record(TestResult(f"S{index}/t{n}", status))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        summary = aggregator.summary()
        assert summary.total == 1600
        assert summary.passed == 800
        assert len(summary.failures) == 800
        assert len(set(summary.failures)) == 800

    def test_summary_is_a_copy(self):
        """Test that later records do not change an earlier summary."""
        aggregator = ResultAggregator()
        aggregator.record_dispatched()
        summary = aggregator.summary()

        aggregator.record(TestResult("A/t1", TestStatus.FAILED))
        assert summary.failures == []
