"""Exceptions raised by isotest and by test bodies."""


class TestFailure(Exception):
    """Raised by a test body to report a failed expectation.

    Caught at the in-process execution boundary and turned into a
    ``Failed`` result whose description points at the raising line.
    """

    __test__ = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFilterFormat(ValueError):
    """Raised when a non-empty test filter contains no ``/`` separator."""

    def __init__(self, test_filter: str):
        super().__init__(
            f"invalid test name format `{test_filter}` - proper format is `suite(s)/testcase`"
        )
        self.test_filter = test_filter


class InvalidNameError(ValueError):
    """Raised when a suite or test case name cannot be used in a qualified path."""

    pass
