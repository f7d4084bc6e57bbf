"""Name filter deciding which suites and test cases belong to a run."""

from typing import Optional

from isotest.core.suite import PATH_SEPARATOR
from isotest.exceptions import InvalidFilterFormat


def _split(path: str) -> tuple[str, ...]:
    return tuple(part for part in path.split(PATH_SEPARATOR) if part)


class NameFilter:
    """Matches qualified paths against an optional filter string.

    An empty filter selects everything. A non-empty filter is either the exact
    qualified path of one test case or the path of a suite, in which case every
    test below that suite is selected. Paths are compared component-wise, so
    ``A/B`` does not select suite ``A/BC``.
    """

    def __init__(self, test_filter: str = ""):
        self.text = test_filter
        self._parts = _split(test_filter)

    @classmethod
    def parse(cls, test_filter: Optional[str]) -> "NameFilter":
        """Build a filter, rejecting non-empty filters without a separator."""
        test_filter = test_filter or ""
        if test_filter and PATH_SEPARATOR not in test_filter:
            raise InvalidFilterFormat(test_filter)
        return cls(test_filter)

    @property
    def is_empty(self) -> bool:
        return not self._parts

    def in_scope(self, suite_path: str) -> bool:
        """Whether a suite has to be visited.

        True for ancestors of the filtered path (so the walk can reach it) and
        for the filtered suite and its descendants.
        """
        if self.is_empty:
            return True
        parts = _split(suite_path)
        depth = min(len(parts), len(self._parts))
        return parts[:depth] == self._parts[:depth]

    def matches_test(self, qualified_path: str) -> bool:
        """Whether a test case is selected by this filter."""
        if self.is_empty:
            return True
        parts = _split(qualified_path)
        return parts[: len(self._parts)] == self._parts

    def is_exact_match(self, qualified_path: str) -> bool:
        """Whether the filter names exactly this test case."""
        return not self.is_empty and _split(qualified_path) == self._parts

    def __repr__(self) -> str:
        return f"NameFilter({self.text!r})"
