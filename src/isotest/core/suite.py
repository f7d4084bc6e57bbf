"""Suite tree data model."""

from dataclasses import dataclass, field
from typing import Callable, Sequence

from isotest.exceptions import InvalidNameError

PATH_SEPARATOR = "/"


def validate_name(name: str) -> str:
    """Check that a suite or test case name can be joined into a qualified path."""
    if not name:
        raise InvalidNameError("Name cannot be empty")
    if PATH_SEPARATOR in name:
        raise InvalidNameError(f"Name must not contain '{PATH_SEPARATOR}': {name!r}")
    return name


def join_path(*parts: str) -> str:
    """Join path components into a qualified path."""
    return PATH_SEPARATOR.join(parts)


@dataclass(frozen=True)
class Testcase:
    """A single named test body."""

    __test__ = False

    name: str
    body: Callable[[], None] = field(compare=False)

    def __post_init__(self) -> None:
        validate_name(self.name)

    def __call__(self) -> None:
        self.body()


@dataclass(frozen=True)
class Suite:
    """A named group of child suites and test cases.

    Child sequences are stored as tuples so a suite cannot change while a run
    is walking it.
    """

    name: str
    suites: Sequence["Suite"] = ()
    tests: Sequence[Testcase] = ()

    def __post_init__(self) -> None:
        validate_name(self.name)
        object.__setattr__(self, "suites", tuple(self.suites))
        object.__setattr__(self, "tests", tuple(self.tests))

    def __iter__(self):
        return iter(self.tests)
